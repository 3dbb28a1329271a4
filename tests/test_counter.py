"""Tests for occurrence counters and table rendering."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from ssrfstats.stats.counter import LastCounterStats, format_days


@pytest.fixture
def stats():
    s = LastCounterStats()
    s.add("P2", timedelta(days=40))
    s.add("P1", timedelta(days=3))
    s.add("P2", timedelta(days=10))
    s.add("hypo tmx", timedelta(days=200))
    s.add("P2", timedelta(days=25))
    return s


class TestAdd:
    def test_first_occurrence(self):
        s = LastCounterStats()
        s.add("x", timedelta(days=5))
        entry = s["x"]
        assert entry.count == 1
        assert entry.since_last == entry.since_first == timedelta(days=5)

    def test_min_and_max_elapsed(self):
        s = LastCounterStats()
        for days in (5, 2, 9):
            s.add("x", timedelta(days=days))
        entry = s["x"]
        assert entry.count == 3
        assert entry.since_last == timedelta(days=2)
        assert entry.since_first == timedelta(days=9)

    def test_labels_are_independent(self, stats):
        assert len(stats) == 3
        assert stats["P2"].count == 3
        assert stats["P1"].count == 1
        assert "nmx tmx" not in stats


class TestSorting:
    def test_by_name(self, stats):
        assert [e.name for e in stats.sorted_entries("name")] == ["P1", "P2", "hypo tmx"]

    def test_by_count(self, stats):
        assert [e.name for e in stats.sorted_entries("count")][-1] == "P2"

    def test_by_since_first(self, stats):
        assert [e.name for e in stats.sorted_entries("sinceFirst")] == ["P1", "P2", "hypo tmx"]

    def test_by_since_last(self, stats):
        assert [e.name for e in stats.sorted_entries("sinceLast")] == ["P1", "P2", "hypo tmx"]

    def test_invalid_key_keeps_first_seen_order(self, stats, caplog):
        with caplog.at_level(logging.WARNING):
            entries = stats.sorted_entries("depth")
        assert [e.name for e in entries] == ["P2", "P1", "hypo tmx"]
        assert "Invalid sort flag depth" in caplog.text


class TestRender:
    def test_format_days_rounds(self):
        assert format_days(timedelta(hours=36, minutes=1)) == "2"
        assert format_days(timedelta(hours=11)) == "0"
        assert format_days(timedelta(days=193)) == "193"

    def test_dataframe(self, stats):
        df = stats.to_dataframe("name")
        assert list(df.columns) == ["#", "Name", "Count", "Last (days ago)", "First (days ago)"]
        assert list(df["#"]) == [1, 2, 3]
        p2 = df[df["Name"] == "P2"].iloc[0]
        assert p2["Count"] == 3
        assert p2["Last (days ago)"] == "10"
        assert p2["First (days ago)"] == "40"

    def test_render_total(self, stats):
        text = stats.render("count")
        assert text.splitlines()[-1] == "Total 3"
        assert "hypo tmx" in text

    def test_print_stats(self, stats, capsys):
        stats.print_stats("name")
        out = capsys.readouterr().out
        assert "Total 3" in out
        assert out.index("P1") < out.index("hypo tmx")
