"""Occurrence counters with first/last elapsed time, and their table rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

import click
import pandas as pd

from ssrfstats.config import TABLE_HEADERS

logger = logging.getLogger(__name__)


@dataclass
class StatEntry:
    """Occurrences of one label.

    since_last is the smallest elapsed time seen (the most recent occurrence),
    since_first the largest (the earliest occurrence).
    """

    name: str
    count: int
    since_last: timedelta
    since_first: timedelta


_SORT_FIELDS = {
    "name": lambda e: e.name,
    "count": lambda e: e.count,
    "sinceFirst": lambda e: e.since_first,
    "sinceLast": lambda e: e.since_last,
}


def format_days(duration: timedelta) -> str:
    """Whole days, rounded, e.g. 36 hours -> "2"."""
    return f"{duration.total_seconds() / 3600 / 24:.0f}"


class LastCounterStats:
    """Per-label occurrence counts for one category."""

    def __init__(self) -> None:
        self._entries: dict[str, StatEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> StatEntry:
        return self._entries[name]

    def names(self) -> list[str]:
        return list(self._entries)

    def add(self, name: str, time_since: timedelta) -> None:
        entry = self._entries.get(name)
        if entry is None:
            self._entries[name] = StatEntry(name, 1, time_since, time_since)
            return
        entry.count += 1
        if time_since < entry.since_last:
            entry.since_last = time_since
        if time_since > entry.since_first:
            entry.since_first = time_since

    def sorted_entries(self, sort_by: str) -> list[StatEntry]:
        """Entries in ascending order of sort_by.

        An unrecognised key logs a warning and keeps first-seen order.
        """
        entries = list(self._entries.values())
        key = _SORT_FIELDS.get(sort_by)
        if key is None:
            logger.warning("Invalid sort flag %s. Showing entries in unsorted order.", sort_by)
            return entries
        return sorted(entries, key=key)

    def to_dataframe(self, sort_by: str) -> pd.DataFrame:
        rows = [
            (rank, e.name, e.count, format_days(e.since_last), format_days(e.since_first))
            for rank, e in enumerate(self.sorted_entries(sort_by), start=1)
        ]
        return pd.DataFrame(rows, columns=list(TABLE_HEADERS))

    def render(self, sort_by: str) -> str:
        df = self.to_dataframe(sort_by)
        return f"{df.to_string(index=False)}\nTotal {len(self)}"

    def print_stats(self, sort_by: str) -> None:
        click.echo(self.render(sort_by))
