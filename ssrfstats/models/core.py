"""Core data models for a Subsurface dive log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Iterator


@dataclass
class DiveSite:
    """A dive site from the <divesites> section."""

    uuid: str  # e.g. "  4a6bd1c3", whitespace is trimmed on lookup
    name: str
    gps: str = ""
    description: str = ""
    notes: str = ""


@dataclass
class Cylinder:
    """A cylinder used on a dive."""

    size: str  # e.g. "12.0 l"
    work_pressure: str = ""
    description: str = ""
    o2: str = ""
    he: str = ""
    start: str = ""
    end: str = ""
    depth: str = ""


@dataclass
class DiveComputer:
    """Readings imported from a dive computer (0 means not recorded)."""

    model: str = ""
    max_depth: float = 0.0  # m
    mean_depth: float = 0.0  # m
    water_temperature: float = 0.0  # C


@dataclass
class Dive:
    """A single logged dive."""

    number: str = ""
    dive_date: date | None = None
    dive_time: time | None = None
    raw_duration: str = ""  # e.g. "45:30 min"
    buddy: str = ""  # comma-separated names
    cylinders: list[Cylinder] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    dive_site_id: str = ""
    invalid: str = ""
    dive_computer: DiveComputer = field(default_factory=DiveComputer)

    @property
    def is_invalid(self) -> bool:
        return self.invalid == "1"

    @property
    def started_at(self) -> datetime:
        """Logged start of the dive; a dive without a date sits at datetime.min."""
        day = self.dive_date or datetime.min.date()
        return datetime.combine(day, self.dive_time or time())

    def time_since(self, now: datetime) -> timedelta:
        return now - self.started_at

    def buddy_list(self) -> list[str]:
        """Buddy names, split on commas and stripped of spaces.

        A dive without a buddy gives a single empty name.
        """
        return [name.strip(" ") for name in self.buddy.split(",")]

    @property
    def duration(self) -> timedelta:
        """Parsed "M:SS min" duration, zero when the value has another shape."""
        if not self.raw_duration.endswith(" min"):
            return timedelta(0)
        clock = self.raw_duration.split(" ")[0]
        minutes_part, _, seconds_part = clock.partition(":")
        try:
            seconds = int(seconds_part)
        except ValueError:
            seconds = 0
        try:
            minutes = int(minutes_part)
        except ValueError:
            minutes = 0
        return timedelta(minutes=minutes, seconds=seconds)


@dataclass
class Trip:
    """A named group of dives."""

    time: str = ""
    location: str = ""
    dives: list[Dive] = field(default_factory=list)


@dataclass
class DiveLog:
    """Top-level contents of an .ssrf export."""

    sites: list[DiveSite] = field(default_factory=list)
    dives: list[Dive] = field(default_factory=list)
    trips: list[Trip] = field(default_factory=list)

    def iter_dives(self) -> Iterator[Dive]:
        """Yield dives inside trips first, then the dives outside any trip."""
        for trip in self.trips:
            yield from trip.dives
        yield from self.dives

    @property
    def dive_count(self) -> int:
        return sum(len(t.dives) for t in self.trips) + len(self.dives)

    def summary(self) -> str:
        return f"Dive log: {len(self.sites)} sites, {len(self.trips)} trips, {self.dive_count} dives"
