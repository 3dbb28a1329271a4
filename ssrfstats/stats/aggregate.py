"""Per-dive aggregation into category counters."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable

import click
from tqdm import tqdm

from ssrfstats.classify.slots import duration_to_slot, max_depth_to_slot, mean_depth_to_slot, temperature_to_slot
from ssrfstats.config import UNKNOWN_DIVE_SITE
from ssrfstats.models.core import Dive, DiveSite
from ssrfstats.stats.counter import LastCounterStats

logger = logging.getLogger(__name__)


class StatType(Enum):
    DIVE_LENGTH = "Dive length"
    BUDDIES = "Buddies"
    CYLINDERS = "Cylinders"
    MEAN_DEPTH = "Mean depth"
    MAX_DEPTH = "Max depth"
    TEMPERATURE = "Temperature"
    DIVE_SITE = "Dive site"
    TAGS = "Tags"


class DiveSiteIndex:
    """Read-only lookup from dive site UUID to site name."""

    def __init__(self, sites: Iterable[DiveSite] = ()) -> None:
        self._names: dict[str, str] = {}
        for site in sites:
            self._names[site.uuid.strip()] = site.name

    def __len__(self) -> int:
        return len(self._names)

    def fetch_by_id(self, site_id: str) -> str:
        return self._names.get(site_id, UNKNOWN_DIVE_SITE)


class StatsContainer:
    """One LastCounterStats per category, created on first use."""

    def __init__(self) -> None:
        self._stats: dict[StatType, LastCounterStats] = {}

    def __getitem__(self, stat_type: StatType) -> LastCounterStats:
        return self._stats[stat_type]

    def add(self, stat_type: StatType, name: str, time_since: timedelta) -> None:
        if stat_type not in self._stats:
            self._stats[stat_type] = LastCounterStats()
        self._stats[stat_type].add(name, time_since)

    def categories(self) -> list[StatType]:
        """Populated categories in StatType order."""
        return [t for t in StatType if t in self._stats]

    def print_report(self, sort_by: str) -> None:
        for stat_type in self.categories():
            click.echo(f"\n{stat_type.value}")
            self._stats[stat_type].print_stats(sort_by)


def process_dive(dive: Dive, container: StatsContainer, sites: DiveSiteIndex, now: datetime) -> None:
    """Add one dive to every category. Invalid dives are skipped entirely."""
    if dive.is_invalid:
        logger.debug("Skipping invalid dive #%s", dive.number)
        return

    time_since = dive.time_since(now)
    for buddy in dive.buddy_list():
        container.add(StatType.BUDDIES, buddy, time_since)

    # Subsurface sometimes duplicates cylinders; stages of the same size collapse too
    seen_sizes: set[str] = set()
    for cylinder in dive.cylinders:
        if cylinder.size in seen_sizes:
            continue
        seen_sizes.add(cylinder.size)
        container.add(StatType.CYLINDERS, cylinder.size, time_since)

    computer = dive.dive_computer
    container.add(StatType.DIVE_LENGTH, duration_to_slot(dive.duration), time_since)
    container.add(StatType.MEAN_DEPTH, mean_depth_to_slot(computer.mean_depth), time_since)
    container.add(StatType.MAX_DEPTH, max_depth_to_slot(computer.max_depth), time_since)
    container.add(StatType.TEMPERATURE, temperature_to_slot(computer.water_temperature), time_since)
    container.add(StatType.DIVE_SITE, sites.fetch_by_id(dive.dive_site_id.strip()), time_since)
    for tag in dive.tags:
        container.add(StatType.TAGS, tag, time_since)


def aggregate_dives(
    dives: Iterable[Dive],
    sites: DiveSiteIndex,
    now: datetime | None = None,
    progress: bool = False,
) -> StatsContainer:
    """Run every dive of the stream through process_dive."""
    now = now or datetime.now()
    container = StatsContainer()
    processed = 0
    for dive in tqdm(dives, desc="Aggregating dives", unit="dive", disable=not progress):
        process_dive(dive, container, sites, now)
        processed += 1
    logger.info("Aggregated %d dives into %d categories", processed, len(container.categories()))
    return container
