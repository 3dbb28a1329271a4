"""Slot classifiers: bucket continuous dive attributes into fixed labels."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

import yaml

_SLOT_TABLES: dict[str, SlotTable] | None = None
_DEFINITIONS_PATH = Path(__file__).parent / "slot_definitions.yaml"


@dataclass(frozen=True)
class SlotTable:
    """Ordered half-open thresholds (value < bound) for one attribute."""

    name: str
    unit: str
    thresholds: tuple[tuple[float, str], ...]
    overflow_label: str
    unknown_label: str | None = None  # used for a value of exactly 0

    def classify(self, value: float) -> str:
        if self.unknown_label is not None and value == 0:
            return self.unknown_label
        for bound, label in self.thresholds:
            if value < bound:
                return label
        return self.overflow_label

    @property
    def labels(self) -> list[str]:
        labels = [label for _, label in self.thresholds] + [self.overflow_label]
        if self.unknown_label is not None:
            labels.insert(0, self.unknown_label)
        return labels


def _load_slot_tables() -> dict[str, SlotTable]:
    global _SLOT_TABLES
    if _SLOT_TABLES is not None:
        return _SLOT_TABLES

    with open(_DEFINITIONS_PATH) as f:
        raw = yaml.safe_load(f)

    tables = {}
    for name, entry in raw.items():
        bounds = [float(bound) for bound, _ in entry["thresholds"]]
        if bounds != sorted(bounds):
            raise ValueError(f"Slot table {name!r} thresholds are not in ascending order")
        tables[name] = SlotTable(
            name=name,
            unit=entry.get("unit", ""),
            thresholds=tuple((float(bound), str(label)) for bound, label in entry["thresholds"]),
            overflow_label=str(entry["overflow_label"]),
            unknown_label=entry.get("unknown_label"),
        )
    _SLOT_TABLES = tables
    return _SLOT_TABLES


def get_slot_table(name: str) -> SlotTable:
    tables = _load_slot_tables()
    if name not in tables:
        raise KeyError(f"Unknown slot table: {name}")
    return tables[name]


def get_slot_labels(name: str) -> list[str]:
    """Return every label of a slot table, unknown first."""
    return get_slot_table(name).labels


def get_all_slot_tables() -> dict[str, SlotTable]:
    return dict(_load_slot_tables())


def duration_to_slot(duration: timedelta) -> str:
    return get_slot_table("duration").classify(duration.total_seconds() / 60)


def max_depth_to_slot(depth: float) -> str:
    return get_slot_table("max_depth").classify(depth)


def mean_depth_to_slot(depth: float) -> str:
    return get_slot_table("mean_depth").classify(depth)


def temperature_to_slot(temperature: float) -> str:
    return get_slot_table("temperature").classify(temperature)
