"""Data models for dive sites, dives, trips, and cylinders."""

from ssrfstats.models.core import Cylinder, Dive, DiveComputer, DiveLog, DiveSite, Trip

__all__ = [
    "DiveSite",
    "Cylinder",
    "DiveComputer",
    "Dive",
    "Trip",
    "DiveLog",
]
