"""Paths, constants, and configuration."""

from __future__ import annotations

from pathlib import Path

# Default input export
DEFAULT_FILENAME = Path("filename.ssrf")

# Report sorting
DEFAULT_SORT = "count"
SORT_KEYS = ("name", "count", "sinceFirst", "sinceLast")

# Label used when a dive references a site missing from <divesites>
UNKNOWN_DIVE_SITE = "unknown"

# Process exit codes
EXIT_FILE_ERROR = 2
EXIT_PARSE_ERROR = 3

# Report table columns
TABLE_HEADERS = ("#", "Name", "Count", "Last (days ago)", "First (days ago)")
