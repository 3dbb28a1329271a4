"""Shared fixtures for ssrfstats tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def sample_ssrf_path():
    return FIXTURES_DIR / "sample.ssrf"


@pytest.fixture
def report_time():
    """Report moment for the sample log: exactly 31 days after dive #1."""
    return datetime(2023, 6, 1, 9, 0, 0)
