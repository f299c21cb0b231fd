# tests/chart/conftest.py
"""Fixtures for chart geometry tests."""
from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure chronoscharts package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def ten_day_dataset():
    """One dataset with a point per day over 2024-01-01 .. 2024-01-11, y = day index."""
    from chronoscharts.types import Dataset, Point

    start = datetime(2024, 1, 1)
    points = tuple(Point(x=start + timedelta(days=i), y=float(i)) for i in range(11))
    return Dataset(label="ten days", points=points)


@pytest.fixture
def half_year_dataset():
    """Weekly points over the first half of 2024 (calendar ticks apply)."""
    from chronoscharts.types import Dataset, Point

    start = datetime(2024, 1, 1)
    points = tuple(Point(x=start + timedelta(days=7 * i), y=10.0 + i) for i in range(26))
    return Dataset(label="weekly", points=points, color="#123456")


@pytest.fixture
def daily_entries_chart():
    """Five entries one per day, values 1..5."""
    from chronoscharts.analytics.entries import Entry

    return [Entry(timestamp=datetime(2024, 1, i, 9), value=float(i)) for i in range(1, 6)]
