# tests/analytics/conftest.py
"""Fixtures for analytics tests."""
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure chronoscharts package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def make_entry():
    """Factory: make_entry('2024-01-01', 10) -> Entry."""
    from chronoscharts.analytics.entries import Entry

    def _make(ts, value, **kwargs):
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)
        return Entry(timestamp=ts, value=float(value), **kwargs)

    return _make


@pytest.fixture
def daily_entries(make_entry):
    """Five entries one per day, values 1..5."""
    return [make_entry(f"2024-01-0{i}T09:00:00", i) for i in range(1, 6)]
