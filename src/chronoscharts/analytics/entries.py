"""Entry and Series records consumed by the analytics engine.

Entries are handed to the engine by the storage layer and are never mutated
here. Timestamps are naive datetimes at second precision; timezone-aware
inputs are converted to UTC wall-clock time when parsed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional

import pandas as pd


class TimestampParseError(ValueError):
    """Raised when a raw timestamp cannot be interpreted.

    The offending input is kept on ``raw_value`` so callers can report or
    skip the record. Parsing never falls back to the current time.
    """

    def __init__(self, raw_value: Any) -> None:
        self.raw_value = raw_value
        super().__init__(f"Could not parse timestamp from {raw_value!r}.")


class SeriesType(str, Enum):
    """Kind of values a series holds."""

    NUMBER = "number"
    DURATION = "duration-seconds"

    @classmethod
    def parse(cls, value: Any) -> "SeriesType":
        """Resolve a type tag; the legacy 'time' tag means durations."""
        if isinstance(value, cls):
            return value
        s = str(value).strip().lower()
        if s in ("time", "duration", cls.DURATION.value):
            return cls.DURATION
        return cls.NUMBER


def parse_timestamp(value: Any) -> datetime:
    """Parse a raw timestamp into a naive datetime truncated to seconds.

    Accepts datetime/date objects, ISO 8601 strings and epoch milliseconds.

    Raises:
        TimestampParseError: If the value cannot be interpreted.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise TimestampParseError(value)
        try:
            dt = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise TimestampParseError(value) from exc
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise TimestampParseError(value)
        try:
            ts = pd.Timestamp(text)
        except (ValueError, TypeError, OverflowError) as exc:
            raise TimestampParseError(value) from exc
        if pd.isna(ts):
            raise TimestampParseError(value)
        dt = ts.to_pydatetime()
    else:
        raise TimestampParseError(value)

    return to_naive_utc(dt).replace(microsecond=0)


def to_naive_utc(dt: datetime) -> datetime:
    """Convert an aware datetime to naive UTC wall-clock time; naive values pass through."""
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


@dataclass(frozen=True)
class Entry:
    """One timestamped observation within a series."""

    timestamp: datetime
    value: float
    series_id: Any = None
    notes: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "value": self.value,
            "seriesId": self.series_id,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Build an Entry from a storage record.

        Raises:
            TimestampParseError: If 'timestamp' is missing or unparsable.
            ValueError: If 'value' is not a finite number.
        """
        timestamp = parse_timestamp(data.get("timestamp"))
        try:
            value = float(data.get("value"))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Entry value must be numeric, got {data.get('value')!r}.") from exc
        if not math.isfinite(value):
            raise ValueError(f"Entry value must be finite, got {value!r}.")
        series_id = data.get("seriesId", data.get("series_id"))
        notes = data.get("notes")
        return cls(
            timestamp=timestamp,
            value=value,
            series_id=series_id,
            notes=str(notes) if notes else None,
        )


@dataclass(frozen=True)
class Series:
    """Series identity and type tag. Display configuration lives in the view layer."""

    id: Any
    name: str
    type: SeriesType = SeriesType.NUMBER
    group: Optional[str] = None

    @property
    def is_duration(self) -> bool:
        return self.type is SeriesType.DURATION

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Series":
        return cls(
            id=data.get("id"),
            name=str(data.get("name", "")),
            type=SeriesType.parse(data.get("type", SeriesType.NUMBER.value)),
            group=data.get("group"),
        )


def sort_chronologically(entries: Iterable[Entry]) -> list[Entry]:
    """Return entries ordered by timestamp (stable for equal timestamps)."""
    return sorted(entries, key=lambda e: e.timestamp)


def entries_frame(entries: Iterable[Entry]) -> pd.DataFrame:
    """Return entries as a DataFrame with columns timestamp, value, series_id, notes."""
    rows = [
        {"timestamp": e.timestamp, "value": e.value, "series_id": e.series_id, "notes": e.notes}
        for e in entries
    ]
    return pd.DataFrame(rows, columns=["timestamp", "value", "series_id", "notes"])
