"""
Axis tick generation.

Value axes use "nice" steps (1, 2, 5 or 10 times a power of ten) so
gridlines land on round numbers; log axes enumerate {1, 2, 5} x 10^k.
Time axes use first-of-month ticks when the visible span is between 90 and
365 days and evenly spaced instants otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

import pandas as pd

DEFAULT_VALUE_TICK_COUNT = 6
DEFAULT_TIME_TICK_COUNT = 8

# Visible spans (days) for which first-of-month ticks are used: (min, max].
CALENDAR_TICK_MIN_DAYS = 90
CALENDAR_TICK_MAX_DAYS = 365

LOG_MULTIPLIERS = (1, 2, 5)

# Relative tolerance when comparing enumerated tick values to data bounds.
_REL_EPS = 1e-9

# Smallest step, relative to the axis magnitude, that still yields distinct
# rounded ticks; narrower spans are widened like a zero-width range.
_MIN_REL_STEP = 1e-12


# -----------------------------------------------------------------------------
# Value axes
# -----------------------------------------------------------------------------


def expand_degenerate(value: float) -> tuple[float, float]:
    """Widen a zero-width range around `value` (+-10% when positive, +-1 otherwise)."""
    if value > 0:
        return value * 0.9, value * 1.1
    return value - 1.0, value + 1.0


def nice_step(min_value: float, max_value: float, count: int = DEFAULT_VALUE_TICK_COUNT) -> float:
    """
    Round step size for roughly `count` ticks over [min_value, max_value].

    raw = (max - min) / (count - 1) is normalized by its power of ten and
    snapped to 1 (< 1.5), 2 (< 3), 5 (< 7) or 10.
    Returns 0 for an empty or non-finite span.
    """
    count = max(2, int(count))
    raw_step = (max_value - min_value) / (count - 1)
    if not math.isfinite(raw_step) or raw_step <= 0:
        return 0.0
    magnitude = 10.0 ** math.floor(math.log10(raw_step))
    normalized = raw_step / magnitude
    if normalized < 1.5:
        multiplier = 1
    elif normalized < 3:
        multiplier = 2
    elif normalized < 7:
        multiplier = 5
    else:
        multiplier = 10
    return multiplier * magnitude


def _step_decimals(step: float) -> int:
    return max(0, -math.floor(math.log10(step)))


def linear_ticks(
    min_value: float,
    max_value: float,
    count: int = DEFAULT_VALUE_TICK_COUNT,
) -> list[float]:
    """
    Nice ticks covering [min_value, max_value].

    The first tick is floor(min / step) * step and the last is
    ceil(max / step) * step, so the ticks always bound the data. Ticks are
    computed from integer multiples of the step (no accumulated drift).
    """
    if max_value < min_value:
        min_value, max_value = max_value, min_value
    if max_value == min_value:
        min_value, max_value = expand_degenerate(min_value)

    step = nice_step(min_value, max_value, count)
    if step <= 0:
        return []
    if step < max(abs(min_value), abs(max_value)) * _MIN_REL_STEP:
        min_value, max_value = expand_degenerate((min_value + max_value) / 2)
        step = nice_step(min_value, max_value, count)
    decimals = _step_decimals(step)

    lo = math.floor(min_value / step)
    hi = math.ceil(max_value / step)
    if round(lo * step, decimals) > min_value:
        lo -= 1
    if round(hi * step, decimals) < max_value:
        hi += 1
    ticks = [round(i * step, decimals) + 0.0 for i in range(lo, hi + 1)]
    return list(dict.fromkeys(ticks))


def _pow10_multiple(multiplier: int, exponent: int) -> float:
    if exponent >= 0:
        return float(multiplier * 10**exponent)
    return multiplier / float(10 ** (-exponent))


def log_ticks(min_value: float, max_value: float) -> list[float]:
    """
    Enumerate {1, 2, 5} x 10^k for k in [floor(log10 min), ceil(log10 max)],
    keeping values inside [min_value, max_value]. Ascending, no duplicates.

    Non-positive bounds yield an empty list.
    """
    if min_value <= 0 or max_value <= 0:
        return []
    if max_value < min_value:
        min_value, max_value = max_value, min_value

    k_lo = math.floor(math.log10(min_value))
    k_hi = math.ceil(math.log10(max_value))
    lower = min_value * (1 - _REL_EPS)
    upper = max_value * (1 + _REL_EPS)

    ticks: set[float] = set()
    for k in range(k_lo, k_hi + 1):
        for m in LOG_MULTIPLIERS:
            v = _pow10_multiple(m, k)
            if lower <= v <= upper:
                ticks.add(v)
    return sorted(ticks)


def nice_log_bounds(min_value: float, max_value: float) -> tuple[float, float]:
    """
    Nearest {1, 2, 5} x 10^k values bracketing a positive range.

    Returns (lo, hi) with lo <= min_value and hi >= max_value.
    """
    k_lo = math.floor(math.log10(min_value))
    below = [
        _pow10_multiple(m, k)
        for k in (k_lo - 1, k_lo, k_lo + 1)
        for m in LOG_MULTIPLIERS
    ]
    lo = max(v for v in below if v <= min_value * (1 + _REL_EPS))

    k_hi = math.floor(math.log10(max_value))
    above = [
        _pow10_multiple(m, k)
        for k in (k_hi, k_hi + 1)
        for m in LOG_MULTIPLIERS
    ]
    hi = min(v for v in above if v >= max_value * (1 - _REL_EPS))
    return lo, hi


def value_ticks(
    values: Iterable[float],
    count: int = DEFAULT_VALUE_TICK_COUNT,
    log_scale: bool = False,
) -> list[float]:
    """
    Ticks for a value axis.

    Linear: nice ticks over the data range (zero-width ranges are widened).
    Log: {1, 2, 5} x 10^k ticks over the nice bounds of the positive values;
    falls back to linear ticks when no value is positive.
    Empty input yields an empty list.
    """
    finite = [float(v) for v in values if v is not None and math.isfinite(v)]
    if not finite:
        return []

    if log_scale:
        positive = [v for v in finite if v > 0]
        if positive:
            lo, hi = min(positive), max(positive)
            if lo == hi:
                lo, hi = expand_degenerate(lo)
            return log_ticks(*nice_log_bounds(lo, hi))

    lo, hi = min(finite), max(finite)
    if lo == hi:
        lo, hi = expand_degenerate(lo)
    return linear_ticks(lo, hi, count)


# -----------------------------------------------------------------------------
# Time axes
# -----------------------------------------------------------------------------


def uses_calendar_ticks(span_days: float) -> bool:
    """True when a visible span should get first-of-month ticks."""
    return CALENDAR_TICK_MIN_DAYS < span_days <= CALENDAR_TICK_MAX_DAYS


def month_start(ts: datetime) -> datetime:
    return datetime(ts.year, ts.month, 1)


def month_ticks(start: datetime, end: datetime) -> list[datetime]:
    """First-of-month instants from start's month through end, inclusive."""
    if end < start:
        return []
    stamps = pd.date_range(month_start(start), end, freq="MS")
    return [ts.to_pydatetime() for ts in stamps]


def month_index(ts: datetime) -> int:
    """Months since year 0; consecutive months differ by one."""
    return ts.year * 12 + (ts.month - 1)


def even_time_ticks(
    start: datetime,
    end: datetime,
    count: int = DEFAULT_TIME_TICK_COUNT,
) -> list[datetime]:
    """`count` evenly spaced instants from start to end inclusive."""
    if count < 2 or end <= start:
        return [start]
    span = end - start
    return [start + span * (i / (count - 1)) for i in range(count)]


@dataclass(frozen=True)
class MonthBand:
    """Background band for one calendar month."""

    start: datetime
    end: datetime
    shaded: bool


def month_bands(ticks: Sequence[datetime], dataset_start: datetime) -> list[MonthBand]:
    """
    Alternating month bands for first-of-month ticks.

    Shading is keyed on month parity relative to the first month of the whole
    dataset (not the visible window), so bands stay put while panning: the
    dataset's first month is unshaded, the next shaded, and so on.
    """
    base = month_index(dataset_start)
    bands: list[MonthBand] = []
    for i, tick in enumerate(ticks):
        if i + 1 < len(ticks):
            end = ticks[i + 1]
        else:
            end = (pd.Timestamp(tick) + pd.DateOffset(months=1)).to_pydatetime()
        bands.append(MonthBand(start=tick, end=end, shaded=(month_index(tick) - base) % 2 == 1))
    return bands
