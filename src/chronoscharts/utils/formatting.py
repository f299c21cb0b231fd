"""Display formatting for axis labels, tooltips and series summaries.

These helpers turn engine numbers into short strings. They are locale
independent: thousands are separated with ',' and at most two decimals are
shown.
"""

from __future__ import annotations

from datetime import datetime

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def format_number(value: float, max_decimals: int = 2) -> str:
    """Format a number with thousands separators and trimmed trailing zeros."""
    text = f"{value:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_value(value: float) -> str:
    """Format an axis value, abbreviating thousands (K) and millions (M).

    Examples: 12.346 -> '12.35', 1500 -> '1.5K', 2000000 -> '2M'.
    """
    rounded = round(float(value) * 1e10) / 1e10
    if abs(rounded) >= 1_000_000:
        return format_number(rounded / 1_000_000, 1) + "M"
    if abs(rounded) >= 1_000:
        return format_number(rounded / 1_000, 1) + "K"
    return format_number(rounded, 2)


def format_duration(seconds: float, is_tick: bool = False) -> str:
    """Format a number of seconds as '1d 2h 3m 4s'.

    Args:
        seconds: Duration in seconds. Fractions are truncated.
        is_tick: If True, only the largest non-zero unit is shown (axis ticks).

    Returns:
        Human readable duration. Zero is rendered as '0s'.
    """
    if seconds == 0:
        return "0s"
    total = int(seconds)
    d, rem = divmod(total, SECONDS_PER_DAY)
    h, rem = divmod(rem, SECONDS_PER_HOUR)
    m, s = divmod(rem, SECONDS_PER_MINUTE)

    if is_tick:
        if d > 0:
            return f"{d}d"
        if h > 0:
            return f"{h}h"
        if m > 0:
            return f"{m}m"
        return f"{s}s"

    parts: list[str] = []
    if d > 0:
        parts.append(f"{d}d")
    if h > 0:
        parts.append(f"{h}h")
    if m > 0:
        parts.append(f"{m}m")
    if s > 0 or not parts:
        parts.append(f"{s}s")
    return " ".join(parts)


def format_date_label(ts: datetime, span_days: float) -> str:
    """Format a time-axis label with a granularity suited to the visible span.

    - span <= 7 days:   weekday and time ('Mon 14:30')
    - span <= 90 days:  month and day ('Mar 5')
    - span <= 365 days: month, plus the year on the first of a month
    - otherwise:        month and year ('Mar 2024')
    """
    if span_days <= 7:
        return f"{ts:%a %H:%M}"
    if span_days <= 90:
        return f"{ts:%b} {ts.day}"
    if span_days <= 365:
        if ts.day == 1:
            return f"{ts:%b %Y}"
        return f"{ts:%b}"
    return f"{ts:%b %Y}"
