"""Theme colors for chart output (light and dark)."""

from __future__ import annotations

from enum import Enum
from typing import Union

# Line colors assigned to datasets without an explicit color, in order.
DEFAULT_COLORS: tuple[str, ...] = (
    "#4f46e5",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#06b6d4",
    "#ec4899",
    "#14b8a6",
    "#f97316",
    "#8b5cf6",
)


class ThemeMode(str, Enum):
    """UI theme mode."""

    DARK = "dark"
    LIGHT = "light"


def resolve_theme(theme: Union[str, ThemeMode, None]) -> ThemeMode:
    """Convert str to ThemeMode. Default to LIGHT."""
    if isinstance(theme, ThemeMode):
        return theme
    s = str(theme).lower()
    if s in ("dark", "plotly_dark"):
        return ThemeMode.DARK
    return ThemeMode.LIGHT


def get_theme_colors(theme: ThemeMode) -> tuple[str, str]:
    """Get background and foreground colors for a theme."""
    if theme is ThemeMode.DARK:
        return "#1e293b", "#cbd5e1"
    return "#ffffff", "#6b7280"


def get_grid_color(theme: ThemeMode) -> str:
    if theme is ThemeMode.DARK:
        return "#334155"
    return "#e5e7eb"


def get_band_color(theme: ThemeMode) -> str:
    """Fill for shaded month bands."""
    if theme is ThemeMode.DARK:
        return "rgba(255,255,255,0.04)"
    return "rgba(15,23,42,0.04)"


def get_theme_template(theme: ThemeMode) -> str:
    """Get Plotly template name for a theme."""
    if theme is ThemeMode.DARK:
        return "plotly_dark"
    return "plotly_white"


def dataset_color(index: int) -> str:
    return DEFAULT_COLORS[index % len(DEFAULT_COLORS)]
