"""Value types shared between the analytics and chart layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

XValue = Union[datetime, str, float]


@dataclass(frozen=True)
class Point:
    """One plotted observation: x is a time-axis value, y a number."""

    x: XValue
    y: float

    def to_dict(self) -> dict[str, Any]:
        x = self.x.isoformat() if isinstance(self.x, datetime) else self.x
        return {"x": x, "y": self.y}


@dataclass(frozen=True)
class Dataset:
    """A named line on a chart plus its stroke styling."""

    label: str
    points: tuple[Point, ...] = field(default_factory=tuple)
    color: Optional[str] = None
    line_width: float = 2.0
    dash: tuple[float, ...] = ()
    tension: Optional[float] = None  # None -> use ChartOptions.tension
    hide_points: bool = False

    def __len__(self) -> int:
        return len(self.points)
