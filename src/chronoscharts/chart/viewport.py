# chronoscharts/src/chronoscharts/chart/viewport.py

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from chronoscharts.chart.scales import TimeRange, total_days, visible_time_range
from chronoscharts.types import XValue
from chronoscharts.utils.logging import get_logger

logger = get_logger(__name__)


class PanState(str, Enum):
    """Pointer interaction state of a chart viewport."""

    IDLE = "idle"  # no pointer interaction
    READY = "ready"  # pointer hovering, panning possible
    PANNING = "panning"  # active drag


@dataclass(frozen=True)
class ViewportState:
    """Snapshot of a ViewportController.

    Invariant: 0 <= pan_offset_days <= max(0, total_domain_days - view_days).
    """

    view_days: float
    pan_offset_days: float
    total_domain_days: float
    state: PanState = PanState.IDLE

    @property
    def max_offset(self) -> float:
        return max_pan_offset(self.total_domain_days, self.view_days)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["state"] = self.state.value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ViewportState":
        return cls(
            view_days=float(data.get("view_days", 0.0)),
            pan_offset_days=float(data.get("pan_offset_days", 0.0)),
            total_domain_days=float(data.get("total_domain_days", 0.0)),
            state=PanState(data.get("state", PanState.IDLE.value)),
        )


def max_pan_offset(total_domain_days: float, view_days: float) -> float:
    """Largest allowed pan offset in days."""
    return max(0.0, total_domain_days - view_days)


class ViewportController:
    """Bounded, pannable window over a chart's full time domain.

    One controller belongs to one chart instance. The offset is measured in
    days back from the newest data point: 0 shows the most recent
    `view_days`, larger offsets show older data.

    Dragging to the right increases the offset. A full-width drag moves the
    view across the entire pannable range.
    """

    def __init__(self, view_days: float = 0.0, total_domain_days: float = 0.0) -> None:
        self._view_days = max(0.0, float(view_days))
        # view length captured at load time; drag bounds are computed from it
        self._original_view_days = self._view_days
        self._total_domain_days = max(0.0, float(total_domain_days))
        self._pan_offset_days = 0.0
        self._state = PanState.IDLE
        self._pan_start_x = 0.0
        self._pan_start_offset = 0.0

    # ------------------ properties ------------------

    @property
    def state(self) -> PanState:
        return self._state

    @property
    def view_days(self) -> float:
        return self._view_days

    @property
    def pan_offset_days(self) -> float:
        return self._pan_offset_days

    @property
    def total_domain_days(self) -> float:
        return self._total_domain_days

    @property
    def max_offset(self) -> float:
        return max_pan_offset(self._total_domain_days, self._original_view_days)

    @property
    def is_pannable(self) -> bool:
        """Panning is permitted whenever a bounded view is active."""
        return self._view_days > 0

    @property
    def is_panning(self) -> bool:
        return self._state is PanState.PANNING

    def snapshot(self) -> ViewportState:
        return ViewportState(
            view_days=self._view_days,
            pan_offset_days=self._pan_offset_days,
            total_domain_days=self._total_domain_days,
            state=self._state,
        )

    def visible_range(self, domain: TimeRange) -> TimeRange:
        """Visible window of `domain` for the current view and offset."""
        return visible_time_range(domain, self._view_days, self._pan_offset_days)

    # ------------------ data / configuration changes ------------------

    def load_data(self, total_domain_days: float) -> None:
        """New data replaces the old: offset back to 0, state back to idle."""
        self._total_domain_days = max(0.0, float(total_domain_days))
        self.reset()

    def load_values(self, values: Iterable[XValue]) -> None:
        """Like load_data(), measuring the domain from the plotted x values."""
        self.load_data(total_days(values))

    def set_view_days(self, view_days: float) -> None:
        """Change the window length; resets the offset and state."""
        self._view_days = max(0.0, float(view_days))
        self.reset()

    def reset(self) -> None:
        """Offset to 0, state to idle, drag bookkeeping cleared."""
        self._pan_offset_days = 0.0
        self._original_view_days = self._view_days
        self._state = PanState.IDLE
        self._pan_start_x = 0.0
        self._pan_start_offset = 0.0

    # ------------------ pointer interaction ------------------

    def pointer_enter(self) -> None:
        if self._state is PanState.IDLE and self.is_pannable:
            self._state = PanState.READY

    def pointer_leave(self) -> None:
        """Leaving ends an active drag (-> READY); otherwise -> IDLE."""
        if self._state is PanState.PANNING:
            self.end_pan()
        else:
            self._state = PanState.IDLE

    def begin_pan(self, pointer_x: float) -> bool:
        """Start a drag at `pointer_x`. Returns False when panning is not possible."""
        if not self.is_pannable:
            return False
        self._state = PanState.PANNING
        self._pan_start_x = float(pointer_x)
        self._pan_start_offset = self._pan_offset_days
        return True

    def drag_to(
        self,
        pointer_x: float,
        chart_width: float,
        total_domain_days: Optional[float] = None,
    ) -> float:
        """Update the offset for a pointer move during a drag.

        Args:
            pointer_x: Current pointer x in the same units as begin_pan().
            chart_width: Drawable chart width in pixels.
            total_domain_days: Current data span; when given, the pan bound is
                recomputed from it.

        Returns:
            The (clamped) pan offset in days.
        """
        if self._state is not PanState.PANNING or not self.is_pannable:
            return self._pan_offset_days
        if total_domain_days is not None:
            self._total_domain_days = max(0.0, float(total_domain_days))
        if chart_width <= 0:
            return self._pan_offset_days

        max_offset = self.max_offset
        days_per_pixel = max_offset / chart_width
        delta = float(pointer_x) - self._pan_start_x
        self._pan_offset_days = self._clamp(self._pan_start_offset + delta * days_per_pixel)
        self._view_days = self._original_view_days
        return self._pan_offset_days

    def end_pan(self) -> None:
        if self._state is not PanState.PANNING:
            return
        self._state = PanState.READY if self.is_pannable else PanState.IDLE

    def cancel_pan(self) -> None:
        """Abort a drag; the offset reached so far is kept."""
        self.end_pan()

    def pan_to(self, offset_days: float) -> float:
        """Jump to an offset (clamped). No-op without a bounded view."""
        if self.is_pannable:
            self._pan_offset_days = self._clamp(float(offset_days))
        return self._pan_offset_days

    # ------------------ internal helpers ------------------

    def _clamp(self, offset: float) -> float:
        return max(0.0, min(self.max_offset, offset))
