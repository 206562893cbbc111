"""
Drag-delta overlay: measure the percent change between two points by dragging.

A drag over the chart starts at an *anchor* point and follows the pointer to
a *current* point. While the drag is active the normal point tooltip is
replaced by the covered date range and the percent change from anchor to
current. Releasing the pointer restores the normal tooltip.

The overlay is a two-state machine::

    IDLE --start (point resolved)--> DRAGGING
    DRAGGING --move--> DRAGGING
    DRAGGING --end--> IDLE

Pointer positions that do not resolve to a plotted point (empty series,
pointer off the plot) are ignored, never raised.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import Optional

from loguru import logger

from config import DATE_FORMAT
from core.series import PricePoint
from core.surface import PointerEvent, SeriesSurface

_CENT = Decimal("0.01")
# largest float is ~1.8e308; 309 integer digits plus 2 decimals
_QUANTIZE_PRECISION = 320


class GesturePhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class GestureState:
    """Anchor of the drag in progress; ``anchor`` only means something while ``active``."""

    anchor: Optional[PricePoint] = None
    active: bool = False

    @property
    def phase(self) -> GesturePhase:
        return GesturePhase.DRAGGING if self.active else GesturePhase.IDLE


IDLE_STATE = GestureState()


@dataclass(frozen=True)
class DeltaResult:
    """Percent change between two points and the dates they span (start <= end)."""

    percent: float
    range_start: date
    range_end: date

    def format_range(self, date_format: str = DATE_FORMAT) -> str:
        return f"{self.range_start.strftime(date_format)} - {self.range_end.strftime(date_format)}"


def round2(value: float) -> float:
    """Round half-up on the exact binary value, like a JavaScript ``toFixed(2)`` readout."""
    if not math.isfinite(value):
        return 0.0
    # enough digits to quantize any finite float to cents
    with localcontext() as ctx:
        ctx.prec = _QUANTIZE_PRECISION
        rounded = float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))
    return rounded + 0.0  # fold -0.0 into 0.0


def percent_change(anchor_value: float, current_value: float) -> float:
    """Percent change from *anchor_value* to *current_value*; 0 when the anchor is 0 or the result is not finite."""
    if anchor_value == 0:
        return 0.0
    percent = ((current_value - anchor_value) / anchor_value) * 100
    if not math.isfinite(percent):
        return 0.0
    return round2(percent)


def _utc_date(timestamp_ms: int) -> date:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).date()


def compute_delta(anchor: PricePoint, current: PricePoint) -> DeltaResult:
    """Build the readout for a drag from *anchor* to *current* (either direction)."""
    first, second = sorted((anchor.timestamp, current.timestamp))
    return DeltaResult(
        percent=percent_change(anchor.value, current.value),
        range_start=_utc_date(first),
        range_end=_utc_date(second),
    )


class DragDeltaOverlay:
    """Drag-to-measure overlay bound to one chart."""

    def __init__(self, date_format: str = DATE_FORMAT):
        self.date_format = date_format
        self._state: GestureState = IDLE_STATE
        self._current: Optional[DeltaResult] = None

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def phase(self) -> GesturePhase:
        return self._state.phase

    @property
    def current(self) -> Optional[DeltaResult]:
        """Readout from the last resolved move of the active drag."""
        return self._current

    def on_gesture_start(self, event: PointerEvent, surface: SeriesSurface) -> None:
        """Anchor a new drag at the point nearest the pointer."""
        self._current = None
        anchor = surface.resolve(event)
        if anchor is None:
            self._state = IDLE_STATE
            logger.debug(f"[OVERLAY] No point under pointer at {event.x!r}; drag ignored")
            return
        self._state = GestureState(anchor=anchor, active=True)
        logger.debug(f"[OVERLAY] Drag anchored at ts={anchor.timestamp} value={anchor.value}")

    def on_gesture_move(self, event: PointerEvent, surface: SeriesSurface) -> Optional[DeltaResult]:
        """Update the readout for the pointer's new position; ``None`` if nothing to show."""
        anchor = self._state.anchor
        if not self._state.active or anchor is None:
            return None

        point = surface.resolve(event)
        if point is None:
            return None

        self._current = compute_delta(anchor, point)
        return self._current

    def on_gesture_end(self, event: Optional[PointerEvent] = None) -> None:
        """Finish the drag and restore the default tooltip."""
        if self._state == IDLE_STATE and self._current is None:
            return
        self._state = IDLE_STATE
        self._current = None

    def render_tooltip(self, default_text: str) -> str:
        """Tooltip text: the drag readout while one is showing, else *default_text*."""
        if self._current is None:
            return default_text
        return (
            f"{self._current.format_range(self.date_format)}"
            f"<br><span>Total: <b>{self._current.percent:.2f}%</b></span>"
        )
