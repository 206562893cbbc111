"""
Chart surface: maps pointer positions on the time axis to plotted points.

This is the piece of the charting layer the drag overlay talks to: it turns a
pointer position into epoch milliseconds and finds the nearest plotted point.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, List, Optional, Sequence

import numpy as np
from loguru import logger

from core.series import PricePoint, parse_timestamp_ms


@dataclass(frozen=True)
class PointerEvent:
    """
    A pointer position along the time axis, in data coordinates.

    ``x`` may be epoch milliseconds, a ``datetime``/``pandas.Timestamp`` or a
    date string such as the ones Plotly reports in selection events.
    """

    x: Any


class SeriesSurface:
    """Nearest-point lookup over one plotted series."""

    def __init__(self, points: Sequence[PricePoint]):
        # Gaps are not drawn, so they can never be picked.
        plotted = [p for p in points if p.timestamp is not None and p.value is not None]
        # stable: equal timestamps keep their input order
        plotted.sort(key=lambda p: p.timestamp)
        self._points: List[PricePoint] = plotted
        self._timestamps = np.fromiter(
            (p.timestamp for p in plotted), dtype=np.int64, count=len(plotted)
        )

    def __len__(self) -> int:
        return len(self._points)

    @property
    def extent(self) -> Optional[tuple[int, int]]:
        """First and last plotted timestamp, or ``None`` for an empty surface."""
        if not self._points:
            return None
        return int(self._timestamps[0]), int(self._timestamps[-1])

    def normalize(self, event: PointerEvent) -> Optional[int]:
        """Convert a pointer event to epoch ms; ``None`` if unparseable or off the plot."""
        x = event.x
        if isinstance(x, Real) and not isinstance(x, bool):
            if not np.isfinite(x):
                return None
            x_ms = int(x)
        else:
            x_ms = parse_timestamp_ms(x)
        if x_ms is None:
            return None

        extent = self.extent
        if extent is None or not extent[0] <= x_ms <= extent[1]:
            return None
        return x_ms

    def search_point(self, x_ms: int) -> Optional[PricePoint]:
        """Nearest plotted point to *x_ms*; equidistant candidates resolve to the earlier one."""
        n = len(self._timestamps)
        if n == 0:
            return None

        i = int(np.searchsorted(self._timestamps, x_ms, side="left"))
        if i <= 0:
            j = 0
        elif i >= n:
            j = n - 1
        else:
            left_gap = x_ms - int(self._timestamps[i - 1])
            right_gap = int(self._timestamps[i]) - x_ms
            j = i if left_gap > right_gap else i - 1
        return self._points[j]

    def resolve(self, event: PointerEvent) -> Optional[PricePoint]:
        """Pointer event straight to the nearest point, or ``None``."""
        x_ms = self.normalize(event)
        if x_ms is None:
            return None
        return self.search_point(x_ms)


def selection_handler(x_min: Any, x_max: Any) -> bool:
    """
    Handle an axis selection on the chart.

    Dragging measures instead of zooming, so the selected range is only
    logged and ``False`` is returned to tell the caller not to zoom.
    """
    logger.debug(f"[SURFACE] Selection {x_min} → {x_max} (zoom suppressed)")
    return False
