"""
Bridge from Streamlit's Plotly selection events to the drag-delta overlay.

Streamlit reports a finished horizontal drag as a selection box. The box's
first x is treated as the pointer-down position and its second x as the
latest pointer position; no box (cleared with a double-click, or a new chart)
ends the gesture.
"""

from typing import Any, Optional

from core.overlay import DeltaResult, DragDeltaOverlay
from core.surface import PointerEvent, SeriesSurface, selection_handler


def selection_box_x(event: Any) -> Optional[tuple[Any, Any]]:
    """Return the (start, end) x of the latest selection box in *event*, if any."""
    if not event:
        return None
    selection = event.get("selection") if hasattr(event, "get") else None
    if not selection:
        return None
    boxes = selection.get("box") or []
    if not boxes:
        return None

    xs = boxes[-1].get("x") or []
    if len(xs) < 2:
        return None
    return xs[0], xs[1]


def apply_selection(
    overlay: DragDeltaOverlay,
    surface: SeriesSurface,
    event: Any,
) -> Optional[DeltaResult]:
    """Replay the selection in *event* as a gesture on *overlay* and return its readout."""
    span = selection_box_x(event)
    if span is None:
        overlay.on_gesture_end()
        return None

    start, end = span
    selection_handler(start, end)
    overlay.on_gesture_start(PointerEvent(start), surface)
    return overlay.on_gesture_move(PointerEvent(end), surface)
