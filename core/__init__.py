"""Core data-fetching, normalization and chart-interaction utilities."""

from .exceptions import FetchError
from .series import PRICE_FIELDS, PricePoint, normalize
from .surface import PointerEvent, SeriesSurface
from .overlay import DeltaResult, DragDeltaOverlay, GesturePhase, GestureState
from .controller import SeriesViewController, ViewState

__all__ = [
    "FetchError",
    "PRICE_FIELDS",
    "PricePoint",
    "normalize",
    "PointerEvent",
    "SeriesSurface",
    "DeltaResult",
    "DragDeltaOverlay",
    "GesturePhase",
    "GestureState",
    "SeriesViewController",
    "ViewState",
]
