"""Rendering core: projection, scale, transitions, engine, tooltip and selection state."""

from .engine import Bubble, BubbleRenderEngine, BubbleSnapshot, RenderResult
from .projection import MercatorProjector
from .scales import SqrtScale
from .state import AppState, MapController, SelectionState
from .tooltip import TooltipPresenter, format_tooltip
from .transition import Transition, ease_cubic_in_out


__all__ = [
    "AppState",
    "Bubble",
    "BubbleRenderEngine",
    "BubbleSnapshot",
    "MapController",
    "MercatorProjector",
    "RenderResult",
    "SelectionState",
    "SqrtScale",
    "TooltipPresenter",
    "Transition",
    "ease_cubic_in_out",
    "format_tooltip",
]
