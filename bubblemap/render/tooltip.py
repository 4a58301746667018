"""Hover tooltip state and content."""

from __future__ import annotations

import html
import math
from collections.abc import Callable, Mapping
from typing import Any

from bubblemap.data.cause_of_death_columns import CauseOfDeathColumn as Col
from bubblemap.utils.plotting_config import DEFAULT_MAP_CFG, MapConfig

from .engine import Bubble
from .transition import Transition, now_ms


def format_value(value: Any) -> str:
    """Render a count the way it reads in the table (no trailing ``.0``)."""
    if value is None:
        return "n/a"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if math.isnan(number):
        return "n/a"
    if number.is_integer():
        return str(int(number))
    return f"{number:g}"


def format_tooltip(record: Mapping[str, Any], cause: str, year: int, label: str | None = None) -> str:
    """Tooltip HTML: country name in bold, the selected cause with its value, and the year.

    ``cause`` selects the value from ``record``; ``label`` is the text shown for it
    and defaults to the column name.
    """
    name = html.escape(str(record.get(Col.COUNTRY, record.get(Col.CODE, ""))))
    value = format_value(record.get(cause))
    shown = html.escape(label if label is not None else cause)
    return f"<strong>{name}</strong><br>{shown}: {value}<br>Year: {year}"


class TooltipPresenter:
    """Floating label shown while a bubble is hovered.

    Showing highlights the bubble border and fades the label in; hiding
    restores the border and fades the label out over a longer duration.
    """

    def __init__(self, config: MapConfig = DEFAULT_MAP_CFG, clock: Callable[[], float] = now_ms) -> None:
        self.config = config
        self._clock = clock
        self.opacity = Transition.static(0.0)
        self.html = ""
        self.left = 0.0
        self.top = 0.0
        self.active_key: str | None = None

    def show(
        self,
        bubble: Bubble,
        cause: str,
        year: int,
        page_x: float,
        page_y: float,
        label: str | None = None,
    ) -> str:
        """Raise the tooltip for ``bubble`` next to the pointer and return its HTML."""
        now = self._clock()
        bubble.stroke = self.config.hover_stroke
        self.opacity = self.opacity.retarget(self.config.tooltip_opacity, now, self.config.tooltip_fade_in_ms)
        self.html = format_tooltip(bubble.record, cause, year, label)
        dx, dy = self.config.tooltip_offset
        self.left = page_x + dx
        self.top = page_y + dy
        self.active_key = bubble.key
        return self.html

    def hide(self, bubble: Bubble | None = None) -> None:
        """Fade the tooltip out and restore the border of ``bubble`` when it still exists."""
        now = self._clock()
        if bubble is not None:
            bubble.stroke = self.config.stroke
        self.opacity = self.opacity.retarget(0.0, now, self.config.tooltip_fade_out_ms)
        self.active_key = None

    def current_opacity(self, now: float | None = None) -> float:
        return self.opacity.value_at(self._clock() if now is None else now)

    @property
    def visible(self) -> bool:
        return self.current_opacity() > 0
