"""Shared plotting configuration (style, palette, map canvas and bubble constants)."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any

import matplotlib as mpl
import plotly.io as pio
import seaborn as sns


@dataclass
class PlottingConfig:
    """Figure theme for the map page and the static snapshot.

    Sets the seaborn theme and Matplotlib rcParams used by
    :func:`~bubblemap.plotting.plot_bubble_map_static` and the Plotly template
    used by :func:`~bubblemap.plotting.plot_bubble_map`.
    """

    style: str = "white"
    palette: str | list[str] = "tab10"
    font_family: str = "DejaVu Sans"
    font_scale: float = 1.0
    title_size: int = 14
    figure_dpi: int = 100
    context: str = "notebook"
    plotly_template: str = "plotly_white"
    seaborn_kwargs: dict[str, Any] = field(default_factory=dict)

    def _rc_params(self) -> dict[str, Any]:
        palette_colors = sns.color_palette(self.palette)
        return {
            "axes.titlesize": self.title_size,
            "figure.dpi": self.figure_dpi,
            "axes.prop_cycle": mpl.cycler(color=palette_colors),
            "font.family": [self.font_family],
        }

    def apply_global(self) -> None:
        """Apply plotting style globally (no automatic restore).

        Intended for the Streamlit page, where a consistent
        style is set once at the top.

        For temporary styling (with automatic restoration), use
        :meth:`apply` instead.
        """
        sns.set_theme(
            style=self.style,
            palette=self.palette,
            context=self.context,
            font_scale=self.font_scale,
            **self.seaborn_kwargs,
        )
        mpl.rcParams.update(self._rc_params())

        pio.templates.default = self.plotly_template

    @contextmanager
    def apply(self) -> Generator[None]:
        """Apply style within a context, restoring previous rcParams afterwards."""
        rc = self._rc_params()
        prev = {k: mpl.rcParams.get(k) for k in rc}
        prev_plotly_template = pio.templates.default

        with sns.axes_style(self.style), sns.plotting_context(self.context, font_scale=self.font_scale):
            mpl.rcParams.update(rc)
            pio.templates.default = self.plotly_template
            try:
                yield
            finally:
                pio.templates.default = prev_plotly_template
                mpl.rcParams.update(prev)


@dataclass(frozen=True)
class MapConfig:
    """Canvas, projection and bubble style constants for the bubble map.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        projection_scale: Mercator scale factor (pixels per radian).
        translate: Screen position of lon/lat ``(0, 0)``; ``None`` means
            ``(width / 2, height / 1.5)``.
        r_max: Radius of the bubble holding the largest value of the year.
        fill: Bubble fill colour.
        stroke: Default bubble border colour.
        hover_stroke: Border colour of the hovered bubble.
        duration_ms: Length of the position/radius transition.
        tooltip_fade_in_ms: Tooltip fade-in duration.
        tooltip_fade_out_ms: Tooltip fade-out duration.
        tooltip_opacity: Opacity of a fully shown tooltip.
        tooltip_offset: Tooltip offset from the pointer ``(dx, dy)``.
        offcanvas: Position given to bubbles without a matching boundary.
        land_fill: Basemap fill colour.
        land_stroke: Basemap border colour.
    """

    width: int = 1500
    height: int = 900
    projection_scale: float = 200.0
    translate: tuple[float, float] | None = None
    r_max: float = 40.0
    fill: str = "rgba(217,91,67,0.7)"
    stroke: str = "#fff"
    hover_stroke: str = "black"
    duration_ms: float = 750.0
    tooltip_fade_in_ms: float = 200.0
    tooltip_fade_out_ms: float = 500.0
    tooltip_opacity: float = 0.9
    tooltip_offset: tuple[float, float] = (5.0, -28.0)
    offcanvas: tuple[float, float] = (-100.0, -100.0)
    land_fill: str = "#ccc"
    land_stroke: str = "#333"

    @property
    def resolved_translate(self) -> tuple[float, float]:
        """Translation offset with the default applied."""
        if self.translate is not None:
            return self.translate
        return (self.width / 2, self.height / 1.5)

    def with_overrides(self, **changes: Any) -> MapConfig:
        """Return a copy with selected fields replaced."""
        return replace(self, **changes)


# Default configurations used across plotting and rendering
DEFAULT_PLOT_CFG = PlottingConfig()
DEFAULT_MAP_CFG = MapConfig()
LARGE_BUBBLE_MAP_CFG = MapConfig(r_max=60.0, fill="rgba(70,130,180,0.7)")


__all__ = ["DEFAULT_MAP_CFG", "DEFAULT_PLOT_CFG", "LARGE_BUBBLE_MAP_CFG", "MapConfig", "PlottingConfig"]
