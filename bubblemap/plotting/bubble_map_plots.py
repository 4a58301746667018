"""Bubble map figures: interactive Plotly and static Matplotlib."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
from matplotlib.axes import Axes
from matplotlib.collections import PatchCollection
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Circle, PathPatch
from matplotlib.path import Path
from shapely.geometry import MultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.polygon import orient

from bubblemap.data.boundaries import BoundaryCollection
from bubblemap.render.engine import BubbleRenderEngine, BubbleSnapshot, RenderResult
from bubblemap.render.projection import MercatorProjector
from bubblemap.render.tooltip import format_tooltip
from bubblemap.utils.plotting_config import PlottingConfig


def iter_land_polygons(boundaries: BoundaryCollection, projector: MercatorProjector) -> Iterator[ShapelyPolygon]:
    """Yield every projected polygon of the collection, splitting multipolygons into parts."""
    for feature in boundaries:
        if feature.geometry is None or feature.geometry.is_empty:
            continue
        projected = projector.project_geometry(feature.geometry)
        if isinstance(projected, ShapelyPolygon):
            yield projected
        elif isinstance(projected, MultiPolygon):
            yield from projected.geoms


def land_path(polygon: ShapelyPolygon) -> Path:
    """Compound Matplotlib path of ``polygon``; holes wind opposite to the shell and stay unfilled."""
    oriented = orient(polygon, sign=1.0)
    rings = [oriented.exterior, *oriented.interiors]
    return Path.make_compound_path(*(Path(np.asarray(ring.coords), closed=True) for ring in rings))


def _svg_path(polygon: ShapelyPolygon) -> str:
    parts = []
    for ring in [polygon.exterior, *polygon.interiors]:
        coords = np.asarray(ring.coords)
        points = " L".join(f"{x:.2f},{y:.2f}" for x, y in coords[:-1])
        parts.append(f"M{points} Z")
    return " ".join(parts)


def _land_shapes(engine: BubbleRenderEngine) -> list[dict]:
    return [
        dict(
            type="path",
            path=_svg_path(polygon),
            xref="x",
            yref="y",
            fillcolor=engine.config.land_fill,
            fillrule="evenodd",
            line=dict(color=engine.config.land_stroke, width=0.5),
            layer="below",
        )
        for polygon in iter_land_polygons(engine.boundaries, engine.projector)
    ]


def _hover_text(snapshots: Mapping[str, BubbleSnapshot], result: RenderResult) -> list[str]:
    return [
        format_tooltip(bubble.record, result.cause, result.year, result.cause_label)
        .replace("<strong>", "<b>")
        .replace("</strong>", "</b>")
        for bubble in snapshots.values()
    ]


def _bubble_trace(snapshots: Mapping[str, BubbleSnapshot], result: RenderResult) -> go.Scatter:
    bubbles = list(snapshots.values())
    return go.Scatter(
        x=[b.x for b in bubbles],
        y=[b.y for b in bubbles],
        ids=[b.key for b in bubbles],
        mode="markers",
        marker=dict(
            size=[2 * b.r for b in bubbles],
            sizemode="diameter",
            color=[b.fill for b in bubbles],
            line=dict(color=[b.stroke for b in bubbles], width=1),
        ),
        hovertext=_hover_text(snapshots, result),
        hoverinfo="text",
        showlegend=False,
        name=result.cause_label,
    )


def plot_bubble_map(
    engine: BubbleRenderEngine,
    *,
    n_frames: int = 0,
    title: str | None = None,
    now: float | None = None,
) -> go.Figure:
    """Interactive bubble map of the engine's latest render.

    Implemented with Plotly's [:class:`plotly.graph_objects.Scatter`](https://plotly.com/python/line-and-scatter/)
    on a pixel canvas matching the engine's :class:`~bubblemap.utils.plotting_config.MapConfig`.

    Args:
        engine: Engine after at least one :meth:`~BubbleRenderEngine.render`.
        n_frames: When positive and a transition is running, attach ``n_frames + 1``
            animation frames sampled from it and a play button. When zero, the
            figure shows the target state and relies on ``layout.transition``.
        title: Figure title; defaults to ``"<cause> (<year>)"``.
        now: Sampling time for the frames (defaults to the engine clock).

    Returns:
        Plotly Figure with one bubble trace over land drawn as even-odd filled path shapes.

    Raises:
        ValueError: If the engine has not rendered yet.
    """
    result = engine.last_result
    if result is None:
        raise ValueError("Call engine.render() first")
    cfg = engine.config

    animate = n_frames > 0 and engine.is_animating(now)
    frames = engine.frames(n_frames, now=now) if animate else [dict(result.bubbles)]

    fig = go.Figure(data=[_bubble_trace(frames[0], result)])
    fig.update_layout(shapes=_land_shapes(engine))
    if animate:
        step = cfg.duration_ms / n_frames
        fig.frames = [
            go.Frame(data=[_bubble_trace(snap, result)], traces=[0], name=str(i))
            for i, snap in enumerate(frames)
        ]
        fig.update_layout(
            updatemenus=[
                dict(
                    type="buttons",
                    showactive=False,
                    x=0.02,
                    y=0.98,
                    buttons=[
                        dict(
                            label="Play",
                            method="animate",
                            args=[None, dict(frame=dict(duration=step, redraw=False), transition=dict(duration=0))],
                        ),
                    ],
                ),
            ],
        )

    fig.update_xaxes(range=[0, cfg.width], visible=False, fixedrange=True)
    fig.update_yaxes(range=[cfg.height, 0], visible=False, fixedrange=True)
    fig.update_layout(
        title=title if title is not None else f"{result.cause_label} ({result.year})",
        width=cfg.width,
        height=cfg.height,
        margin=dict(l=0, r=0, t=40 if title != "" else 0, b=0),
        template="plotly_white",
        hovermode="closest",
        transition=dict(duration=cfg.duration_ms, easing="cubic-in-out"),
    )
    return fig


def plot_bubble_map_static(
    engine: BubbleRenderEngine,
    *,
    figsize: tuple[float, float] = (15, 9),
    ax: Axes | None = None,
    plot_cfg: PlottingConfig | None = None,
    now: float | None = None,
) -> Figure:
    """Static snapshot of the bubble map drawn with Matplotlib patches.

    Args:
        engine: Engine after at least one render.
        figsize: Figure size when ``ax`` is not given.
        ax: Optional axes to draw into.
        plot_cfg: Optional style applied while drawing.
        now: Sampling time; defaults to the engine clock (mid-transition values if one is running).

    Returns:
        matplotlib Figure object
    """
    result = engine.last_result
    if result is None:
        raise ValueError("Call engine.render() first")
    cfg = engine.config
    snapshots = engine.snapshot(now)

    def _draw(target_ax: Axes | None) -> Figure:
        if target_ax is None:
            fig, target_ax = plt.subplots(figsize=figsize)
        else:
            fig = target_ax.figure

        land = PatchCollection(
            [PathPatch(land_path(polygon)) for polygon in iter_land_polygons(engine.boundaries, engine.projector)],
            facecolor=cfg.land_fill,
            edgecolor=cfg.land_stroke,
            linewidth=0.3,
        )
        target_ax.add_collection(land)

        circles = [Circle((b.x, b.y), b.r) for b in snapshots.values()]
        target_ax.add_collection(
            PatchCollection(
                circles,
                facecolor=[to_rgba(_mpl_color(b.fill)) for b in snapshots.values()],
                edgecolor=[to_rgba(_mpl_color(b.stroke)) for b in snapshots.values()],
                linewidth=0.8,
            ),
        )

        target_ax.set_xlim(0, cfg.width)
        target_ax.set_ylim(cfg.height, 0)
        target_ax.set_aspect("equal")
        target_ax.set_axis_off()
        target_ax.set_title(f"{result.cause_label} ({result.year})")
        fig.tight_layout()
        return fig

    if plot_cfg is None:
        return _draw(ax)
    with plot_cfg.apply():
        return _draw(ax)


def _mpl_color(color: str) -> str | tuple[float, float, float, float]:
    """Accept CSS ``rgba(r,g,b,a)`` strings alongside Matplotlib colour specs."""
    text = color.strip()
    if text.startswith("rgba(") and text.endswith(")"):
        r, g, b, a = (float(part) for part in text[5:-1].split(","))
        return (r / 255, g / 255, b / 255, a)
    if text.startswith("rgb(") and text.endswith(")"):
        r, g, b = (float(part) for part in text[4:-1].split(","))
        return (r / 255, g / 255, b / 255, 1.0)
    return text
