"""Smoke tests for the bubble map figures."""

import matplotlib.pyplot as plt
import plotly.graph_objects as go
import pytest

from bubblemap.data import BoundaryCollection
from bubblemap.plotting import iter_land_polygons, land_path, plot_bubble_map, plot_bubble_map_static
from bubblemap.render import BubbleRenderEngine, MercatorProjector
from bubblemap.utils import DEFAULT_MAP_CFG, DEFAULT_PLOT_CFG


@pytest.fixture
def holed_boundaries() -> BoundaryCollection:
    """A country with an enclave, and the enclave itself."""
    shell = [[0, 0], [20, 0], [20, 20], [0, 20], [0, 0]]
    hole = [[5, 5], [5, 15], [15, 15], [15, 5], [5, 5]]
    return BoundaryCollection.from_geojson(
        {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "id": "OUT", "geometry": {"type": "Polygon", "coordinates": [shell, hole]}},
                {"type": "Feature", "id": "INN", "geometry": {"type": "Polygon", "coordinates": [hole]}},
            ],
        },
    )


class TestLandGeometry:
    """Projected land polygons."""

    def test_land_polygons(self, engine: BubbleRenderEngine) -> None:
        polygons = list(iter_land_polygons(engine.boundaries, engine.projector))
        # three polygons plus a two-part multipolygon
        assert len(polygons) == 5
        assert all(not polygon.is_empty for polygon in polygons)

    def test_hole_stays_unfilled(self, holed_boundaries: BoundaryCollection) -> None:
        projector = MercatorProjector.from_config(DEFAULT_MAP_CFG)
        outer, inner = iter_land_polygons(holed_boundaries, projector)
        assert len(outer.interiors) == 1

        path = land_path(outer)
        assert not path.contains_point(projector.project_point(10, 10))
        assert path.contains_point(projector.project_point(2, 10))
        assert land_path(inner).contains_point(projector.project_point(10, 10))

    def test_plotly_shapes_keep_holes(self, holed_boundaries: BoundaryCollection, dataset, clock) -> None:
        engine = BubbleRenderEngine(dataset, holed_boundaries, clock=clock)
        engine.render("Flu", 2000)
        shapes = plot_bubble_map(engine).layout.shapes

        assert len(shapes) == 2
        assert shapes[0].fillrule == "evenodd"
        assert shapes[0].path.count("M") == 2
        assert shapes[1].path.count("M") == 1


class TestPlotBubbleMap:
    """Plotly figure."""

    def test_requires_render(self, engine: BubbleRenderEngine) -> None:
        with pytest.raises(ValueError, match="render"):
            plot_bubble_map(engine)

    def test_traces(self, engine: BubbleRenderEngine) -> None:
        result = engine.render("Flu", 2000)
        fig = plot_bubble_map(engine)

        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 1
        (bubbles,) = fig.data
        assert len(fig.layout.shapes) == 5
        assert fig.layout.shapes[0].fillcolor == DEFAULT_MAP_CFG.land_fill
        assert fig.layout.shapes[0].layer == "below"
        assert list(bubbles.ids) == result.keys
        assert list(bubbles.marker.size) == pytest.approx([2 * r for r in result.radii.values()])
        assert "<b>B</b><br>Flu: 30<br>Year: 2000" in bubbles.hovertext
        assert fig.layout.title.text == "Flu (2000)"
        assert fig.layout.width == DEFAULT_MAP_CFG.width
        assert tuple(fig.layout.yaxis.range) == (DEFAULT_MAP_CFG.height, 0)

    def test_frames_while_animating(self, engine: BubbleRenderEngine) -> None:
        engine.render("Flu", 2000)
        engine.render("Flu", 2001)
        fig = plot_bubble_map(engine, n_frames=6)

        assert len(fig.frames) == 7
        assert fig.layout.updatemenus[0].buttons[0].label == "Play"

    def test_no_frames_when_idle(self, engine: BubbleRenderEngine) -> None:
        engine.render("Flu", 2000)
        fig = plot_bubble_map(engine, n_frames=6)
        assert len(fig.frames) == 0


class TestPlotBubbleMapStatic:
    """Matplotlib figure."""

    def test_static_figure(self, engine: BubbleRenderEngine) -> None:
        engine.render("Flu", 2000)
        fig = plot_bubble_map_static(engine, figsize=(6, 4))

        assert fig.axes
        ax = fig.axes[0]
        assert len(ax.collections) == 2
        assert ax.get_title() == "Flu (2000)"
        assert ax.get_ylim() == (DEFAULT_MAP_CFG.height, 0)
        plt.close(fig)

    def test_static_figure_with_style_and_axes(self, engine: BubbleRenderEngine) -> None:
        engine.render("Malaria", 2001)
        fig, ax = plt.subplots(figsize=(6, 4))
        out = plot_bubble_map_static(engine, ax=ax, plot_cfg=DEFAULT_PLOT_CFG)
        assert out is fig
        plt.close(fig)
