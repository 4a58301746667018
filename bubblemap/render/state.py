"""Selection state, control wiring and the owned application state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from bubblemap.data.boundaries import BoundaryCollection
from bubblemap.data.cause_of_death_dataset import CauseOfDeathDataset
from bubblemap.data.loader import load_datasets_sync
from bubblemap.utils.paths import WORLD_GEOJSON_URL
from bubblemap.utils.plotting_config import DEFAULT_MAP_CFG, MapConfig

from .engine import BubbleRenderEngine, RenderResult
from .tooltip import TooltipPresenter
from .transition import now_ms


logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    """Currently selected cause column and year."""

    cause: str
    year: int


class MapController:
    """Wires the cause dropdown and the year slider to the render engine.

    Each handler updates one field and renders with the other field read
    from the state at call time.
    """

    def __init__(
        self,
        engine: BubbleRenderEngine,
        causes: Sequence[str],
        years: Sequence[int],
        initial_year: int | None = None,
    ) -> None:
        if not causes:
            raise ValueError("At least one cause column is required.")
        if not years and initial_year is None:
            raise ValueError("At least one year is required.")
        self.engine = engine
        self.causes = list(causes)
        self.years = list(years)
        year = int(initial_year) if initial_year is not None else self.years[0]
        self.state = SelectionState(cause=self.causes[0], year=year)
        self.year_label = str(year)
        self.last_result: RenderResult | None = None

    def start(self) -> RenderResult:
        """Initial render with the first cause and the initial year."""
        return self._render()

    def on_cause_change(self, cause: str) -> RenderResult:
        self.state.cause = cause
        return self._render()

    def on_year_change(self, year: int) -> RenderResult:
        self.state.year = int(year)
        self.year_label = str(self.state.year)
        return self._render()

    def _render(self) -> RenderResult:
        self.last_result = self.engine.render(self.state.cause, self.state.year)
        return self.last_result


@dataclass
class AppState:
    """Everything the page owns: inputs, engine, controller and tooltip."""

    dataset: CauseOfDeathDataset
    boundaries: BoundaryCollection
    engine: BubbleRenderEngine
    controller: MapController
    tooltip: TooltipPresenter

    @classmethod
    def build(
        cls,
        boundaries: BoundaryCollection,
        dataset: CauseOfDeathDataset,
        config: MapConfig = DEFAULT_MAP_CFG,
        initial_year: int | None = None,
        clock: Callable[[], float] = now_ms,
    ) -> AppState:
        """Assemble the state from loaded inputs and perform the initial render."""
        engine = BubbleRenderEngine(dataset, boundaries, config=config, clock=clock)
        controller = MapController(engine, dataset.cause_columns, dataset.years, initial_year=initial_year)
        state = cls(
            dataset=dataset,
            boundaries=boundaries,
            engine=engine,
            controller=controller,
            tooltip=TooltipPresenter(config, clock=clock),
        )
        result = controller.start()
        logger.info("Initial render: %s in %d, %d bubbles", result.cause, result.year, len(result.bubbles))
        return state

    @classmethod
    def load(
        cls,
        boundaries_source: str | Path = WORLD_GEOJSON_URL,
        records_source: str | Path | None = None,
        config: MapConfig = DEFAULT_MAP_CFG,
        initial_year: int | None = None,
    ) -> AppState:
        """Load both inputs and build the state. Raises ``DatasetLoadError`` on failure."""
        boundaries, dataset = load_datasets_sync(boundaries_source, records_source)
        return cls.build(boundaries, dataset, config=config, initial_year=initial_year)

    def hover(self, key: str, page_x: float, page_y: float) -> str:
        """Show the tooltip for the bubble ``key`` with the current selection."""
        selection = self.controller.state
        result = self.engine.last_result
        label = result.cause_label if result is not None and result.cause == selection.cause else None
        return self.tooltip.show(self.engine.bubbles[key], selection.cause, selection.year, page_x, page_y, label)

    def unhover(self, key: str) -> None:
        """Hide the tooltip; the border of ``key`` is restored only if it is still on the map."""
        self.tooltip.hide(self.engine.bubbles.get(key))
