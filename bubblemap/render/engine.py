"""Bubble render engine: visible set, radii, positions and keyed reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from bubblemap.data.boundaries import BoundaryCollection
from bubblemap.data.cause_of_death_dataset import CauseOfDeathDataset
from bubblemap.utils.plotting_config import DEFAULT_MAP_CFG, MapConfig

from .projection import MercatorProjector
from .scales import SqrtScale
from .transition import Transition, now_ms


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BubbleSnapshot:
    """Position, radius and style of one bubble at one instant."""

    key: str
    x: float
    y: float
    r: float
    fill: str
    stroke: str
    record: Mapping[str, Any] = field(default_factory=dict, compare=False)


@dataclass
class Bubble:
    """A live bubble keyed by region code.

    ``x``, ``y`` and ``r`` are transitions; their ``end`` is the logical
    target, their value at a given time is what is drawn.
    """

    key: str
    record: dict[str, Any]
    x: Transition
    y: Transition
    r: Transition
    fill: str
    stroke: str

    @classmethod
    def create(
        cls,
        key: str,
        record: dict[str, Any],
        position: tuple[float, float],
        radius: float,
        config: MapConfig,
    ) -> Bubble:
        return cls(
            key=key,
            record=record,
            x=Transition.static(position[0]),
            y=Transition.static(position[1]),
            r=Transition.static(radius),
            fill=config.fill,
            stroke=config.stroke,
        )

    def retarget(
        self,
        record: dict[str, Any],
        position: tuple[float, float],
        radius: float,
        now: float,
        duration: float,
    ) -> None:
        self.record = record
        self.x = self.x.retarget(position[0], now, duration)
        self.y = self.y.retarget(position[1], now, duration)
        self.r = self.r.retarget(radius, now, duration)

    def current(self, now: float) -> BubbleSnapshot:
        return BubbleSnapshot(
            key=self.key,
            x=self.x.value_at(now),
            y=self.y.value_at(now),
            r=self.r.value_at(now),
            fill=self.fill,
            stroke=self.stroke,
            record=self.record,
        )

    def target(self) -> BubbleSnapshot:
        return BubbleSnapshot(
            key=self.key,
            x=self.x.end,
            y=self.y.end,
            r=self.r.end,
            fill=self.fill,
            stroke=self.stroke,
            record=self.record,
        )

    def is_animating(self, now: float) -> bool:
        return any(t.is_running(now) for t in (self.x, self.y, self.r))

    @property
    def end_time(self) -> float:
        return max(t.end_time for t in (self.x, self.y, self.r))


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one :meth:`BubbleRenderEngine.render` call.

    Attributes:
        cause: Rendered cause column.
        cause_label: Display label of the rendered cause.
        year: Rendered year.
        max_value: Upper end of the radius domain (0.0 when degenerate).
        bubbles: Target snapshot of every bubble, keyed by code, in dataset order.
        added: Keys that entered with this render.
        removed: Keys that left with this render.
        updated: Keys that persisted and were retargeted.
    """

    cause: str
    cause_label: str
    year: int
    max_value: float
    bubbles: Mapping[str, BubbleSnapshot]
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()

    @property
    def keys(self) -> list[str]:
        return list(self.bubbles)

    @property
    def radii(self) -> dict[str, float]:
        return {key: bubble.r for key, bubble in self.bubbles.items()}

    @property
    def positions(self) -> dict[str, tuple[float, float]]:
        return {key: (bubble.x, bubble.y) for key, bubble in self.bubbles.items()}


class BubbleRenderEngine:
    """Compute and reconcile the bubble overlay for a (cause, year) selection.

    Example:
        >>> from bubblemap.data import load_datasets_sync
        >>> boundaries, ds = load_datasets_sync()
        >>> engine = BubbleRenderEngine(ds, boundaries)
        >>> result = engine.render(ds.cause_columns[0], 2019)
        >>> len(result.bubbles), result.max_value
    """

    def __init__(
        self,
        dataset: CauseOfDeathDataset,
        boundaries: BoundaryCollection,
        projector: MercatorProjector | None = None,
        config: MapConfig = DEFAULT_MAP_CFG,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self.dataset = dataset
        self.boundaries = boundaries
        self.config = config
        self.projector = projector or MercatorProjector.from_config(config)
        self._clock = clock
        self._bubbles: dict[str, Bubble] = {}
        self._positions: dict[str, tuple[float, float]] = {}
        self._scale = SqrtScale(0.0, config.r_max)
        self._last: RenderResult | None = None

    @property
    def bubbles(self) -> Mapping[str, Bubble]:
        """Live bubbles keyed by code."""
        return self._bubbles

    @property
    def last_result(self) -> RenderResult | None:
        return self._last

    @property
    def scale(self) -> SqrtScale:
        return self._scale

    def radius_for(self, value: float) -> float:
        """Apply the scale of the latest render to one value."""
        return float(self._scale(value))

    def position_for(self, code: str) -> tuple[float, float]:
        """Projected centroid of the feature joined to ``code``, else the off-canvas sentinel."""
        if code not in self._positions:
            feature = self.boundaries.find(code)
            centroid = self.projector.centroid(feature) if feature is not None else None
            if centroid is None:
                logger.debug("No boundary for code %r; placing it off-canvas", code)
                centroid = self.config.offcanvas
            self._positions[code] = centroid
        return self._positions[code]

    def render(self, cause: str, year: int) -> RenderResult:
        """Render the bubbles of ``cause`` for ``year``.

        Rows of other years are dropped, radii follow a square-root scale
        over ``[0, max]`` of the visible values, and the previous bubble set
        is reconciled by code: departed keys are removed, new keys appear at
        their target, and persisting keys transition from their current
        value. An unknown cause renders zero-radius bubbles.

        Args:
            cause: Cause column to size the bubbles by.
            year: Year to show.

        Returns:
            RenderResult with target snapshots and the key diff.
        """
        now = self._clock()
        view = self.dataset.view(cause, year)
        if not view.has_cause:
            logger.warning("Unknown cause %r; rendering zero-radius bubbles", cause)

        self._scale = SqrtScale(view.max_value, self.config.r_max)
        radii = self._scale(view.values.to_numpy())
        records = view.records()

        new_keys = list(records)
        prev_keys = set(self._bubbles)
        to_remove = prev_keys.difference(new_keys)
        to_add = [key for key in new_keys if key not in prev_keys]
        to_update = [key for key in new_keys if key in prev_keys]

        bubbles: dict[str, Bubble] = {}
        for key, radius in zip(new_keys, radii, strict=True):
            position = self.position_for(key)
            bubble = self._bubbles.get(key)
            if bubble is None:
                bubble = Bubble.create(key, records[key], position, float(radius), self.config)
            else:
                bubble.retarget(records[key], position, float(radius), now, self.config.duration_ms)
            bubbles[key] = bubble
        self._bubbles = bubbles

        logger.debug(
            "Rendered %s/%s: %d added, %d updated, %d removed",
            cause,
            year,
            len(to_add),
            len(to_update),
            len(to_remove),
        )
        self._last = RenderResult(
            cause=cause,
            cause_label=view.cause_label,
            year=view.year,
            max_value=view.max_value,
            bubbles={key: bubble.target() for key, bubble in bubbles.items()},
            added=tuple(sorted(to_add)),
            removed=tuple(sorted(to_remove)),
            updated=tuple(sorted(to_update)),
        )
        return self._last

    def snapshot(self, now: float | None = None) -> dict[str, BubbleSnapshot]:
        """Interpolated state of every bubble at ``now`` (defaults to the clock)."""
        now = self._clock() if now is None else now
        return {key: bubble.current(now) for key, bubble in self._bubbles.items()}

    def is_animating(self, now: float | None = None) -> bool:
        now = self._clock() if now is None else now
        return any(bubble.is_animating(now) for bubble in self._bubbles.values())

    def frames(self, n: int, now: float | None = None) -> list[dict[str, BubbleSnapshot]]:
        """Sample ``n + 1`` evenly spaced snapshots from ``now`` to the end of the running transitions.

        Without a running transition every frame equals the current snapshot.
        """
        if n < 1:
            raise ValueError(f"n must be at least 1, got {n}")
        now = self._clock() if now is None else now
        end = max((bubble.end_time for bubble in self._bubbles.values()), default=now)
        span = max(end - now, 0.0)
        return [self.snapshot(now + span * i / n) for i in range(n + 1)]
