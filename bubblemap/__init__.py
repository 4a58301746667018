"""Proportional-symbol map of causes of death per country and year."""

from .data import BoundaryCollection, CauseOfDeathDataset, DatasetLoadError, load_datasets, load_datasets_sync
from .render import AppState, BubbleRenderEngine, MapController, MercatorProjector


__all__ = [
    "AppState",
    "BoundaryCollection",
    "BubbleRenderEngine",
    "CauseOfDeathDataset",
    "DatasetLoadError",
    "MapController",
    "MercatorProjector",
    "load_datasets",
    "load_datasets_sync",
]
