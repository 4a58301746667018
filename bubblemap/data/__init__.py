"""Data module for dataset, boundary and loader classes."""

from .boundaries import BoundaryCollection, BoundaryFeature
from .cause_of_death_columns import CauseOfDeathColumn as CODCol
from .cause_of_death_dataset import CauseOfDeathDataset
from .loader import DatasetLoadError, load_datasets, load_datasets_sync
from .views import DatasetView


__all__ = [
    "BoundaryCollection",
    "BoundaryFeature",
    "CODCol",
    "CauseOfDeathDataset",
    "DatasetLoadError",
    "DatasetView",
    "load_datasets",
    "load_datasets_sync",
]
