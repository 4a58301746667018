import os
from pathlib import Path
from typing import Literal


__all__ = ["WORLD_GEOJSON_URL", "get_data_dir", "get_dataset_path"]


WORLD_GEOJSON_URL = "https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson"
"""Default world boundary collection (GeoJSON FeatureCollection)."""

_DATASET_MAP: dict[str, str] = {
    "cause_of_deaths": "cause_of_deaths.csv",
    "world": "world.geojson",
}

_DATA_DIR_ENV = "BUBBLEMAP_DATA_DIR"


def get_data_dir() -> Path:
    """Get the path to the data directory.

    The ``BUBBLEMAP_DATA_DIR`` environment variable overrides the ``_data``
    directory at the project root.

    Returns:
        Path to the data directory
    """
    override = os.environ.get(_DATA_DIR_ENV)
    data_dir = (Path(override) if override else Path(__file__).parents[2] / "_data").resolve()
    assert data_dir.exists(), f"Data directory not found at {data_dir}"
    return data_dir


def get_dataset_path(filename: Literal["cause_of_deaths", "world"] | str) -> Path:  # noqa: PYI051
    """Get the full path to a dataset file in the data directory.

    Args:
        filename: Key to known dataset or custom filename

    Returns:
        Full path to the dataset file relative to the data directory of the project

    Supported: cause_of_deaths.csv world.geojson
    """
    data_dir = get_data_dir()
    ds_path = data_dir / _DATASET_MAP.get(filename, filename)
    assert ds_path.exists(), f"Dataset file '{filename}' not found at {ds_path}"

    return ds_path
