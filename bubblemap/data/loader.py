"""Concurrent loading of the boundary collection and the cause-of-death table."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from bubblemap.utils.paths import WORLD_GEOJSON_URL

from .boundaries import BoundaryCollection
from .cause_of_death_dataset import CauseOfDeathDataset


logger = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """Raised when either input fails to load. No partial result is returned."""


async def load_datasets(
    boundaries_source: str | Path = WORLD_GEOJSON_URL,
    records_source: str | Path | None = None,
    *,
    timeout: float | None = None,
) -> tuple[BoundaryCollection, CauseOfDeathDataset]:
    """Load both inputs concurrently.

    Each load runs in a worker thread and both are awaited together.

    Args:
        boundaries_source: Path or URL of the GeoJSON boundary collection.
        records_source: Path or URL of the CSV table; defaults to ``cause_of_deaths.csv`` in the data directory.
        timeout: Request timeout for a remote boundary collection.

    Returns:
        ``(boundaries, dataset)``

    Raises:
        DatasetLoadError: If either load fails. The cause is chained.
    """
    try:
        boundaries, dataset = await asyncio.gather(
            asyncio.to_thread(BoundaryCollection.from_source, boundaries_source, timeout),
            asyncio.to_thread(CauseOfDeathDataset.from_csv, records_source),
        )
    except Exception as exc:
        logger.exception("Error loading data (boundaries=%s, records=%s)", boundaries_source, records_source)
        raise DatasetLoadError(f"Error loading data: {exc}") from exc

    return boundaries, dataset


def load_datasets_sync(
    boundaries_source: str | Path = WORLD_GEOJSON_URL,
    records_source: str | Path | None = None,
    *,
    timeout: float | None = None,
) -> tuple[BoundaryCollection, CauseOfDeathDataset]:
    """Blocking wrapper around :func:`load_datasets` for scripts and the Streamlit page."""
    return asyncio.run(load_datasets(boundaries_source, records_source, timeout=timeout))
