"""Test configuration for the bubble map."""

import json
from pathlib import Path
import sys

import matplotlib
import pandas as pd
import pytest


matplotlib.use("Agg")

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def _ring(lon: float, lat: float, size: float) -> list[list[float]]:
    return [[lon, lat], [lon + size, lat], [lon + size, lat + size], [lon, lat + size], [lon, lat]]


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, ms: float) -> None:
        self.t += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def world_geojson() -> dict:
    """Small FeatureCollection: two id-keyed squares, an iso_a3-only square and a multipolygon."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": "AAA",
                "properties": {"name": "Alpha"},
                "geometry": {"type": "Polygon", "coordinates": [_ring(0, 0, 10)]},
            },
            {
                "type": "Feature",
                "id": "BBB",
                "properties": {"name": "Beta"},
                "geometry": {"type": "Polygon", "coordinates": [_ring(20, 10, 10)]},
            },
            {
                "type": "Feature",
                "properties": {"name": "Antarctica", "iso_a3": "ATA"},
                "geometry": {"type": "Polygon", "coordinates": [_ring(-60, -80, 20)]},
            },
            {
                "type": "Feature",
                "id": "CCC",
                "properties": {"name": "Gamma"},
                "geometry": {
                    "type": "MultiPolygon",
                    "coordinates": [[_ring(40, 0, 5)], [_ring(50, 0, 5)]],
                },
            },
        ],
    }


@pytest.fixture
def boundaries(world_geojson):
    from bubblemap.data import BoundaryCollection

    return BoundaryCollection.from_geojson(world_geojson)


@pytest.fixture
def raw_records() -> pd.DataFrame:
    """Raw table as it appears in the CSV (original headers)."""
    return pd.DataFrame(
        {
            "Country/Territory": ["A", "B", "C", "Z", "A", "Antarctica"],
            "Code": ["AAA", "BBB", "CCC", "ZZZ", "AAA", "ATA"],
            "Year": [2000, 2000, 2000, 2000, 2001, 2001],
            "Flu": [10, 30, 0, 5, 20, 7],
            "Malaria": [0, 0, 0, 0, 3, 1],
        },
    )


@pytest.fixture
def records_csv(raw_records: pd.DataFrame, tmp_path: Path) -> Path:
    csv_path = tmp_path / "cause_of_deaths.csv"
    raw_records.to_csv(csv_path, index=False)
    return csv_path


@pytest.fixture
def geojson_file(world_geojson: dict, tmp_path: Path) -> Path:
    path = tmp_path / "world.geojson"
    path.write_text(json.dumps(world_geojson), encoding="utf-8")
    return path


@pytest.fixture
def dataset(records_csv: Path):
    from bubblemap.data import CauseOfDeathDataset

    return CauseOfDeathDataset.from_csv(records_csv)


@pytest.fixture
def engine(dataset, boundaries, clock):
    from bubblemap.render import BubbleRenderEngine

    return BubbleRenderEngine(dataset, boundaries, clock=clock)
