"""Tests for the concurrent dataset loader."""

import asyncio
import logging
from pathlib import Path

import pytest
import requests

from bubblemap.data import BoundaryCollection, CauseOfDeathDataset, DatasetLoadError, load_datasets, load_datasets_sync


class _FakeResponse:
    def __init__(self, payload: dict, status: int = 200) -> None:
        self._payload = payload
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> dict:
        return self._payload


class TestLoadDatasets:
    """Test load_datasets functionality."""

    def test_loads_both_inputs(self, geojson_file: Path, records_csv: Path) -> None:
        boundaries, dataset = asyncio.run(load_datasets(geojson_file, records_csv))

        assert isinstance(boundaries, BoundaryCollection)
        assert isinstance(dataset, CauseOfDeathDataset)
        assert len(boundaries) == 4
        assert dataset.cause_columns == ["Flu", "Malaria"]

    def test_sync_wrapper(self, geojson_file: Path, records_csv: Path) -> None:
        boundaries, dataset = load_datasets_sync(geojson_file, records_csv)
        assert len(boundaries) == 4
        assert dataset.years == [2000, 2001]

    def test_remote_boundaries(self, world_geojson: dict, records_csv: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[str] = []

        def fake_get(url: str, timeout: float | None = None) -> _FakeResponse:
            calls.append(url)
            return _FakeResponse(world_geojson)

        monkeypatch.setattr("bubblemap.data.boundaries.requests.get", fake_get)
        boundaries, _ = load_datasets_sync("https://example.org/world.geojson", records_csv)

        assert calls == ["https://example.org/world.geojson"]
        assert boundaries.find("ATA") is not None

    def test_http_error(self, records_csv: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "bubblemap.data.boundaries.requests.get",
            lambda url, timeout=None: _FakeResponse({}, status=404),
        )
        with pytest.raises(DatasetLoadError) as excinfo:
            load_datasets_sync("https://example.org/missing.geojson", records_csv)
        assert isinstance(excinfo.value.__cause__, requests.HTTPError)

    def test_missing_csv(self, geojson_file: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="bubblemap.data.loader"):
            with pytest.raises(DatasetLoadError):
                load_datasets_sync(geojson_file, tmp_path / "nope.csv")
        assert len([r for r in caplog.records if "Error loading data" in r.getMessage()]) == 1

    def test_malformed_geojson(self, tmp_path: Path, records_csv: Path) -> None:
        bad = tmp_path / "bad.geojson"
        bad.write_text('{"type": "Feature"}', encoding="utf-8")
        with pytest.raises(DatasetLoadError) as excinfo:
            load_datasets_sync(bad, records_csv)
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_missing_join_key(self, geojson_file: Path, tmp_path: Path) -> None:
        csv_path = tmp_path / "no_code.csv"
        csv_path.write_text("Country/Territory,Year,Flu\nA,2000,1\n", encoding="utf-8")
        with pytest.raises(DatasetLoadError, match="code"):
            load_datasets_sync(geojson_file, csv_path)
