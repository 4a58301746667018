"""World boundary collection and the code join against it."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry


logger = logging.getLogger(__name__)


ALT_CODE_PROPERTY = "iso_a3"
"""Feature property consulted when the primary ``id`` does not match."""


@dataclass(frozen=True)
class BoundaryFeature:
    """One named region of the boundary collection.

    Attributes:
        id: Primary identifier (``feature.id``), ``None`` when absent.
        properties: Feature properties as loaded.
        geometry: Shapely geometry in lon/lat degrees, ``None`` when absent.
    """

    id: str | None
    properties: Mapping[str, Any] = field(default_factory=dict)
    geometry: BaseGeometry | None = None

    @property
    def alt_code(self) -> str | None:
        """Alternate identifying property (``properties.iso_a3``)."""
        value = self.properties.get(ALT_CODE_PROPERTY)
        return None if value is None else str(value)

    @property
    def name(self) -> str | None:
        return self.properties.get("name")

    @classmethod
    def from_geojson(cls, feature: Mapping[str, Any]) -> BoundaryFeature:
        """Build a feature from a GeoJSON ``Feature`` mapping."""
        raw_id = feature.get("id")
        raw_geometry = feature.get("geometry")
        return cls(
            id=None if raw_id is None else str(raw_id),
            properties=dict(feature.get("properties") or {}),
            geometry=shape(raw_geometry) if raw_geometry else None,
        )


class BoundaryCollection:
    """Immutable collection of boundary features with code lookup.

    The join resolves a code against the primary ``id`` first and the
    ``iso_a3`` property second. The first feature in collection order wins
    within each index.
    """

    def __init__(self, features: Sequence[BoundaryFeature]) -> None:
        self._features: tuple[BoundaryFeature, ...] = tuple(features)
        self._by_id: dict[str, BoundaryFeature] = {}
        self._by_alt: dict[str, BoundaryFeature] = {}
        for feature in self._features:
            if feature.id is not None:
                self._by_id.setdefault(feature.id, feature)
            if feature.alt_code is not None:
                self._by_alt.setdefault(feature.alt_code, feature)
        self._warned: set[str] = set()

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[BoundaryFeature]:
        return iter(self._features)

    @property
    def features(self) -> tuple[BoundaryFeature, ...]:
        return self._features

    def find(self, code: str) -> BoundaryFeature | None:
        """Return the feature matching ``code``, or ``None`` when nothing matches.

        Args:
            code: Region code of a dataset row.

        Returns:
            The feature whose ``id`` equals ``code``, else the feature whose
            ``iso_a3`` equals ``code``, else ``None``.
        """
        by_id = self._by_id.get(code)
        by_alt = self._by_alt.get(code)
        if by_id is not None and by_alt is not None and by_id is not by_alt and code not in self._warned:
            self._warned.add(code)
            logger.warning(
                "Code %r matches feature id %r and a different feature by %s (%r); using the id match",
                code,
                by_id.id,
                ALT_CODE_PROPERTY,
                by_alt.name,
            )
        return by_id if by_id is not None else by_alt

    @classmethod
    def from_geojson(cls, data: Mapping[str, Any]) -> BoundaryCollection:
        """Build a collection from a parsed GeoJSON ``FeatureCollection``.

        Raises:
            ValueError: If ``data`` has no ``features`` list.
        """
        features = data.get("features") if isinstance(data, Mapping) else None
        if not isinstance(features, list):
            raise ValueError("GeoJSON input must be a FeatureCollection with a 'features' list.")
        return cls([BoundaryFeature.from_geojson(feature) for feature in features])

    @classmethod
    def from_source(cls, source: str | Path, timeout: float | None = None) -> BoundaryCollection:
        """Load a collection from a local GeoJSON file or an http(s) URL.

        Args:
            source: File path or URL.
            timeout: Request timeout in seconds for URLs (``None`` waits indefinitely).
        """
        if is_url(source):
            response = requests.get(str(source), timeout=timeout)
            response.raise_for_status()
            data = response.json()
        else:
            data = json.loads(Path(source).read_text(encoding="utf-8"))

        collection = cls.from_geojson(data)
        logger.info("Loaded %d boundary features from %s", len(collection), source)
        return collection


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))
