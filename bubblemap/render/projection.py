"""Fixed Mercator projection from lon/lat degrees to canvas pixels."""

from __future__ import annotations

import logging
import math

import numpy as np
import shapely
from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry

from bubblemap.data.boundaries import BoundaryFeature
from bubblemap.utils.plotting_config import DEFAULT_MAP_CFG, MapConfig


logger = logging.getLogger(__name__)

MERCATOR_MAX_LAT = math.degrees(2 * math.atan(math.exp(math.pi)) - math.pi / 2)
"""Latitude at which the Mercator y reaches +/- pi (about 85.0511 degrees)."""


class MercatorProjector:
    """Mercator projection parameterized by canvas size, translation and scale.

    ``x = tx + k * lon``, ``y = ty - k * ln(tan(pi/4 + lat/2))`` with angles in
    radians and ``k`` the scale. Latitudes are clamped to the Mercator limit so
    polar rings stay finite.
    """

    def __init__(
        self,
        width: float,
        height: float,
        translate: tuple[float, float] | None = None,
        scale: float = 200.0,
    ) -> None:
        self.width = width
        self.height = height
        self.translate = translate if translate is not None else (width / 2, height / 1.5)
        self.scale = scale

    @classmethod
    def from_config(cls, config: MapConfig = DEFAULT_MAP_CFG) -> MercatorProjector:
        return cls(
            width=config.width,
            height=config.height,
            translate=config.resolved_translate,
            scale=config.projection_scale,
        )

    def _project_coords(self, coords: np.ndarray) -> np.ndarray:
        lon = np.radians(coords[:, 0])
        lat = np.radians(np.clip(coords[:, 1], -MERCATOR_MAX_LAT, MERCATOR_MAX_LAT))
        tx, ty = self.translate
        x = tx + self.scale * lon
        y = ty - self.scale * np.log(np.tan(np.pi / 4 + lat / 2))
        return np.column_stack([x, y])

    def project_point(self, lon: float, lat: float) -> tuple[float, float]:
        """Project one lon/lat pair (degrees) to canvas pixels."""
        x, y = self._project_coords(np.array([[lon, lat]], dtype=float))[0]
        return float(x), float(y)

    def project_geometry(self, geometry: BaseGeometry) -> BaseGeometry:
        """Project every vertex of a shapely geometry to canvas pixels."""
        return shapely.transform(geometry, self._project_coords)

    def centroid(self, feature: BoundaryFeature | BaseGeometry | None) -> tuple[float, float] | None:
        """Planar, area-weighted centroid of the projected geometry.

        Zero-area geometries fall back to the centroid of their boundary and
        then of their vertices. Empty or missing geometries give ``None``.
        Never raises.
        """
        geometry = feature.geometry if isinstance(feature, BoundaryFeature) else feature
        if geometry is None or geometry.is_empty:
            return None
        try:
            point = self.project_geometry(geometry).centroid
        except (GEOSException, ValueError):
            logger.debug("Centroid failed for %r", getattr(feature, "id", feature), exc_info=True)
            return None
        if point.is_empty or not (math.isfinite(point.x) and math.isfinite(point.y)):
            return None
        return float(point.x), float(point.y)

    project = centroid

    def is_on_canvas(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height
