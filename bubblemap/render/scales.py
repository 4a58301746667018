"""Square-root radius scale."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SqrtScale:
    """Map ``[0, domain_max]`` to ``[0, range_max]`` with ``r = range_max * sqrt(v / domain_max)``.

    Bubble area, not radius, is linear in the value. A degenerate domain
    (``domain_max`` zero, negative or NaN) maps every value to 0. NaN and
    negative inputs map to 0 as well.
    """

    domain_max: float
    range_max: float

    def __post_init__(self) -> None:
        if not self.range_max >= 0:
            raise ValueError(f"range_max must be non-negative, got {self.range_max}")

    @property
    def is_degenerate(self) -> bool:
        return not (math.isfinite(self.domain_max) and self.domain_max > 0)

    def __call__(self, value: float | np.ndarray) -> float | np.ndarray:
        values = np.asarray(value, dtype=float)
        if self.is_degenerate:
            radii = np.zeros_like(values)
        else:
            with np.errstate(invalid="ignore"):
                radii = self.range_max * np.sqrt(np.clip(values, 0.0, None) / self.domain_max)
            radii = np.nan_to_num(radii, nan=0.0, posinf=self.range_max)
        return float(radii) if radii.ndim == 0 else radii
