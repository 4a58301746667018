"""Task-specific views over dataset content."""

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .cause_of_death_columns import CauseOfDeathColumn as Col


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of the rows visible for one (cause, year) selection.

    Attributes:
        df: Rows of the selected year, one per country code, in dataset order.
        cause: Selected cause column. May be unknown to the dataset.
        year: Selected year.
        pretty_by_col: Mapping from column names to display-friendly labels.
        cause_columns: Columns that may size the bubbles; identifying columns never do.
    """

    df: pd.DataFrame
    """Rows of the selected year, one per country code."""
    cause: str
    year: int
    pretty_by_col: Mapping[str, str]
    cause_columns: tuple[str, ...] = ()

    @property
    def codes(self) -> list[str]:
        """Country codes of the visible rows (bubble keys)."""
        return self.df[Col.CODE].tolist()

    @property
    def has_cause(self) -> bool:
        """Whether the selected cause is one of the dataset's cause columns."""
        return self.cause in self.cause_columns and self.cause in self.df.columns

    @property
    def values(self) -> pd.Series:
        """Selected cause values indexed by code; NaN when the cause is unknown."""
        if not self.has_cause:
            return pd.Series(np.nan, index=self.df[Col.CODE], dtype=float)
        return pd.Series(self.df[self.cause].to_numpy(dtype=float), index=self.df[Col.CODE])

    @property
    def max_value(self) -> float:
        """Largest selected value, 0.0 for an empty, unknown or all-NaN selection."""
        values = self.values
        if values.empty or not values.notna().any():
            return 0.0
        return max(float(values.max(skipna=True)), 0.0)

    @property
    def cause_label(self) -> str:
        """Display label of the selected cause."""
        return self.pretty_by_col.get(self.cause, self.cause)

    def records(self) -> dict[str, dict[str, object]]:
        """Return each visible row as a plain mapping keyed by code."""
        return {row[Col.CODE]: row for row in self.df.to_dict(orient="records")}
