"""Base dataset class for all dataset implementations."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from .base_columns import BaseColumn


class BaseDataset(ABC):
    """Abstract base class for tabular datasets rendered on the map."""

    identifier_columns: Sequence[str] = ()
    Col: type[BaseColumn]

    def __init__(self, df: pd.DataFrame | None = None) -> None:
        """Initialize the base dataset.

        Args:
            df: Pre-loaded and cleaned DataFrame (optional)
        """
        self._df: pd.DataFrame | None = df

    @classmethod
    @abstractmethod
    def from_csv(cls, csv_path: str | Path | None = None, **kwargs: object) -> "BaseDataset":
        """Load dataset from CSV file.

        Args:
            csv_path: Path or URL of the CSV file
            **kwargs: Additional loading parameters

        Returns:
            Dataset instance with loaded data
        """
        ...

    @property
    def df(self) -> pd.DataFrame:
        """Get the cleaned DataFrame.

        Raises:
            ValueError: If dataset not loaded
        """
        if self._df is None:
            raise ValueError("Dataset not loaded. Use from_csv() to load data.")
        return self._df

    @property
    def df_pretty(self) -> pd.DataFrame:
        """Get the DataFrame with pretty column names."""
        return self.df.rename(columns={col: self.get_pretty_name(col) for col in self.df.columns})

    @property
    def numeric_cols(self) -> pd.Index:
        """Get numeric column names.

        Default implementation filters columns by numeric dtypes.
        Subclasses can override for custom behavior.
        """
        return self.df.select_dtypes(include=["number"]).columns

    def get_pretty_name(self, column_name: str) -> str:
        """Convert column name to pretty name for visualization.

        Columns outside the enum (the cause columns) are returned unchanged,
        their header text already is the display label.
        """
        try:
            col_enum = self.Col(column_name)
        except ValueError:
            return column_name
        else:
            return str(col_enum.pretty_name)
