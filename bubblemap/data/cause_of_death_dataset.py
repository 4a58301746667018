"""Dataset class for the per-country, per-year cause-of-death table."""

import logging
from pathlib import Path

import pandas as pd

from bubblemap.utils.paths import get_dataset_path

from .base_dataset import BaseDataset
from .cause_of_death_columns import CauseOfDeathColumn as Col
from .views import DatasetView


logger = logging.getLogger(__name__)


class CauseOfDeathDataset(BaseDataset):
    """Loading and preprocessing for the cause-of-death table.

    **Example workflow**:
    >>> from bubblemap.data import CauseOfDeathDataset
    >>> ds = CauseOfDeathDataset.from_csv()
    >>> ds.cause_columns[:2], ds.years[-1]
    >>> view = ds.view(ds.cause_columns[0], 2019)
    >>> view.max_value
    """

    Col = Col
    identifier_columns = tuple(Col.identifier_columns())

    def __init__(self, df: pd.DataFrame | None = None, cause_columns: list[str] | None = None) -> None:
        """Initialize the dataset.

        Args:
            df: Cleaned DataFrame with identifying columns ``country``, ``code`` and ``year``.
            cause_columns: Cause columns in header order. Derived from ``df`` when omitted.
        """
        super().__init__(df=df)
        if cause_columns is None and df is not None:
            cause_columns = self._derive_cause_columns(df.columns)
        self._cause_columns: list[str] = list(cause_columns or [])

    @classmethod
    def from_csv(cls, csv_path: str | Path | None = None, **read_csv_kwargs: object) -> "CauseOfDeathDataset":
        """Load and preprocess the dataset from a CSV file or URL.

        - Normalize identifying column names
        - Convert year and cause columns to numbers
        - Derive the cause columns from the header

        Args:
            csv_path: Path or URL of the CSV file. Defaults to the bundled ``cause_of_deaths.csv``.
            **read_csv_kwargs: Forwarded to :func:`pandas.read_csv`.

        Returns:
            CauseOfDeathDataset instance with loaded and cleaned data

        Raises:
            ValueError: If an identifying column is missing from the header.
        """
        if csv_path is None:
            csv_path = get_dataset_path("cause_of_deaths")

        raw = pd.read_csv(csv_path, **read_csv_kwargs)
        cod_df = raw.pipe(cls._normalize_col_names).pipe(cls._convert_data_types)
        cause_columns = cls._derive_cause_columns(cod_df.columns)

        logger.info(
            "Loaded %d rows, %d causes, years %s from %s",
            len(cod_df),
            len(cause_columns),
            f"{cod_df[Col.YEAR].min()}-{cod_df[Col.YEAR].max()}" if len(cod_df) else "none",
            csv_path,
        )
        return cls(df=cod_df, cause_columns=cause_columns)

    @staticmethod
    def _normalize_col_names(df: pd.DataFrame) -> pd.DataFrame:
        """Rename the identifying columns to their cleaned names.

        Surrounding whitespace is stripped from every header. Cause columns
        otherwise keep their header text.
        """
        normalized = df.set_axis(df.columns.str.strip(), axis=1).rename(columns=Col.rename_map())
        missing = [str(col) for col in Col.identifier_columns() if col not in normalized.columns]
        if missing:
            raise ValueError(f"Missing identifying columns {missing}; got {list(df.columns)}")
        return normalized

    @staticmethod
    def _convert_data_types(df: pd.DataFrame) -> pd.DataFrame:
        """Coerce year and cause columns to numbers; drop rows without a year."""
        identifier_cols = {Col.COUNTRY, Col.CODE}
        numeric_cols = df.columns.difference(list(identifier_cols))

        converted = df.assign(
            **{col: pd.to_numeric(df[col], errors="coerce") for col in numeric_cols},
            **{Col.COUNTRY: df[Col.COUNTRY].astype(str), Col.CODE: df[Col.CODE].astype(str).str.strip()},
        )
        converted = converted.dropna(subset=[Col.YEAR])
        return converted.assign(**{Col.YEAR: converted[Col.YEAR].astype(int)}).reset_index(drop=True)

    @staticmethod
    def _derive_cause_columns(columns: pd.Index) -> list[str]:
        identifiers = set(Col.identifier_columns())
        return [col for col in columns if col not in identifiers]

    @property
    def cause_columns(self) -> list[str]:
        """Cause-of-death columns in header order."""
        return list(self._cause_columns)

    @property
    def numeric_cols(self) -> pd.Index:
        return super().numeric_cols.difference([Col.YEAR])

    @property
    def years(self) -> list[int]:
        """Sorted distinct years present in the dataset."""
        return sorted(int(y) for y in self.df[Col.YEAR].unique())

    def rows_for_year(self, year: int) -> pd.DataFrame:
        """Rows observed in ``year``, one per code (first occurrence wins)."""
        rows = self.df[self.df[Col.YEAR] == int(year)]
        return rows.drop_duplicates(subset=[Col.CODE], keep="first")

    def view(self, cause: str, year: int) -> DatasetView:
        """Build an immutable view of the rows visible for ``(cause, year)``.

        Args:
            cause: Selected cause column. An unknown cause yields NaN values.
            year: Selected year.

        Returns:
            DatasetView over the selected year's rows.
        """
        frame = self.rows_for_year(year)
        return DatasetView(
            df=frame,
            cause=cause,
            year=int(year),
            pretty_by_col={col: self.get_pretty_name(col) for col in frame.columns},
            cause_columns=tuple(self._cause_columns),
        )
