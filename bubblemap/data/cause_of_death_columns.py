"""Column definitions for the cause-of-death dataset."""

from .base_columns import BaseColumn, ColumnMetadata


class CauseOfDeathColumn(BaseColumn):
    """Identifying columns of the [Cause of Deaths around the World](https://www.kaggle.com/datasets/iamsouravbanerjee/cause-of-deaths-around-the-world) table.

    Columns:
    - ``country``: str - Country or territory display name
    - ``code``: str - ISO3-style country code, join key against the boundary collection
    - ``year``: int - Year of observation

    Every other column is a cause of death holding a non-negative count. Cause
    columns keep their header text, which doubles as their display label.
    """

    COUNTRY = "country"
    """Country or territory display name."""
    CODE = "code"
    """ISO3-style country code."""
    YEAR = "year"
    """Year of observation."""

    def metadata(self) -> ColumnMetadata:
        return _COLUMN_METADATA_CAUSE_OF_DEATH[self]

    @classmethod
    def identifier_columns(cls) -> list[str]:
        """Get identifier column names.

        Returns:
            List of identifier column names (country, code, year).
        """
        return [cls.COUNTRY, cls.CODE, cls.YEAR]


_COLUMN_METADATA_CAUSE_OF_DEATH: dict[CauseOfDeathColumn, ColumnMetadata] = {
    CauseOfDeathColumn.COUNTRY: ColumnMetadata(
        original_name="Country/Territory",
        cleaned_name="country",
        dtype="str",
        pretty_name="Country/Territory",
    ),
    CauseOfDeathColumn.CODE: ColumnMetadata(
        original_name="Code",
        cleaned_name="code",
        dtype="str",
        pretty_name="Code",
    ),
    CauseOfDeathColumn.YEAR: ColumnMetadata(
        original_name="Year",
        cleaned_name="year",
        dtype="int",
        pretty_name="Year",
    ),
}
