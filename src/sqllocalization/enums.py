"""Enumerations for sqllocalization type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they can index plain
configuration mappings directly.

Python 3.13+.
"""

from enum import StrEnum


class SourceOption(StrEnum):
    """Configuration keys recognized by the SQL-backed data source.

    StrEnum provides automatic string conversion: str(SourceOption.TABLE) == "Table"
    """

    CONNECTION_STRING = "ConnectionString"
    """SQLAlchemy database URL of the backing store."""

    TABLE = "Table"
    """Table holding CultureName, ResourceKey, Path and the value column."""

    COLUMN = "Column"
    """Name of the column holding the localized value."""

    @property
    def env_suffix(self) -> str:
        """Environment variable suffix for this option (e.g. CONNECTION_STRING)."""
        return self.name


__all__ = [
    "SourceOption",
]
