"""Data-source protocol and record types.

Components:
    StringRecord - One loaded (culture, key, value) translation entry
    DataSource - Protocol every backing store implements (structural typing)
    DataSourceFactory - Callable that builds one DataSource per base name

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sqllocalization.culture import Culture

__all__ = [
    "DataSource",
    "DataSourceFactory",
    "DataSourceParameters",
    "StringRecord",
]

type DataSourceParameters = Mapping[str, str]
"""Option name -> value mapping; required keys are a contract of each source."""


@dataclass(frozen=True, slots=True)
class StringRecord:
    """A translation entry loaded from the backing store.

    (culture_name, key) need not be unique in storage; lookups resolve to
    the first stored occurrence.

    Attributes:
        culture_name: Culture the value belongs to; "" marks a neutral entry
        key: Lookup key
        value: Localized text or format template
    """

    culture_name: str
    key: str
    value: str


class DataSource(Protocol):
    """Protocol for backing stores that supply localized strings.

    Implementations load their records lazily and at most once, then answer
    lookups from memory. This is a Protocol (structural typing) rather than
    an ABC so hosts can plug in custom stores without inheriting anything.

    A culture of None means the ambient UI culture
    (sqllocalization.culture.get_current_culture()).
    """

    def get_string(self, key: str, culture: Culture | None = None) -> str | None:
        """Return the value for key in culture, or None if absent.

        Prefers an exact (culture.name, key) entry, then the neutral
        ("", key) entry.

        Raises:
            TypeError: If key is None
            DataSourceError: If loading records from the backing store fails
        """
        ...

    def get_all_names(
        self, include_parent_cultures: bool, culture: Culture | None = None
    ) -> tuple[str, ...]:
        """Return every key stored for culture.

        With include_parent_cultures, returns keys of every entry whose
        culture shares culture's parent (sibling cultures included).

        Raises:
            DataSourceError: If loading records from the backing store fails
            CultureNotFoundError: If a stored culture name is not valid
        """
        ...


class DataSourceFactory(Protocol):
    """Builds the DataSource a new localizer reads from."""

    def __call__(
        self,
        base_name: str,
        parameters: DataSourceParameters,
        logger: logging.Logger | None = None,
        *,
        separator: str = ...,
        trailing_segments: int = ...,
    ) -> DataSource:
        """Create a data source for base_name.

        Raises:
            ConfigurationError: If required parameters are missing or the
                base name cannot be narrowed to a load filter
        """
        ...
