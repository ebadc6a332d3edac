"""String localizers backed by a DataSource.

Architecture:
    - StringLocalizer: lookup engine for one base name. Owns the miss cache
      and a reference to one data source. Resolves against the ambient UI
      culture.
    - CultureBoundLocalizer: view over a StringLocalizer pinned to one
      culture. Shares the engine's data source and miss cache.
    - Localizer: Protocol satisfied by both.

Lookups never raise for missing strings: the result carries the requested
name as its value and resource_not_found=True.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from sqllocalization.constants import MISS_CACHE_KEY_FORMAT
from sqllocalization.culture import Culture, get_culture, get_current_culture
from sqllocalization.data.source import DataSource
from sqllocalization.errors import require
from sqllocalization.formatting import format_with_culture

__all__ = [
    "CultureBoundLocalizer",
    "LocalizedString",
    "Localizer",
    "MissCache",
    "StringLocalizer",
]


@dataclass(frozen=True, slots=True)
class LocalizedString:
    """Result of a localizer lookup.

    Attributes:
        name: Requested resource name
        value: Localized text, or name itself when not found
        resource_not_found: True when no template was found for name
        searched_location: Base name the localizer searched
    """

    name: str
    value: str
    resource_not_found: bool = False
    searched_location: str | None = None

    def __str__(self) -> str:
        return self.value

    @property
    def found(self) -> bool:
        return not self.resource_not_found


class MissCache:
    """Thread-safe set of (name, culture) pairs known to be unresolved.

    Entries are never evicted; a localizer remembers a miss for its whole
    lifetime.
    """

    __slots__ = ("_keys", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._keys: set[str] = set()

    @staticmethod
    def key(name: str, culture: Culture) -> str:
        """Composite key for a name and its resolved culture."""
        return MISS_CACHE_KEY_FORMAT.format(name=name, culture=culture.name)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys

    def add(self, key: str) -> None:
        with self._lock:
            self._keys.add(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)


class Localizer(Protocol):
    """Lookup contract shared by StringLocalizer and CultureBoundLocalizer."""

    def __getitem__(self, name: str) -> LocalizedString: ...

    def get(self, name: str) -> LocalizedString: ...

    def format(self, name: str, *arguments: object) -> LocalizedString: ...

    def get_all_strings(
        self, include_parent_cultures: bool = False
    ) -> Iterator[LocalizedString]: ...

    def with_culture(self, culture: Culture | str | None) -> Localizer: ...


class StringLocalizer:
    """Localizer for one base name, resolving against the ambient culture.

    Thread-safe: the miss cache is lock-guarded and the data source
    serializes its own loading.

    Example:
        >>> localizer = StringLocalizer(source, "Shop.Web.Views.Home")
        >>> with culture_scope("fr-FR"):
        ...     str(localizer["Greeting"])
        'Bonjour'
        >>> localizer.format("Hello {0}", "World").value
        'Hello World'

    Args:
        data_source: Source the strings are read from
        base_name: Base name reported as searched_location
        logger: Logger for lookup tracing (defaults to this module's logger)

    Raises:
        TypeError: If data_source or base_name is None
    """

    __slots__ = ("_base_name", "_data_source", "_logger", "_missing")

    def __init__(
        self,
        data_source: DataSource,
        base_name: str,
        logger: logging.Logger | None = None,
        *,
        miss_cache: MissCache | None = None,
    ) -> None:
        self._data_source = require(data_source, "data_source")
        self._base_name = require(base_name, "base_name")
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._missing = miss_cache if miss_cache is not None else MissCache()

    @property
    def base_name(self) -> str:
        return self._base_name

    @property
    def data_source(self) -> DataSource:
        return self._data_source

    @property
    def miss_cache(self) -> MissCache:
        return self._missing

    def __repr__(self) -> str:
        return f"StringLocalizer(base_name={self._base_name!r}, misses={len(self._missing)})"

    def __getitem__(self, name: str) -> LocalizedString:
        return self.get(name)

    def get(self, name: str) -> LocalizedString:
        """Resolve name in the ambient culture.

        Raises:
            TypeError: If name is None
        """
        return self.lookup(name, None)

    def format(self, name: str, *arguments: object) -> LocalizedString:
        """Resolve name as a template and apply arguments in the ambient culture.

        The raw name is used as the template when no entry exists.

        Raises:
            TypeError: If name is None
            FormattingError: If the template cannot take the arguments
        """
        return self.lookup_formatted(name, arguments, None)

    def get_all_strings(self, include_parent_cultures: bool = False) -> Iterator[LocalizedString]:
        """Enumerate every string the data source lists for the ambient culture."""
        return self.all_strings(include_parent_cultures, get_current_culture())

    def with_culture(self, culture: Culture | str | None) -> Localizer:
        """Return a view resolving against a fixed culture.

        None returns an unbound view. Views share this localizer's data
        source and miss cache.

        Raises:
            CultureNotFoundError: If culture is an invalid name
        """
        if culture is None:
            return StringLocalizer(
                self._data_source, self._base_name, self._logger, miss_cache=self._missing
            )
        return CultureBoundLocalizer(self, get_culture(culture))

    # Engine operations. culture=None means "ambient".

    def lookup(self, name: str, culture: Culture | None) -> LocalizedString:
        require(name, "name")
        value = self._get_string_safely(name, culture)
        return LocalizedString(
            name,
            value if value is not None else name,
            resource_not_found=value is None,
            searched_location=self._base_name,
        )

    def lookup_formatted(
        self, name: str, arguments: tuple[object, ...], culture: Culture | None
    ) -> LocalizedString:
        require(name, "name")
        template = self._get_string_safely(name, culture)
        formatting_culture = culture if culture is not None else get_current_culture()
        value = format_with_culture(
            template if template is not None else name, arguments, formatting_culture
        )
        return LocalizedString(
            name,
            value,
            resource_not_found=template is None,
            searched_location=self._base_name,
        )

    def all_strings(
        self, include_parent_cultures: bool, culture: Culture
    ) -> Iterator[LocalizedString]:
        require(culture, "culture")
        for name in self._data_source.get_all_names(include_parent_cultures, culture):
            value = self._get_string_safely(name, culture)
            yield LocalizedString(
                name,
                value if value is not None else name,
                resource_not_found=value is None,
                searched_location=self._base_name,
            )

    def _get_string_safely(self, name: str, culture: Culture | None) -> str | None:
        """Read name from the data source, consulting the miss cache first.

        Absent values and data-source errors are both remembered for the
        (name, culture) pair; later calls return None without touching the
        data source.
        """
        require(name, "name")
        key_culture = culture if culture is not None else get_current_culture()
        cache_key = MissCache.key(name, key_culture)

        self._logger.debug(
            "StringLocalizer searched for '%s' in '%s' with culture '%s'.",
            name,
            self._base_name,
            key_culture,
        )

        if cache_key in self._missing:
            return None

        try:
            value = self._data_source.get_string(name, key_culture)
        except Exception as e:  # noqa: BLE001
            self._logger.warning(
                "Lookup of '%s' in '%s' failed for culture '%s': %s",
                name,
                self._base_name,
                key_culture,
                e,
            )
            value = None

        if value is None:
            self._missing.add(cache_key)
        return value


class CultureBoundLocalizer:
    """View over a StringLocalizer that always resolves in one culture.

    Ignores the ambient culture for lookups, enumeration and argument
    formatting. Shares the wrapped engine's data source and miss cache.

    Example:
        >>> german = localizer.with_culture("de-DE")
        >>> german.format("Total: {0}", 1234.5).value
        'Total: 1234,5'
    """

    __slots__ = ("_culture", "_engine")

    def __init__(self, engine: StringLocalizer, culture: Culture) -> None:
        self._engine = require(engine, "engine")
        self._culture = require(culture, "culture")

    @property
    def culture(self) -> Culture:
        return self._culture

    @property
    def base_name(self) -> str:
        return self._engine.base_name

    def __repr__(self) -> str:
        return (
            f"CultureBoundLocalizer(base_name={self._engine.base_name!r}, "
            f"culture={self._culture.name!r})"
        )

    def __getitem__(self, name: str) -> LocalizedString:
        return self.get(name)

    def get(self, name: str) -> LocalizedString:
        return self._engine.lookup(name, self._culture)

    def format(self, name: str, *arguments: object) -> LocalizedString:
        return self._engine.lookup_formatted(name, arguments, self._culture)

    def get_all_strings(self, include_parent_cultures: bool = False) -> Iterator[LocalizedString]:
        return self._engine.all_strings(include_parent_cultures, self._culture)

    def with_culture(self, culture: Culture | str | None) -> Localizer:
        return self._engine.with_culture(culture)
