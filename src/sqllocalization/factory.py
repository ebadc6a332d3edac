"""Localizer factory with a per-base-name instance cache.

One StringLocalizer (and one data source) exists per distinct base name for
the lifetime of the factory, or until clear_cache().

Thread Safety:
    Get-or-create uses double-checked locking: a lock-free dictionary read
    for the common already-created case, and a locked re-check plus
    construction otherwise. Racing first requests for the same key construct
    exactly one localizer and all of them receive it. Construction performs
    no I/O (data sources load lazily), so the lock is held briefly.

Python 3.13+.
"""

from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Callable

from sqllocalization.constants import EXPLICIT_NAME_CACHE_KEY_FORMAT
from sqllocalization.data.source import DataSourceFactory
from sqllocalization.data.sql import SqlDataSource
from sqllocalization.errors import ConfigurationError, require
from sqllocalization.localizer import StringLocalizer
from sqllocalization.naming import BaseNameRegistry, ResourceOwner, resource_prefix
from sqllocalization.options import LocalizationOptions

__all__ = ["LocalizerFactory", "LoggerFactory"]

logger = logging.getLogger(__name__)

type LoggerFactory = Callable[[str], logging.Logger]
"""Callable returning a logger for a name (logging.getLogger by default)."""


class LocalizerFactory:
    """Creates and caches StringLocalizers.

    Example:
        >>> factory = LocalizerFactory(options)
        >>> home = factory.create(HomeView)  # base name "app.views.home.HomeView"
        >>> home is factory.create(HomeView)
        True
        >>> shared = factory.create_from_name("app.Shared.Layout", "app")

    Args:
        options: Source options and base-name narrowing rule
        logger_factory: Supplies loggers for localizers and data sources
        base_names: Explicit owner -> base name mapping (optional)
        data_source_factory: Builds the data source for each new localizer

    Raises:
        TypeError: If options or logger_factory is None
    """

    __slots__ = (
        "_base_names",
        "_data_source_factory",
        "_localizers",
        "_lock",
        "_logger_factory",
        "_options",
    )

    def __init__(
        self,
        options: LocalizationOptions,
        logger_factory: LoggerFactory = logging.getLogger,
        *,
        base_names: BaseNameRegistry | None = None,
        data_source_factory: DataSourceFactory = SqlDataSource,
    ) -> None:
        self._options = require(options, "options")
        self._logger_factory = require(logger_factory, "logger_factory")
        self._base_names = base_names if base_names is not None else BaseNameRegistry()
        self._data_source_factory = require(data_source_factory, "data_source_factory")
        self._localizers: dict[str, StringLocalizer] = {}
        self._lock = threading.Lock()

    @property
    def options(self) -> LocalizationOptions:
        return self._options

    @property
    def base_names(self) -> BaseNameRegistry:
        return self._base_names

    @property
    def cached_base_names(self) -> tuple[str, ...]:
        """Cache keys of the localizers created so far."""
        with self._lock:
            return tuple(self._localizers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._localizers)

    def __repr__(self) -> str:
        return f"LocalizerFactory(localizers={len(self)})"

    def create(self, owner: ResourceOwner) -> StringLocalizer:
        """Return the localizer for a resource owner.

        The base name comes from the base-name registry: an explicit
        registration, else the class's qualified name (or the string itself).

        Raises:
            TypeError: If owner is None
            ConfigurationError: If the data source cannot be configured
        """
        require(owner, "owner")
        base_name = self._base_names.resolve(owner)
        return self._get_or_create(base_name, lambda: self._create_localizer(base_name))

    def create_from_name(self, base_name: str, location: str) -> StringLocalizer:
        """Return the localizer for an explicit base name within a location.

        location names an importable module (the application's root
        package). The effective base name is resource_prefix(base_name,
        location). Cached under "B=<base_name>,L=<location>".

        Raises:
            TypeError: If base_name or location is None
            ConfigurationError: If location cannot be imported or the data
                source cannot be configured
        """
        require(base_name, "base_name")
        require(location, "location")
        cache_key = EXPLICIT_NAME_CACHE_KEY_FORMAT.format(base_name=base_name, location=location)

        def build() -> StringLocalizer:
            try:
                importlib.import_module(location)
            except ImportError as e:
                msg = f"Location '{location}' cannot be imported: {e}"
                raise ConfigurationError(msg) from e
            prefixed = resource_prefix(base_name, location, self._options.separator)
            return self._create_localizer(prefixed)

        return self._get_or_create(cache_key, build)

    def clear_cache(self) -> None:
        """Drop every cached localizer.

        Localizers already handed out keep working with their own data
        source and miss cache.
        """
        with self._lock:
            count = len(self._localizers)
            self._localizers.clear()
        logger.info("Localizer cache cleared (%d entries)", count)

    def _get_or_create(
        self, cache_key: str, build: Callable[[], StringLocalizer]
    ) -> StringLocalizer:
        localizer = self._localizers.get(cache_key)
        if localizer is not None:
            return localizer

        with self._lock:
            localizer = self._localizers.get(cache_key)
            if localizer is None:
                localizer = build()
                self._localizers[cache_key] = localizer
                logger.debug("Created localizer for '%s'", cache_key)
            return localizer

    def _create_localizer(self, base_name: str) -> StringLocalizer:
        data_source = self._data_source_factory(
            base_name,
            self._options.source_args,
            self._logger_factory(getattr(self._data_source_factory, "__module__", __name__)),
            separator=self._options.separator,
            trailing_segments=self._options.filter_segments,
        )
        return StringLocalizer(
            data_source,
            base_name,
            self._logger_factory(StringLocalizer.__module__),
        )
