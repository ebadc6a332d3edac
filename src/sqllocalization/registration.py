"""Process-wide localization setup.

add_localization() is the composition root: it builds the options, the
singleton LocalizerFactory, and hands out per-request OwnerLocalizer
wrappers. Create it once at startup and pass the returned
LocalizationServices to whatever needs localizers.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from sqllocalization.culture import Culture
from sqllocalization.data.source import DataSourceFactory
from sqllocalization.data.sql import SqlDataSource
from sqllocalization.errors import require
from sqllocalization.factory import LocalizerFactory, LoggerFactory
from sqllocalization.localizer import LocalizedString, Localizer, StringLocalizer
from sqllocalization.naming import BaseNameRegistry, ResourceOwner
from sqllocalization.options import LocalizationOptions

__all__ = ["LocalizationServices", "OwnerLocalizer", "add_localization"]


class OwnerLocalizer:
    """Per-request localizer for one resource owner.

    Cheap to create: it asks the factory for the owner's cached
    StringLocalizer and delegates every call to it.
    """

    __slots__ = ("_localizer", "_owner")

    def __init__(self, factory: LocalizerFactory, owner: ResourceOwner) -> None:
        require(factory, "factory")
        self._owner = require(owner, "owner")
        self._localizer: StringLocalizer = factory.create(owner)

    @property
    def owner(self) -> ResourceOwner:
        return self._owner

    def __repr__(self) -> str:
        return f"OwnerLocalizer(owner={self._owner!r}, base_name={self._localizer.base_name!r})"

    def __getitem__(self, name: str) -> LocalizedString:
        return self._localizer[name]

    def get(self, name: str) -> LocalizedString:
        return self._localizer.get(name)

    def format(self, name: str, *arguments: object) -> LocalizedString:
        return self._localizer.format(name, *arguments)

    def get_all_strings(self, include_parent_cultures: bool = False) -> Iterator[LocalizedString]:
        return self._localizer.get_all_strings(include_parent_cultures)

    def with_culture(self, culture: Culture | str | None) -> Localizer:
        return self._localizer.with_culture(culture)


@dataclass(frozen=True, slots=True)
class LocalizationServices:
    """Handle to the configured localization stack.

    Attributes:
        options: Effective options (after any setup callback ran)
        factory: The singleton LocalizerFactory
    """

    options: LocalizationOptions
    factory: LocalizerFactory

    def localizer_for(self, owner: ResourceOwner) -> OwnerLocalizer:
        """Return a new per-request localizer for owner."""
        return OwnerLocalizer(self.factory, owner)


def add_localization(
    setup: Callable[[LocalizationOptions], None] | None = None,
    *,
    options: LocalizationOptions | None = None,
    logger_factory: LoggerFactory = logging.getLogger,
    base_names: BaseNameRegistry | None = None,
    data_source_factory: DataSourceFactory = SqlDataSource,
) -> LocalizationServices:
    """Configure database-backed localization.

    Example:
        >>> def configure(options: LocalizationOptions) -> None:
        ...     options.source_args.update(
        ...         ConnectionString="sqlite:///strings.db",
        ...         Table="LocalizedStrings",
        ...         Column="Value",
        ...     )
        >>> services = add_localization(configure)
        >>> services.localizer_for(HomeView)["Greeting"]

    Args:
        setup: Callback that populates the options (typically source_args)
        options: Starting options; defaults to empty LocalizationOptions()
        logger_factory: Supplies loggers to localizers and data sources
        base_names: Explicit owner -> base name registrations
        data_source_factory: Builds the data source for each localizer

    Returns:
        LocalizationServices holding the options and the singleton factory
    """
    effective = options if options is not None else LocalizationOptions()
    if setup is not None:
        setup(effective)
    factory = LocalizerFactory(
        effective,
        logger_factory,
        base_names=base_names,
        data_source_factory=data_source_factory,
    )
    return LocalizationServices(options=effective, factory=factory)
