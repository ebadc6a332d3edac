"""SQL-backed data source.

Reads (CultureName, ResourceKey, <value column>) rows from a configured
table through SQLAlchemy, filtered by the Path column. Rows are fetched once
per data source on first use; see LazyRecordSet for the loading contract.

Required options (SourceOption):
    ConnectionString - SQLAlchemy database URL
    Table - table to query
    Column - column holding the localized value

Python 3.13+. Uses SQLAlchemy for database access.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from sqllocalization.constants import (
    DEFAULT_FILTER_SEGMENTS,
    DEFAULT_SEPARATOR,
    LOAD_QUERY_TEMPLATE,
    PATH_PARAMETER,
)
from sqllocalization.culture import get_current_culture
from sqllocalization.data.records import LazyRecordSet
from sqllocalization.data.source import DataSourceParameters, StringRecord
from sqllocalization.enums import SourceOption
from sqllocalization.errors import ConfigurationError, DataSourceError, require
from sqllocalization.naming import load_filter

if TYPE_CHECKING:
    from sqllocalization.culture import Culture

__all__ = ["SqlDataSource", "clear_engine_cache", "engine_for", "mask_connection_string"]

logger = logging.getLogger(__name__)

REQUIRED_OPTIONS = (SourceOption.CONNECTION_STRING, SourceOption.TABLE, SourceOption.COLUMN)


_engines: dict[str, Engine] = {}
_engines_lock = threading.Lock()


def engine_for(connection_string: str) -> Engine:
    """Return the shared SQLAlchemy engine for a connection string.

    Engines (and their connection pools) are shared by every data source
    pointing at the same database. Creating an engine does not connect.

    Raises:
        ArgumentError: If the URL cannot be parsed
        ImportError: If the database driver is not installed
    """
    with _engines_lock:
        engine = _engines.get(connection_string)
        if engine is None:
            engine = create_engine(connection_string, pool_pre_ping=True)
            _engines[connection_string] = engine
        return engine


def clear_engine_cache() -> None:
    """Dispose and forget all shared engines."""
    with _engines_lock:
        engines = list(_engines.values())
        _engines.clear()
    for engine in engines:
        engine.dispose()


def mask_connection_string(connection_string: str) -> str:
    """Render a connection string with its password hidden, for logging."""
    try:
        return make_url(connection_string).render_as_string(hide_password=True)
    except ArgumentError:
        return connection_string


def _as_text(value: object) -> str:
    # NULL columns read as empty strings
    return "" if value is None else str(value)


class SqlDataSource:
    """DataSource reading localized strings from a relational table.

    Construction validates the options and derives the Path filter; it never
    touches the database. The first get_string()/get_all_names() call runs

        SELECT CultureName, ResourceKey, <Column> FROM <Table> WHERE Path LIKE :path

    and every later call reads the memoized rows.

    Example:
        >>> source = SqlDataSource(
        ...     "Shop.Web.Views.Home",
        ...     {"ConnectionString": "sqlite:///strings.db",
        ...      "Table": "LocalizedStrings", "Column": "Value"},
        ... )
        >>> source.load_filter
        'Views.Home'
        >>> source.get_string("Greeting", get_culture("fr-FR"))
        'Bonjour'

    Args:
        base_name: Base name of the string group
        parameters: Options mapping with ConnectionString, Table and Column
        logger: Logger for load failures (defaults to this module's logger)
        separator: Base-name segment separator
        trailing_segments: Segments kept when deriving the Path filter

    Raises:
        TypeError: If base_name or parameters is None
        ConfigurationError: If an option is missing or the base name is too
            short to derive a Path filter
    """

    __slots__ = (
        "_base_name",
        "_column",
        "_connection_string",
        "_load_filter",
        "_logger",
        "_records",
        "_table",
    )

    def __init__(
        self,
        base_name: str,
        parameters: DataSourceParameters,
        logger: logging.Logger | None = None,
        *,
        separator: str = DEFAULT_SEPARATOR,
        trailing_segments: int = DEFAULT_FILTER_SEGMENTS,
    ) -> None:
        require(base_name, "base_name")
        require(parameters, "parameters")

        for option in REQUIRED_OPTIONS:
            if option not in parameters:
                msg = f"{option} information missing in source arguments."
                raise ConfigurationError(msg, option=option)

        self._base_name = base_name
        self._connection_string = parameters[SourceOption.CONNECTION_STRING]
        self._table = parameters[SourceOption.TABLE]
        self._column = parameters[SourceOption.COLUMN]
        self._load_filter = load_filter(base_name, separator, trailing_segments)
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._records = LazyRecordSet(self._fetch, description=base_name)

    @property
    def base_name(self) -> str:
        return self._base_name

    @property
    def load_filter(self) -> str:
        """Value bound to the Path LIKE parameter."""
        return self._load_filter

    @property
    def loaded(self) -> bool:
        """True once rows have been fetched successfully."""
        return self._records.loaded

    def __repr__(self) -> str:
        return (
            f"SqlDataSource(base_name={self._base_name!r}, table={self._table!r}, "
            f"column={self._column!r}, loaded={self.loaded})"
        )

    def get_string(self, key: str, culture: Culture | None = None) -> str | None:
        """Return the value for key, preferring culture over the neutral entry.

        Args:
            key: Resource key
            culture: Culture to resolve for; None uses the ambient culture

        Returns:
            Stored value, or None if neither entry exists

        Raises:
            TypeError: If key is None
            DataSourceError: If the rows cannot be fetched
        """
        require(key, "key")
        resolved = culture if culture is not None else get_current_culture()
        return self._records.match_string(key, resolved)

    def get_all_names(
        self, include_parent_cultures: bool, culture: Culture | None = None
    ) -> tuple[str, ...]:
        """Return every key stored for culture (or its sibling cultures).

        Raises:
            DataSourceError: If the rows cannot be fetched
            CultureNotFoundError: If a stored culture name is invalid
        """
        resolved = culture if culture is not None else get_current_culture()
        return self._records.match_names(include_parent_cultures, resolved)

    def _fetch(self) -> list[StringRecord]:
        statement = text(LOAD_QUERY_TEMPLATE.format(column=self._column, table=self._table))
        try:
            with engine_for(self._connection_string).connect() as connection:
                rows = connection.execute(statement, {PATH_PARAMETER: self._load_filter})
                # Positional: drivers may fold unquoted identifiers to another case
                return [
                    StringRecord(
                        culture_name=_as_text(culture_name),
                        key=_as_text(key),
                        value=_as_text(value),
                    )
                    for culture_name, key, value in rows
                ]
        except (SQLAlchemyError, ImportError) as e:
            target = mask_connection_string(self._connection_string)
            self._logger.critical(
                "Connection string: %s; Table: %s; Column: %s; Error: %s",
                target,
                self._table,
                self._column,
                e,
                exc_info=True,
            )
            msg = f"Failed to load strings for '{self._base_name}' from {self._table}: {e}"
            raise DataSourceError(
                msg, connection_target=target, table=self._table, column=self._column
            ) from e
