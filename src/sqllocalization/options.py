"""Localization configuration.

LocalizationOptions carries the data-source options delivered at startup
plus the base-name narrowing rule. The instance is frozen; source_args is
a plain dict so setup callbacks can populate it before the factory is built.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from sqllocalization.constants import (
    DEFAULT_ENV_PREFIX,
    DEFAULT_FILTER_SEGMENTS,
    DEFAULT_SEPARATOR,
)
from sqllocalization.enums import SourceOption

__all__ = ["LocalizationOptions"]


@dataclass(frozen=True, slots=True)
class LocalizationOptions:
    """Configuration for LocalizerFactory and the data sources it builds.

    Attributes:
        source_args: Options handed to every data source. The SQL source
            requires ConnectionString, Table and Column (see SourceOption).
        separator: Base-name segment separator (default: ".").
        filter_segments: Trailing base-name segments kept as the Path filter
            (default: 2). Base names need at least this many separators.

    Example:
        >>> options = LocalizationOptions(source_args={
        ...     "ConnectionString": "postgresql+psycopg://app@db/app",
        ...     "Table": "LocalizedStrings",
        ...     "Column": "Value",
        ... })
        >>> options.source_args["Table"]
        'LocalizedStrings'
    """

    source_args: dict[str, str] = field(default_factory=dict)
    separator: str = DEFAULT_SEPARATOR
    filter_segments: int = DEFAULT_FILTER_SEGMENTS

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            TypeError: If source_args is None
            ValueError: If separator is empty or filter_segments is not positive
        """
        if self.source_args is None:
            msg = "source_args must not be None"
            raise TypeError(msg)
        if not self.separator:
            msg = "separator must not be empty"
            raise ValueError(msg)
        if self.filter_segments <= 0:
            msg = "filter_segments must be positive"
            raise ValueError(msg)
        # Own a copy so later mutation of the caller's mapping has no effect
        object.__setattr__(self, "source_args", dict(self.source_args))

    @classmethod
    def from_environ(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
    ) -> LocalizationOptions:
        """Build options from environment variables.

        Reads <prefix>CONNECTION_STRING, <prefix>TABLE and <prefix>COLUMN.
        Unset variables are left out, so a missing one surfaces as a
        ConfigurationError when the first data source is built.

        Args:
            prefix: Variable name prefix
            environ: Mapping to read instead of os.environ
        """
        env = os.environ if environ is None else environ
        source_args = {
            str(option): env[prefix + option.env_suffix]
            for option in SourceOption
            if prefix + option.env_suffix in env
        }
        return cls(source_args=source_args)
