"""sqllocalization - Database-backed string localization.

Serves culture-specific strings from a relational table through a
localizer contract: keyed and formatted lookups, enumeration, and
culture-bound views. Each base name gets one cached localizer whose rows
are loaded once, on first use, with a per-localizer miss cache in front.

Public API:
    add_localization - Composition root returning LocalizationServices
    LocalizerFactory - Per-base-name localizer cache
    StringLocalizer - Lookup engine for one base name (ambient culture)
    CultureBoundLocalizer - View pinned to one culture
    LocalizedString - Lookup result (value, resource_not_found, searched_location)
    LocalizationOptions - Source options and base-name narrowing rule
    SqlDataSource - SQLAlchemy-backed data source
    culture_scope / get_culture - Ambient culture control and culture parsing

Exceptions:
    LocalizationError - Base exception class
    ConfigurationError - Missing options, unusable base names or locations
    DataSourceError - Backing-store fetch failures
    CultureNotFoundError - Invalid culture names
    FormattingError - Template/argument mismatches

Submodules:
    sqllocalization.data - DataSource protocol, LazyRecordSet, SqlDataSource
    sqllocalization.naming - Base-name composition and BaseNameRegistry
    sqllocalization.culture - Culture values and the ambient culture
"""

from .culture import Culture, culture_scope, get_culture, get_current_culture
from .data import DataSource, SqlDataSource, StringRecord
from .enums import SourceOption
from .errors import (
    ConfigurationError,
    CultureNotFoundError,
    DataSourceError,
    FormattingError,
    LocalizationError,
)
from .factory import LocalizerFactory
from .localizer import CultureBoundLocalizer, LocalizedString, Localizer, StringLocalizer
from .naming import BaseNameRegistry
from .options import LocalizationOptions
from .registration import LocalizationServices, OwnerLocalizer, add_localization

# Version information - Auto-populated from package metadata
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("sqllocalization")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BaseNameRegistry",
    "ConfigurationError",
    "Culture",
    "CultureBoundLocalizer",
    "CultureNotFoundError",
    "DataSource",
    "DataSourceError",
    "FormattingError",
    "LocalizationError",
    "LocalizationOptions",
    "LocalizationServices",
    "LocalizedString",
    "Localizer",
    "LocalizerFactory",
    "OwnerLocalizer",
    "SourceOption",
    "SqlDataSource",
    "StringLocalizer",
    "StringRecord",
    "__version__",
    "add_localization",
    "culture_scope",
    "get_culture",
    "get_current_culture",
]
