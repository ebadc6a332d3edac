"""Shared constants for sqllocalization.

Centralizes the load query, cache-key formats and naming defaults so the
data sources, localizers and factory agree on a single spelling.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Culture handling
    "INVARIANT_CULTURE_NAME",
    "INVARIANT_FORMATTING_LOCALE",
    "MAX_CULTURE_CACHE_SIZE",
    # Base-name composition
    "DEFAULT_SEPARATOR",
    "DEFAULT_FILTER_SEGMENTS",
    # Cache keys
    "MISS_CACHE_KEY_FORMAT",
    "EXPLICIT_NAME_CACHE_KEY_FORMAT",
    # Backing store
    "LOAD_QUERY_TEMPLATE",
    "PATH_PARAMETER",
    "CULTURE_NAME_COLUMN",
    "RESOURCE_KEY_COLUMN",
    # Configuration
    "DEFAULT_ENV_PREFIX",
]

# ============================================================================
# CULTURE HANDLING
# ============================================================================

INVARIANT_CULTURE_NAME = ""
"""Name of the neutral culture. Records stored with this name are fallbacks."""

INVARIANT_FORMATTING_LOCALE = "en"
"""Babel locale used when formatting under the invariant culture."""

MAX_CULTURE_CACHE_SIZE = 128
"""Maximum number of parsed cultures kept by get_culture()."""

# ============================================================================
# BASE-NAME COMPOSITION
# ============================================================================

DEFAULT_SEPARATOR = "."
"""Separator between namespace segments of a base name."""

DEFAULT_FILTER_SEGMENTS = 2
"""Trailing segments kept when deriving the load filter from a base name.

"App.Web.Views.Home" keeps "Views.Home". A base name needs at least this
many separators.
"""

# ============================================================================
# CACHE KEYS
# ============================================================================

MISS_CACHE_KEY_FORMAT = "name={name}&culture={culture}"

EXPLICIT_NAME_CACHE_KEY_FORMAT = "B={base_name},L={location}"
"""Factory cache key for create_from_name(); cannot collide with a type base name."""

# ============================================================================
# BACKING STORE
# ============================================================================

CULTURE_NAME_COLUMN = "CultureName"
RESOURCE_KEY_COLUMN = "ResourceKey"
PATH_PARAMETER = "path"

# Table and value column come from configuration and are interpolated as-is.
LOAD_QUERY_TEMPLATE = (
    f"SELECT {CULTURE_NAME_COLUMN}, {RESOURCE_KEY_COLUMN}, {{column}} "
    f"FROM {{table}} WHERE Path LIKE :{PATH_PARAMETER}"
)

# ============================================================================
# CONFIGURATION
# ============================================================================

DEFAULT_ENV_PREFIX = "SQLLOCALIZATION_"
