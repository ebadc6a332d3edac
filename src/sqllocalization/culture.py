"""Cultures and the ambient UI culture.

A Culture pairs a canonical BCP-47 name (the spelling stored in the
CultureName column) with the Babel Locale used for formatting. The empty
name is the invariant culture: records stored under it are the neutral
fallback entries.

The ambient culture lives in a ContextVar, so each thread and each async
task sees its own value. Lookups that do not name a culture use it.

Python 3.13+. Uses Babel for CLDR validation.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from babel import Locale, UnknownLocaleError
from babel.core import parse_locale

from sqllocalization.constants import (
    INVARIANT_CULTURE_NAME,
    INVARIANT_FORMATTING_LOCALE,
    MAX_CULTURE_CACHE_SIZE,
)
from sqllocalization.errors import CultureNotFoundError, require

__all__ = [
    "Culture",
    "clear_culture_cache",
    "culture_scope",
    "get_culture",
    "get_current_culture",
    "get_system_locale",
    "invariant_culture",
    "normalize_locale",
    "reset_current_culture",
    "set_current_culture",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Culture:
    """Immutable language/region tag with its Babel formatting locale.

    Use get_culture() to construct instances; it validates the name and
    caches the result.

    Equality and hashing consider only the canonical name.

    Attributes:
        name: Canonical BCP-47 name ("fr-FR", "zh-Hant-TW"); "" for invariant
        babel_locale: Babel Locale used for number and date formatting
    """

    name: str
    babel_locale: Locale = field(compare=False, repr=False)

    def __str__(self) -> str:
        return self.name

    @property
    def is_invariant(self) -> bool:
        """True for the neutral culture (empty name)."""
        return self.name == INVARIANT_CULTURE_NAME

    @property
    def parent(self) -> Culture:
        """Next less specific culture.

        Drops the variant, else the territory, else the script; a bare
        language's parent is the invariant culture, which is its own parent.

        Example:
            >>> get_culture("fr-FR").parent.name
            'fr'
            >>> get_culture("fr").parent.is_invariant
            True
        """
        if self.is_invariant:
            return self
        language, territory, script, variant = _split(self.name)
        if variant:
            variant = None
        elif territory:
            territory = None
        elif script:
            script = None
        else:
            return invariant_culture()
        return get_culture(_join(language, territory, script, variant))


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
    """
    return locale_code.strip().replace("-", "_")


def _split(name: str) -> tuple[str, str | None, str | None, str | None]:
    # parse_locale appends a modifier element only when one is present
    language, territory, script, variant = parse_locale(normalize_locale(name))[:4]
    return language, territory, script, variant


def _join(
    language: str, territory: str | None, script: str | None, variant: str | None
) -> str:
    return "-".join(part for part in (language, script, territory, variant) if part)


@functools.lru_cache(maxsize=MAX_CULTURE_CACHE_SIZE)
def _parse_culture(name: str) -> Culture:
    if not name.strip():
        return Culture(
            name=INVARIANT_CULTURE_NAME,
            babel_locale=Locale.parse(INVARIANT_FORMATTING_LOCALE),
        )

    try:
        parts = _split(name)
        babel_locale = Locale.parse(normalize_locale(name))
    except UnknownLocaleError as e:
        msg = f"Unknown culture '{name}': {e}"
        raise CultureNotFoundError(msg, culture_name=name) from e
    except ValueError as e:
        msg = f"Invalid culture name '{name}': {e}"
        raise CultureNotFoundError(msg, culture_name=name) from e

    return Culture(name=_join(*parts), babel_locale=babel_locale)


def get_culture(culture: Culture | str) -> Culture:
    """Resolve a culture name (or pass a Culture through).

    Accepts BCP-47 or POSIX separators in any letter case. Results are cached,
    so repeated calls with the same name return the same instance.

    Args:
        culture: Culture instance or name ("fr-FR", "fr_fr", "" for invariant)

    Returns:
        Culture with canonical name

    Raises:
        TypeError: If culture is None
        CultureNotFoundError: If the name is malformed or unknown to CLDR

    Example:
        >>> get_culture("fr_fr").name
        'fr-FR'
    """
    require(culture, "culture")
    if isinstance(culture, Culture):
        return culture
    return _parse_culture(culture)


def invariant_culture() -> Culture:
    """Return the neutral culture (empty name)."""
    return _parse_culture(INVARIANT_CULTURE_NAME)


def get_system_locale() -> str | None:
    """Detect the OS locale from the locale module and environment.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales and strips encoding suffixes.

    Returns:
        Locale code in POSIX format, or None if nothing usable is set
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale.split(".")[0])
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX"):
            return normalize_locale(value.split(".")[0])

    return None


@functools.lru_cache(maxsize=1)
def _default_culture() -> Culture:
    system_locale = get_system_locale()
    if system_locale is None:
        logger.warning("Could not determine system locale. Using the invariant culture")
        return invariant_culture()
    try:
        return get_culture(system_locale)
    except CultureNotFoundError as e:
        logger.warning(
            "System locale '%s' is not usable: %s. Using the invariant culture",
            system_locale,
            e,
        )
        return invariant_culture()


_current_culture: ContextVar[Culture | None] = ContextVar(
    "sqllocalization_current_culture", default=None
)


def get_current_culture() -> Culture:
    """Get the ambient UI culture for the current thread or task.

    Falls back to the system locale (or the invariant culture) when no
    culture has been set in this context.
    """
    culture = _current_culture.get()
    if culture is None:
        return _default_culture()
    return culture


def set_current_culture(culture: Culture | str) -> Token[Culture | None]:
    """Set the ambient UI culture for the current context.

    Args:
        culture: Culture instance or name

    Returns:
        Token that can be passed to reset_current_culture()
    """
    return _current_culture.set(get_culture(culture))


def reset_current_culture(token: Token[Culture | None]) -> None:
    """Restore the ambient culture that was active before set_current_culture()."""
    _current_culture.reset(token)


@contextmanager
def culture_scope(culture: Culture | str) -> Generator[Culture]:
    """Context manager that scopes the ambient UI culture.

    Usage:
        with culture_scope("fr-FR"):
            localizer["Greeting"]  # resolved against fr-FR
        # previous culture restored here
    """
    token = set_current_culture(culture)
    try:
        yield get_current_culture()
    finally:
        reset_current_culture(token)


def clear_culture_cache() -> None:
    """Clear the parsed-culture and default-culture caches."""
    _parse_culture.cache_clear()
    _default_culture.cache_clear()
