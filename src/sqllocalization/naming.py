"""Base-name composition.

A base name identifies a group of localizable strings. It is the
localizer-cache key in the factory and, narrowed by load_filter(), the
value matched against the Path column when records are loaded.

Two derivation rules exist and are deliberately kept apart:
    - resource_prefix(): explicit (base_name, location) pairs, prefix trim
    - load_filter(): any base name, keep the trailing segments

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import threading

from sqllocalization.constants import DEFAULT_FILTER_SEGMENTS, DEFAULT_SEPARATOR
from sqllocalization.errors import ConfigurationError, require

__all__ = [
    "BaseNameRegistry",
    "ResourceOwner",
    "load_filter",
    "qualified_name",
    "resource_prefix",
    "trim_prefix",
]

type ResourceOwner = type | str
"""Logical owner of a string group: a class, or an explicit string identifier."""


def qualified_name(owner: type) -> str:
    """Fully-qualified dotted name of a class.

    Example:
        >>> class Index: ...
        >>> qualified_name(Index)  # defined in module app.views.home
        'app.views.home.Index'
    """
    return f"{owner.__module__}.{owner.__qualname__}"


def trim_prefix(name: str, prefix: str) -> str:
    """Remove prefix from name if present (ordinal comparison)."""
    if name.startswith(prefix):
        return name[len(prefix) :]
    return name


def resource_prefix(
    base_name: str, location: str, separator: str = DEFAULT_SEPARATOR
) -> str:
    """Compose the base name for an explicit (base_name, location) pair.

    The location is prepended to the base name with the "location + separator"
    prefix trimmed. No separator is re-inserted, so "App.Views.Home" under
    location "App" becomes "AppViews.Home"; stored Path values depend on
    this exact spelling.

    Args:
        base_name: Name of the resource group to look up
        location: Module name of the application owning the resources
        separator: Segment separator

    Returns:
        Composed base name

    Raises:
        ValueError: If base_name or location is empty
    """
    if not base_name:
        msg = "base_name must not be empty"
        raise ValueError(msg)
    if not location:
        msg = "location must not be empty"
        raise ValueError(msg)
    return location + trim_prefix(base_name, location + separator)


def load_filter(
    base_name: str,
    separator: str = DEFAULT_SEPARATOR,
    trailing_segments: int = DEFAULT_FILTER_SEGMENTS,
) -> str:
    """Derive the Path filter used when loading records for a base name.

    Keeps everything after the separator found trailing_segments positions
    from the end: "App.Web.Views.Home" -> "Views.Home" with the defaults.

    Precondition: base_name contains at least trailing_segments separators.

    Args:
        base_name: Base name to narrow
        separator: Segment separator
        trailing_segments: Number of trailing segments to keep

    Returns:
        Filter string matched with LIKE against the Path column

    Raises:
        ConfigurationError: If base_name has too few separators
        ValueError: If separator is empty or trailing_segments is not positive
    """
    if not separator:
        msg = "separator must not be empty"
        raise ValueError(msg)
    if trailing_segments < 1:
        msg = "trailing_segments must be positive"
        raise ValueError(msg)
    positions = [i for i, char in enumerate(base_name) if base_name.startswith(separator, i)]
    if len(positions) < trailing_segments:
        msg = (
            f"Base name '{base_name}' has {len(positions)} '{separator}' separator(s); "
            f"at least {trailing_segments} are required to derive a load filter"
        )
        raise ConfigurationError(msg)
    return base_name[positions[-trailing_segments] + len(separator) :]


class BaseNameRegistry:
    """Explicit mapping from resource owners to base names.

    Registering an owner pins its base name independently of where the
    class lives. Unregistered classes fall back to qualified_name();
    unregistered string identifiers are used as-is.

    Thread Safety:
        Registration and resolution are guarded by a lock.

    Example:
        >>> registry = BaseNameRegistry()
        >>> registry.register("checkout", "Shop.Web.Views.Checkout")
        >>> registry.resolve("checkout")
        'Shop.Web.Views.Checkout'
    """

    __slots__ = ("_lock", "_names")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._names: dict[ResourceOwner, str] = {}

    def register(self, owner: ResourceOwner, base_name: str) -> None:
        """Associate an owner with a base name, replacing any previous mapping.

        Raises:
            TypeError: If owner or base_name is None
            ValueError: If base_name is empty
        """
        require(owner, "owner")
        require(base_name, "base_name")
        if not base_name:
            msg = "base_name must not be empty"
            raise ValueError(msg)
        with self._lock:
            self._names[owner] = base_name

    def resolve(self, owner: ResourceOwner) -> str:
        """Return the base name for an owner.

        Raises:
            TypeError: If owner is None or neither a class nor a string
        """
        require(owner, "owner")
        with self._lock:
            registered = self._names.get(owner)
        if registered is not None:
            return registered
        match owner:
            case type():
                return qualified_name(owner)
            case str():
                return owner
            case _:
                msg = f"owner must be a class or a string, got {type(owner).__name__}"
                raise TypeError(msg)

    def __contains__(self, owner: object) -> bool:
        with self._lock:
            return owner in self._names

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)
