"""Load-once record set shared by data-source implementations.

LazyRecordSet owns the records fetched for one base name. The first lookup
triggers the fetch; later lookups are pure in-memory reads.

Loading State:
    Completion is tracked by an explicit flag, not by "the list is empty".
    A table with no matching rows is loaded exactly once; a fetch that raises
    leaves the set unloaded so the next call tries again.

Thread Safety:
    Double-checked locking: the loaded flag is read without the lock, the
    fetch runs under it. Concurrent first callers block until one fetch
    completes and then all read the same published records. Nothing is
    published until the fetch has returned in full.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from sqllocalization.constants import INVARIANT_CULTURE_NAME
from sqllocalization.culture import Culture, get_culture
from sqllocalization.data.source import StringRecord

__all__ = ["LazyRecordSet"]

logger = logging.getLogger(__name__)


class LazyRecordSet:
    """Lazily fetched, memoized list of StringRecords with culture matching.

    Args:
        fetch: Callable returning every record for the base name; called at
            most once per successful load
        description: Label used in log messages (e.g. the base name)

    Example:
        >>> records = LazyRecordSet(lambda: [StringRecord("", "Greeting", "Hello")])
        >>> records.match_string("Greeting", get_culture("de-DE"))
        'Hello'
    """

    __slots__ = ("_description", "_fetch", "_index", "_load_lock", "_loaded", "_records")

    def __init__(
        self, fetch: Callable[[], Iterable[StringRecord]], description: str = ""
    ) -> None:
        self._fetch = fetch
        self._description = description
        self._load_lock = threading.Lock()
        self._loaded = False
        self._records: tuple[StringRecord, ...] = ()
        self._index: dict[tuple[str, str], str] = {}

    @property
    def loaded(self) -> bool:
        """True once a fetch has completed successfully."""
        return self._loaded

    def records(self) -> tuple[StringRecord, ...]:
        """Return all records in storage order, loading them if needed.

        Raises:
            Propagates whatever the fetch callable raises; the set stays unloaded
        """
        self._ensure_loaded()
        return self._records

    def _ensure_loaded(self) -> None:
        # Fast path: no lock once loaded
        if self._loaded:
            return

        with self._load_lock:
            if self._loaded:
                return

            records = tuple(self._fetch())
            index: dict[tuple[str, str], str] = {}
            for record in records:
                # First stored occurrence wins
                index.setdefault((record.culture_name, record.key), record.value)

            self._records = records
            self._index = index
            self._loaded = True
            logger.info("Loaded %d record(s) for '%s'", len(records), self._description)

    def match_string(self, key: str, culture: Culture) -> str | None:
        """Resolve key for culture: exact entry, then neutral entry, else None."""
        self._ensure_loaded()
        value = self._index.get((culture.name, key))
        if value is not None:
            return value
        return self._index.get((INVARIANT_CULTURE_NAME, key))

    def match_names(self, include_parent_cultures: bool, culture: Culture) -> tuple[str, ...]:
        """List keys stored for culture, in storage order (duplicates kept).

        include_parent_cultures=False: stored culture name equals culture.name.
        include_parent_cultures=True: the stored culture's parent equals
        culture's parent. This is a sibling match, not an ancestor walk:
        for "fr-FR" it returns "fr-CA" keys but not "fr" or neutral keys.

        Raises:
            CultureNotFoundError: If include_parent_cultures and a stored
                culture name cannot be parsed
        """
        records = self.records()
        if not include_parent_cultures:
            return tuple(r.key for r in records if r.culture_name == culture.name)

        parent = culture.parent
        return tuple(r.key for r in records if get_culture(r.culture_name).parent == parent)
