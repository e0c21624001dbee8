"""Per-document cache of the last completed pass.

Hover queries are answered from the most recent pass of a document instead
of recomputing it. Entries are invalidated explicitly:

    close_document        -> invalidate(document)
    on_files_changed      -> clear()
    on_config_changed     -> clear()

Entries carry the document version of their pass; a pass for an older
version never replaces a newer entry.

Thread-safe via RWLock: hover lookups share the lock, stores are exclusive.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from intlkeys.core.rwlock import RWLock

if TYPE_CHECKING:
    from intlkeys.translation.types import DocumentPath

    from .pipeline import CheckResult

__all__ = ["DocumentCache"]

logger = logging.getLogger(__name__)


class DocumentCache:
    """Last completed pass per document path.

    Example:
        >>> cache = DocumentCache()
        >>> cache.store("messages/en.json", check_result)
        True
        >>> cache.get("messages/en.json") is check_result
        True
        >>> cache.invalidate("messages/en.json")
        >>> cache.get("messages/en.json") is None
        True
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: dict[DocumentPath, CheckResult] = {}
        self._lock = RWLock()

    def get(self, document: DocumentPath) -> CheckResult | None:
        """Get the cached pass of a document."""
        with self._lock.read():
            return self._entries.get(document)

    def store(self, document: DocumentPath, result: CheckResult) -> bool:
        """Cache a pass unless a newer version is already cached.

        Returns:
            True if the pass was stored, False if it was superseded
        """
        with self._lock.write():
            cached = self._entries.get(document)
            if (
                cached is not None
                and cached.version is not None
                and result.version is not None
                and result.version < cached.version
            ):
                logger.debug(
                    "Discarding pass for %s v%d: v%d already cached",
                    document,
                    result.version,
                    cached.version,
                )
                return False
            self._entries[document] = result
            return True

    def invalidate(self, document: DocumentPath) -> None:
        """Drop the cached pass of one document."""
        with self._lock.write():
            self._entries.pop(document, None)

    def clear(self) -> None:
        """Drop every cached pass."""
        with self._lock.write():
            self._entries.clear()

    def documents(self) -> tuple[DocumentPath, ...]:
        """Documents with a cached pass."""
        with self._lock.read():
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __contains__(self, document: object) -> bool:
        with self._lock.read():
            return document in self._entries
