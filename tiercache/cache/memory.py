"""
In-process local store for tiercache.

A plain dict keyed by identifier.  There is no locking and no eviction:
callers sharing one store across threads must serialize access
themselves.
"""

import logging
from typing import Dict, Generic, Mapping, Optional, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class InMemoryLocalStore(Generic[V]):
    """Dict-backed :class:`~tiercache.cache.ports.LocalStore`.

    Args:
        initial: Optional mapping used to seed the store.
    """

    def __init__(self, initial: Optional[Mapping[str, V]] = None) -> None:
        self._store: Dict[str, V] = dict(initial or {})

    def fetch(self, identifier: str) -> Optional[V]:
        """Look up a stored value.

        Args:
            identifier: The identifier to look up.

        Returns:
            The stored value, or ``None`` if absent.
        """
        return self._store.get(identifier)

    def persist(self, identifier: str, value: V) -> None:
        """Store a value, overwriting any existing entry.

        Args:
            identifier: The identifier to store under.
            value: The value to store.
        """
        if identifier in self._store:
            logger.debug("Local entry overwritten", extra={"identifier": identifier})
        self._store[identifier] = value

    def invalidate(self, identifier: str) -> bool:
        """Remove an entry.

        Args:
            identifier: The identifier to drop.

        Returns:
            ``True`` if an entry was removed, ``False`` otherwise.
        """
        if identifier in self._store:
            del self._store[identifier]
            logger.info("Local entry invalidated", extra={"identifier": identifier})
            return True
        return False

    def clear(self) -> int:
        """Remove all entries and return how many were removed."""
        count = len(self._store)
        self._store.clear()
        logger.info("Local store cleared", extra={"entries_removed": count})
        return count

    def snapshot(self) -> Dict[str, V]:
        """Shallow copy of the current contents."""
        return dict(self._store)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._store

    @property
    def size(self) -> int:
        """Current number of entries."""
        return len(self._store)
