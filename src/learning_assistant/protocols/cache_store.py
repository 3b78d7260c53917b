"""Cache storage protocol.

Defines the interface for the keyed storage behind the response cache.
Freshness is decided by the cache service, not the store: a store only
holds, returns and removes entries by key.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from learning_assistant.entities import CacheEntryEntity


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed. Every method must be atomic with
    respect to concurrent callers.
    """

    def get(self, key: str) -> CacheEntryEntity | None:
        """Return the entry stored under key, if any.

        Args:
            key: The composite cache key

        Returns:
            The stored entry, or None
        """
        ...

    def put(self, entry: CacheEntryEntity) -> None:
        """Store an entry, replacing any entry with the same key.

        Args:
            entry: The entry to store
        """
        ...

    def delete(self, key: str, expected: CacheEntryEntity | None = None) -> bool:
        """Delete a specific entry by key.

        Args:
            key: The storage key to delete
            expected: If given, delete only while this exact entry is stored

        Returns:
            True if deleted, False otherwise
        """
        ...

    def delete_where(self, predicate: Callable[[CacheEntryEntity], bool]) -> int:
        """Delete every entry matching predicate in one atomic pass.

        Args:
            predicate: Callable taking a stored entry

        Returns:
            Number of entries deleted
        """
        ...

    def entries(self) -> list[CacheEntryEntity]:
        """Return a snapshot of all stored entries."""
        ...

    def clear_all(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries deleted
        """
        ...

    def count_all(self) -> int:
        """Count total entries in the cache."""
        ...
