"""History storage protocol.

Defines the interface for the ordered, capacity-bounded storage behind
the call ledger. Entries are kept newest first.
"""

from typing import Protocol, runtime_checkable

from learning_assistant.entities import HistoryEntryEntity


@runtime_checkable
class HistoryStore(Protocol):
    """Protocol for call-history storage backends.

    Once more than `capacity` entries have been prepended, the oldest
    entries (by insertion order) are dropped.
    """

    @property
    def capacity(self) -> int:
        """Maximum number of entries kept."""
        ...

    def prepend(self, entry: HistoryEntryEntity) -> None:
        """Insert an entry at the front (newest position).

        Args:
            entry: The entry to insert
        """
        ...

    def entries(self) -> list[HistoryEntryEntity]:
        """Return a snapshot of all entries, newest first."""
        ...

    def find_by_id(self, entry_id: str) -> HistoryEntryEntity | None:
        """Look up an entry by its identifier.

        Args:
            entry_id: The identifier assigned at append time

        Returns:
            The entry, or None if it never existed or was evicted
        """
        ...

    def newest(self) -> HistoryEntryEntity | None:
        """Return the head of the sequence, or None when empty."""
        ...

    def oldest(self) -> HistoryEntryEntity | None:
        """Return the tail of the sequence, or None when empty."""
        ...

    def clear_all(self) -> int:
        """Remove all entries.

        Returns:
            Number of entries removed
        """
        ...

    def count_all(self) -> int:
        """Count entries currently held."""
        ...
