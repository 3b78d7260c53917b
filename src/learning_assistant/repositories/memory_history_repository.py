"""In-memory implementation of HistoryStore.

Backed by a bounded deque: newest entries on the left, and once the
deque is full every prepend drops the rightmost (oldest) entry.
"""

import threading
from collections import deque

from learning_assistant.config import settings
from learning_assistant.entities import HistoryEntryEntity


class MemoryHistoryRepository:
    """Deque-backed implementation of the HistoryStore protocol.

    Eviction is by insertion order, not by timestamp.
    """

    def __init__(self, capacity: int | None = None) -> None:
        """Initialize the history repository.

        Args:
            capacity: Maximum entries kept. Defaults to settings.history_limit.
        """
        self._capacity = capacity or settings.history_limit
        if self._capacity <= 0:
            raise ValueError("History capacity must be positive")
        self._entries: deque[HistoryEntryEntity] = deque(maxlen=self._capacity)
        self._lock = threading.Lock()

    @classmethod
    def create(cls, capacity: int | None = None) -> "MemoryHistoryRepository":
        """Factory method to create MemoryHistoryRepository with defaults.

        Args:
            capacity: Maximum entries kept. If None, uses settings.

        Returns:
            Configured MemoryHistoryRepository
        """
        return cls(capacity=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def prepend(self, entry: HistoryEntryEntity) -> None:
        with self._lock:
            self._entries.appendleft(entry)

    def entries(self) -> list[HistoryEntryEntity]:
        with self._lock:
            return list(self._entries)

    def find_by_id(self, entry_id: str) -> HistoryEntryEntity | None:
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def newest(self) -> HistoryEntryEntity | None:
        with self._lock:
            return self._entries[0] if self._entries else None

    def oldest(self) -> HistoryEntryEntity | None:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def clear_all(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)
