"""In-memory implementation of CacheStore.

Process-local dict storage. State is volatile and reset on restart.
"""

import threading
from collections.abc import Callable

from learning_assistant.entities import CacheEntryEntity


class MemoryCacheRepository:
    """Dict-backed implementation of the CacheStore protocol.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    A lock guards the dict so each operation stays atomic when FastAPI
    runs sync endpoints on its threadpool.
    """

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls) -> "MemoryCacheRepository":
        """Factory method to create MemoryCacheRepository.

        Returns:
            Empty MemoryCacheRepository
        """
        return cls()

    def get(self, key: str) -> CacheEntryEntity | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, entry: CacheEntryEntity) -> None:
        with self._lock:
            self._entries[entry.key] = entry

    def delete(self, key: str, expected: CacheEntryEntity | None = None) -> bool:
        with self._lock:
            current = self._entries.get(key)
            if current is None or (expected is not None and current is not expected):
                return False
            del self._entries[key]
            return True

    def delete_where(self, predicate: Callable[[CacheEntryEntity], bool]) -> int:
        """Delete every entry for which predicate(entry) is true.

        Args:
            predicate: Callable taking a CacheEntryEntity

        Returns:
            Number of entries deleted
        """
        with self._lock:
            doomed = [key for key, entry in self._entries.items() if predicate(entry)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def entries(self) -> list[CacheEntryEntity]:
        with self._lock:
            return list(self._entries.values())

    def clear_all(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)
