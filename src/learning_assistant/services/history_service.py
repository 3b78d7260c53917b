"""Call ledger service.

Records every completed request (cache hit or live model call) and
answers filter and summary queries over that record. Entries are
immutable once appended; the ledger is newest first and bounded by the
repository's capacity.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from learning_assistant.entities import HistoryEntryEntity, RequestType
from learning_assistant.protocols import HistoryStore
from learning_assistant.services.cache_service import to_datetime

logger = logging.getLogger(__name__)


def _searchable(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str).lower()


class HistoryService:
    """Append-only, capacity-bounded call history.

    Example:
        ```python
        from learning_assistant.repositories import MemoryHistoryRepository
        from learning_assistant.services import HistoryService

        history = HistoryService.create(repository=MemoryHistoryRepository.create())
        history.append(RequestType.CONCEPT_ANALYSIS, {"text": "..."}, {"concepts": []}, 812)
        history.query(search="neural", limit=10)
        ```
    """

    def __init__(
        self,
        repository: HistoryStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the history service.

        Args:
            repository: Ordered history storage (required).
            clock: Returns the current Unix time in seconds.
        """
        self._repository = repository
        self._clock = clock

    @classmethod
    def create(
        cls,
        repository: HistoryStore,
        clock: Callable[[], float] = time.time,
    ) -> "HistoryService":
        """Factory method to create HistoryService.

        Args:
            repository: Ordered history storage (required).
            clock: Time source. Defaults to time.time.

        Returns:
            Configured HistoryService instance
        """
        return cls(repository=repository, clock=clock)

    def append(
        self,
        request_type: RequestType | str,
        input: Any,
        output: Any,
        duration_ms: int | None = None,
        from_cache: bool = False,
    ) -> HistoryEntryEntity:
        """Record one completed request.

        Once the ledger holds more than its capacity, the oldest entries
        are dropped.

        Args:
            request_type: Which operation was requested
            input: The exact request payload
            output: The exact result payload
            duration_ms: Measured wall-clock time, if meaningful
            from_cache: Whether the result came from the cache

        Returns:
            The appended entry
        """
        entry = HistoryEntryEntity(
            id=str(uuid.uuid4()),
            request_type=RequestType(request_type),
            input=input,
            output=output,
            timestamp=self._clock(),
            duration_ms=duration_ms,
            from_cache=from_cache,
        )
        self._repository.prepend(entry)
        return entry

    def query(
        self,
        request_type: RequestType | str | None = None,
        search: str | None = None,
        from_cache: bool | None = None,
        limit: int | None = None,
    ) -> list[HistoryEntryEntity]:
        """Filter the ledger, newest first.

        Filters are applied in order: request type, cache provenance,
        case-insensitive substring search over the serialized input or
        output, then the limit. A limit of None or 0 returns every match.

        Args:
            request_type: Exact request type to keep
            search: Substring to look for in input or output
            from_cache: Exact provenance flag to keep
            limit: Maximum number of entries returned

        Returns:
            Matching entries (empty list when nothing matches)
        """
        entries = self._repository.entries()

        if request_type:
            request_type = RequestType(request_type)
            entries = [e for e in entries if e.request_type == request_type]

        if from_cache is not None:
            entries = [e for e in entries if e.from_cache == from_cache]

        if search:
            needle = search.lower()
            entries = [
                e for e in entries if needle in _searchable(e.input) or needle in _searchable(e.output)
            ]

        if limit:
            entries = entries[:limit]

        return entries

    def get_by_id(self, entry_id: str) -> HistoryEntryEntity | None:
        """Look up an entry by id.

        Args:
            entry_id: Identifier assigned at append time

        Returns:
            The entry, or None if it never existed or has been evicted
        """
        return self._repository.find_by_id(entry_id)

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        count = self._repository.clear_all()
        logger.info("History cleared (%d entries)", count, extra={"category": "API"})
        return count

    def stats(self) -> dict[str, Any]:
        """Summarize the ledger.

        Returns:
            Dictionary with total_entries, by_type, cache_hit_rate (percent,
            0 when empty), average_duration_ms (mean over entries with a
            non-zero duration, 0 when none), oldest_entry and newest_entry
        """
        entries = self._repository.entries()
        total = len(entries)
        by_type: dict[str, int] = {}
        cache_hits = 0
        total_duration = 0
        duration_count = 0

        for entry in entries:
            by_type[entry.request_type.value] = by_type.get(entry.request_type.value, 0) + 1
            if entry.from_cache:
                cache_hits += 1
            if entry.duration_ms:
                total_duration += entry.duration_ms
                duration_count += 1

        oldest = self._repository.oldest()
        newest = self._repository.newest()

        return {
            "total_entries": total,
            "by_type": by_type,
            "cache_hit_rate": (cache_hits / total) * 100 if total else 0.0,
            "average_duration_ms": total_duration / duration_count if duration_count else 0.0,
            "oldest_entry": to_datetime(oldest.timestamp) if oldest else None,
            "newest_entry": to_datetime(newest.timestamp) if newest else None,
        }

    @property
    def capacity(self) -> int:
        """Maximum number of entries kept."""
        return self._repository.capacity

    @property
    def repository(self) -> HistoryStore:
        """Get the underlying repository (for testing)."""
        return self._repository
