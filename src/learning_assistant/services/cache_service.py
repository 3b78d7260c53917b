"""Response cache service.

Deduplicates identical model requests within a validity window. Entries
are keyed by request type plus a fingerprint of the input payload and
expire lazily: freshness is checked on lookup, and stale entries are
swept opportunistically whenever something new is stored.
"""

import hashlib
import json
import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from learning_assistant.config import settings
from learning_assistant.entities import CacheEntryEntity, RequestType
from learning_assistant.protocols import CacheStore

logger = logging.getLogger(__name__)


def fingerprint(payload: Any) -> str:
    """Deterministic digest of a JSON-compatible payload.

    Keys are sorted recursively before serialization, so two payloads
    that are structurally equal produce the same fingerprint regardless
    of key insertion order.

    Args:
        payload: Any JSON-serializable value

    Returns:
        SHA-256 hex digest of the canonical serialization
    """
    canonical = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def cache_key(request_type: RequestType, digest: str) -> str:
    """Compose the storage key for a request type and fingerprint."""
    return f"{request_type.value}:{digest}"


def to_datetime(timestamp: float | None) -> datetime | None:
    """Convert a Unix timestamp to an aware UTC datetime."""
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class CacheService:
    """Time-to-live response cache over a CacheStore.

    There is no entry-count cap; growth is bounded only by expiry.

    Example:
        ```python
        from learning_assistant.repositories import MemoryCacheRepository
        from learning_assistant.services import CacheService

        cache = CacheService.create(repository=MemoryCacheRepository.create())
        cache.set(RequestType.TEST_GENERATION, {"topic": "DP"}, {"questions": []})
        cache.get(RequestType.TEST_GENERATION, {"topic": "DP"})  # {"questions": []}
        ```
    """

    def __init__(
        self,
        repository: CacheStore,
        ttl: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache service.

        Args:
            repository: Cache storage backend (required).
            ttl: Time-to-live for entries in seconds. Defaults to settings.
            clock: Returns the current Unix time in seconds.
        """
        self._repository = repository
        self._ttl = ttl or settings.cache_ttl_seconds
        self._clock = clock

    @classmethod
    def create(
        cls,
        repository: CacheStore,
        ttl: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "CacheService":
        """Factory method to create CacheService with sensible defaults.

        Args:
            repository: Cache storage backend (required).
            ttl: Time-to-live in seconds. If None, uses settings.
            clock: Time source. Defaults to time.time.

        Returns:
            Configured CacheService instance
        """
        return cls(repository=repository, ttl=ttl, clock=clock)

    def get(self, request_type: RequestType | str, payload: Any) -> Any | None:
        """Return the cached result for this request, if fresh.

        An entry found past its TTL is removed and treated as a miss.

        Args:
            request_type: Which operation the result belongs to
            payload: The request payload

        Returns:
            The stored data, or None on a miss
        """
        request_type = RequestType(request_type)
        key = cache_key(request_type, fingerprint(payload))
        entry = self._repository.get(key)

        if entry is None:
            logger.debug("MISS - %s (%s)", request_type.value, key, extra={"category": "CACHE"})
            return None

        if not entry.is_fresh(self._clock(), self._ttl):
            self._repository.delete(key, expected=entry)
            logger.debug("EXPIRED - %s (%s)", request_type.value, key, extra={"category": "CACHE"})
            return None

        logger.debug("HIT - %s (%s)", request_type.value, key, extra={"category": "CACHE"})
        return entry.data

    def set(self, request_type: RequestType | str, payload: Any, data: Any) -> None:
        """Store a result, replacing any previous entry for the same request.

        Also sweeps entries that have already expired.

        Args:
            request_type: Which operation produced the result
            payload: The request payload
            data: The result to cache
        """
        request_type = RequestType(request_type)
        digest = fingerprint(payload)
        key = cache_key(request_type, digest)

        self._repository.put(
            CacheEntryEntity(
                key=key,
                data=data,
                created_at=self._clock(),
                request_type=request_type,
                fingerprint=digest,
            )
        )
        logger.debug("SET - %s (%s)", request_type.value, key, extra={"category": "CACHE"})

        self.sweep_expired()

    def sweep_expired(self) -> int:
        """Remove every entry whose age exceeds the TTL.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        removed = self._repository.delete_where(lambda entry: not entry.is_fresh(now, self._ttl))
        if removed:
            logger.debug("Swept %d expired entries", removed, extra={"category": "CACHE"})
        return removed

    def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries deleted
        """
        count = self._repository.clear_all()
        logger.debug("CLEAR - %d entries", count, extra={"category": "CACHE"})
        return count

    def stats(self) -> dict[str, Any]:
        """Aggregate over every stored entry.

        Entries that have expired but not yet been evicted are counted.

        Returns:
            Dictionary with total_entries, by_type, oldest_entry and
            newest_entry (datetimes, None when the cache is empty)
        """
        entries = self._repository.entries()
        by_type: dict[str, int] = {}
        for entry in entries:
            by_type[entry.request_type.value] = by_type.get(entry.request_type.value, 0) + 1

        created = [entry.created_at for entry in entries]
        return {
            "total_entries": len(entries),
            "by_type": by_type,
            "oldest_entry": to_datetime(min(created)) if created else None,
            "newest_entry": to_datetime(max(created)) if created else None,
        }

    @property
    def ttl(self) -> float:
        """Get the time-to-live in seconds."""
        return self._ttl

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository
