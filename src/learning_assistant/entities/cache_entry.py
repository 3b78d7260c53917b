"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any

from .request_type import RequestType


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached model result.

    There is at most one entry per (request_type, fingerprint); storing
    again under the same key replaces the entry wholesale.

    Attributes:
        key: Composite cache key, "<request_type>:<fingerprint>"
        data: The result payload produced for this input
        created_at: When this entry was stored (Unix timestamp)
        request_type: Which operation produced the result
        fingerprint: Digest of the canonicalized input payload
    """

    key: str
    data: Any
    created_at: float
    request_type: RequestType
    fingerprint: str

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was stored."""
        return now - self.created_at

    def is_fresh(self, now: float, ttl: float) -> bool:
        """An entry is fresh while its age has not passed the TTL."""
        return self.age(now) <= ttl
