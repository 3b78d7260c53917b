"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .cache_entry import CacheEntryEntity
from .history_entry import HistoryEntryEntity
from .log_entry import LogEntryEntity
from .request_outcome import RequestOutcome
from .request_type import RequestType

__all__ = [
    "CacheEntryEntity",
    "HistoryEntryEntity",
    "LogEntryEntity",
    "RequestOutcome",
    "RequestType",
]
