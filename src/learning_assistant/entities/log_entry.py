"""Log entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LogEntryEntity:
    """A captured application log record.

    Attributes:
        id: Identifier assigned on capture
        timestamp: When the record was emitted (Unix timestamp)
        level: One of "debug", "info", "warn", "error"
        category: Coarse grouping such as "API", "AI" or "CACHE"
        message: The formatted log message
        data: Optional structured context attached to the record
        duration_ms: Optional duration attached to the record
    """

    id: str
    timestamp: float
    level: str
    category: str
    message: str
    data: Any = None
    duration_ms: int | None = None
