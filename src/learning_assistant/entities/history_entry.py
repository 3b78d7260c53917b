"""History entry domain entity."""

from dataclasses import dataclass
from typing import Any

from .request_type import RequestType


@dataclass(frozen=True)
class HistoryEntryEntity:
    """One completed request, as recorded in the call ledger.

    Attributes:
        id: Identifier assigned when the entry was appended
        request_type: Which operation was requested
        input: The exact request payload
        output: The exact result payload
        timestamp: When the entry was appended (Unix timestamp)
        duration_ms: Wall-clock time to produce the result, if measured
        from_cache: True if the result came from the response cache
    """

    id: str
    request_type: RequestType
    input: Any
    output: Any
    timestamp: float
    duration_ms: int | None = None
    from_cache: bool = False
