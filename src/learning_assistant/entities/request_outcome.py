"""Result of one orchestrated request."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RequestOutcome:
    """What the request service hands back to the HTTP layer.

    Attributes:
        data: The model result (live or cached)
        from_cache: Whether the result was served from the cache
        duration_ms: Time recorded in the ledger for this request
        history_id: Identifier of the ledger entry that was appended
    """

    data: Any
    from_cache: bool
    duration_ms: int
    history_id: str
