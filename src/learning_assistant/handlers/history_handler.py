"""HTTP handlers for the call history."""

import logging

from fastapi import HTTPException, status

from learning_assistant.dto import (
    HistoryDetailResponse,
    HistoryEntryItem,
    HistoryListResponse,
    HistoryStats,
    HistoryStatsResponse,
    MessageResponse,
)
from learning_assistant.entities import HistoryEntryEntity, RequestType
from learning_assistant.services import HistoryService
from learning_assistant.services.cache_service import to_datetime

logger = logging.getLogger(__name__)


def to_item(entry: HistoryEntryEntity) -> HistoryEntryItem:
    """Convert a ledger entity to its API representation."""
    return HistoryEntryItem(
        id=entry.id,
        request_type=entry.request_type.value,
        input=entry.input,
        output=entry.output,
        timestamp=to_datetime(entry.timestamp),
        duration_ms=entry.duration_ms,
        from_cache=entry.from_cache,
    )


class HistoryHandler:
    """HTTP handlers for querying and clearing the call history."""

    def __init__(self, history_service: HistoryService) -> None:
        """Initialize the history handler.

        Args:
            history_service: The call ledger (required).
        """
        self._history = history_service

    async def list_history(
        self,
        request_type: RequestType | None = None,
        search: str | None = None,
        from_cache: bool | None = None,
        limit: int | None = None,
    ) -> HistoryListResponse:
        """Handle GET /api/history requests."""
        logger.info(
            "History query request",
            extra={
                "category": "API",
                "data": {
                    "type": request_type.value if request_type else None,
                    "limit": limit,
                    "search": search,
                    "fromCache": from_cache,
                },
            },
        )
        entries = self._history.query(
            request_type=request_type,
            search=search,
            from_cache=from_cache,
            limit=limit,
        )
        logger.debug("History query returned %d entries", len(entries), extra={"category": "API"})

        return HistoryListResponse(data=[to_item(e) for e in entries], total=len(entries))

    async def get_entry(self, entry_id: str) -> HistoryDetailResponse:
        """Handle GET /api/history/{id} requests.

        Raises:
            HTTPException: 404 if no entry has this id
        """
        entry = self._history.get_by_id(entry_id)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="History entry not found",
            )
        return HistoryDetailResponse(data=to_item(entry))

    async def get_stats(self) -> HistoryStatsResponse:
        """Handle GET /api/history/stats requests."""
        stats = self._history.stats()
        return HistoryStatsResponse(data=HistoryStats(**stats))

    async def clear_history(self) -> MessageResponse:
        """Handle DELETE /api/history requests."""
        count = self._history.clear()
        return MessageResponse(success=True, message="History cleared", deleted_count=count)
