"""HTTP handlers for the developer control surface.

Cache inspection and clearing, plus browsing of the in-process log
buffer.
"""

import logging

from learning_assistant.dto import (
    CacheStatsResponse,
    LogEntryItem,
    LogStatsResponse,
    MessageResponse,
)
from learning_assistant.repositories import LogBufferHandler
from learning_assistant.services import CacheService

logger = logging.getLogger(__name__)


class DevHandler:
    """HTTP handlers for /api/dev endpoints."""

    def __init__(self, cache_service: CacheService, log_buffer: LogBufferHandler) -> None:
        """Initialize the developer handler.

        Args:
            cache_service: The response cache (required).
            log_buffer: The in-process log buffer (required).
        """
        self._cache = cache_service
        self._logs = log_buffer

    async def cache_stats(self) -> CacheStatsResponse:
        """Handle GET /api/dev/cache-stats requests."""
        stats = self._cache.stats()
        logger.debug("Cache stats requested", extra={"category": "DEV_API"})
        return CacheStatsResponse(**stats)

    async def clear_cache(self) -> MessageResponse:
        """Handle POST /api/dev/clear-cache requests."""
        count = self._cache.clear()
        logger.info("Cache cleared manually", extra={"category": "DEV_API"})
        return MessageResponse(success=True, message="Cache cleared", deleted_count=count)

    async def list_logs(
        self,
        level: str | None = None,
        category: str | None = None,
        limit: int | None = 100,
        since: int | None = None,
    ) -> list[LogEntryItem]:
        """Handle GET /api/dev/logs requests."""
        records = self._logs.query(level=level, category=category, limit=limit, since_ms=since)
        return [
            LogEntryItem(
                id=r.id,
                timestamp=int(r.timestamp * 1000),
                level=r.level,
                category=r.category,
                message=r.message,
                data=r.data,
                duration=r.duration_ms,
            )
            for r in records
        ]

    async def log_stats(self) -> LogStatsResponse:
        """Handle GET /api/dev/log-stats requests."""
        stats = self._logs.stats()
        return LogStatsResponse(**stats)

    async def clear_logs(self) -> MessageResponse:
        """Handle POST /api/dev/clear-logs requests."""
        count = self._logs.clear()
        logger.info("Logs cleared", extra={"category": "SYSTEM"})
        return MessageResponse(success=True, message="Logs cleared", deleted_count=count)
