"""In-process log buffer.

A logging.Handler that keeps the most recent application log records in
memory so they can be browsed through the developer endpoints. Callers
attach structure with the standard `extra` mechanism:

    logger.info("Model call done", extra={"category": "AI", "duration_ms": 812})
"""

import logging
import threading
import time
import uuid
from collections import deque
from collections.abc import Callable
from typing import Any

from learning_assistant.config import settings
from learning_assistant.entities import LogEntryEntity

RECENT_ERROR_WINDOW_SECONDS = 60 * 60


def _level_name(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    return "debug"


class LogBufferHandler(logging.Handler):
    """Capacity-bounded, newest-first buffer of captured log records."""

    def __init__(
        self,
        capacity: int | None = None,
        level: int = logging.DEBUG,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the buffer.

        Args:
            capacity: Maximum records kept. Defaults to settings.log_buffer_limit.
            level: Minimum level captured.
            clock: Time source used for the recent-error window.
        """
        super().__init__(level=level)
        self._capacity = capacity or settings.log_buffer_limit
        self._records: deque[LogEntryEntity] = deque(maxlen=self._capacity)
        self._buffer_lock = threading.Lock()
        self._clock = clock

    @property
    def capacity(self) -> int:
        return self._capacity

    def emit(self, record: logging.LogRecord) -> None:
        try:
            data: Any = getattr(record, "data", None)
            if record.exc_info and record.exc_info[1] is not None:
                exc = record.exc_info[1]
                data = {"name": type(exc).__name__, "message": str(exc)}

            entry = LogEntryEntity(
                id=uuid.uuid4().hex,
                timestamp=record.created,
                level=_level_name(record.levelno),
                category=getattr(record, "category", None)
                or record.name.rsplit(".", 1)[-1].upper(),
                message=record.getMessage(),
                data=data,
                duration_ms=getattr(record, "duration_ms", None),
            )
        except Exception:
            self.handleError(record)
            return

        with self._buffer_lock:
            self._records.appendleft(entry)

    def query(
        self,
        level: str | None = None,
        category: str | None = None,
        limit: int | None = None,
        since_ms: int | None = None,
    ) -> list[LogEntryEntity]:
        """Return captured records, newest first.

        Filters apply in order: level, category, since, then limit.

        Args:
            level: Exact level name ("debug", "info", "warn", "error")
            category: Exact category
            limit: Maximum number of records returned
            since_ms: Only records at or after this Unix time in milliseconds

        Returns:
            Matching records
        """
        with self._buffer_lock:
            records = list(self._records)

        if level:
            records = [r for r in records if r.level == level]
        if category:
            records = [r for r in records if r.category == category]
        if since_ms:
            records = [r for r in records if r.timestamp * 1000 >= since_ms]
        if limit:
            records = records[:limit]
        return records

    def stats(self) -> dict[str, Any]:
        """Summarize the buffer.

        Returns:
            Dictionary with total, by_level, by_category, recent_errors
            (errors in the last hour) and avg_duration (rounded mean over
            records that carry a duration)
        """
        with self._buffer_lock:
            records = list(self._records)

        now = self._clock()
        by_level: dict[str, int] = {}
        by_category: dict[str, int] = {}
        recent_errors = 0
        total_duration = 0
        duration_count = 0

        for record in records:
            by_level[record.level] = by_level.get(record.level, 0) + 1
            by_category[record.category] = by_category.get(record.category, 0) + 1
            if record.level == "error" and now - record.timestamp < RECENT_ERROR_WINDOW_SECONDS:
                recent_errors += 1
            if record.duration_ms:
                total_duration += record.duration_ms
                duration_count += 1

        return {
            "total": len(records),
            "by_level": by_level,
            "by_category": by_category,
            "recent_errors": recent_errors,
            "avg_duration": round(total_duration / duration_count) if duration_count else 0,
        }

    def clear(self) -> int:
        """Drop all captured records.

        Returns:
            Number of records dropped
        """
        with self._buffer_lock:
            count = len(self._records)
            self._records.clear()
            return count
