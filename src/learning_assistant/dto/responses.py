"""Response DTOs for API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryEntryItem(_CamelModel):
    """Single call-history entry."""

    id: str = Field(..., description="Identifier assigned when the entry was recorded")
    request_type: str = Field(..., description="Which operation was requested")
    input: Any = Field(..., description="The exact request payload")
    output: Any = Field(..., description="The exact result payload")
    timestamp: datetime = Field(..., description="When the entry was recorded")
    duration_ms: int | None = Field(None, description="Time taken to produce the result")
    from_cache: bool = Field(..., description="Whether the result came from the cache")


class HistoryListResponse(_CamelModel):
    """Response DTO for history queries."""

    success: bool = True
    data: list[HistoryEntryItem] = Field(default_factory=list, description="Entries, newest first")
    total: int = Field(..., description="Number of entries returned", ge=0)


class HistoryDetailResponse(_CamelModel):
    """Response DTO for a single history entry."""

    success: bool = True
    data: HistoryEntryItem


class HistoryStats(_CamelModel):
    """Summary of the call history."""

    total_entries: int = Field(..., ge=0)
    by_type: dict[str, int] = Field(default_factory=dict)
    cache_hit_rate: float = Field(..., description="Percentage of cached results", ge=0.0, le=100.0)
    average_duration_ms: float = Field(..., ge=0.0)
    oldest_entry: datetime | None = None
    newest_entry: datetime | None = None


class HistoryStatsResponse(_CamelModel):
    """Response DTO for history statistics."""

    success: bool = True
    data: HistoryStats


class CacheStatsResponse(_CamelModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Total number of cached entries", ge=0)
    by_type: dict[str, int] = Field(default_factory=dict, description="Entry count per request type")
    oldest_entry: datetime | None = Field(None, description="Creation time of the oldest entry")
    newest_entry: datetime | None = Field(None, description="Creation time of the newest entry")


class LogEntryItem(_CamelModel):
    """Single captured log record."""

    id: str
    timestamp: int = Field(..., description="Unix time in milliseconds")
    level: str
    category: str
    message: str
    data: Any = None
    duration: int | None = Field(None, description="Duration in milliseconds, if any")


class LogStatsResponse(_CamelModel):
    """Response DTO for log statistics."""

    total: int = Field(..., ge=0)
    by_level: dict[str, int] = Field(default_factory=dict)
    by_category: dict[str, int] = Field(default_factory=dict)
    recent_errors: int = Field(..., description="Errors logged in the last hour", ge=0)
    avg_duration: int = Field(..., ge=0)


class MessageResponse(_CamelModel):
    """Generic confirmation for mutating operations."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")
    deleted_count: int | None = Field(None, description="Number of items removed, if any")


class HealthCheckResponse(_CamelModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    model: str = Field(..., description="Configured model identifier")
    model_available: bool = Field(..., description="Whether the model endpoint is reachable")


class ErrorResponse(_CamelModel):
    """Structured error payload."""

    success: bool = False
    error: str = Field(..., description="Human-readable error message")
    details: str | None = None
