"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import (
    ConceptAnalysisRequest,
    GenerationRequest,
    LearningPathRequest,
    TestGenerationRequest,
)
from .responses import (
    CacheStatsResponse,
    ErrorResponse,
    HealthCheckResponse,
    HistoryDetailResponse,
    HistoryEntryItem,
    HistoryListResponse,
    HistoryStats,
    HistoryStatsResponse,
    LogEntryItem,
    LogStatsResponse,
    MessageResponse,
)

__all__ = [
    "ConceptAnalysisRequest",
    "GenerationRequest",
    "LearningPathRequest",
    "TestGenerationRequest",
    "CacheStatsResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "HistoryDetailResponse",
    "HistoryEntryItem",
    "HistoryListResponse",
    "HistoryStats",
    "HistoryStatsResponse",
    "LogEntryItem",
    "LogStatsResponse",
    "MessageResponse",
]
