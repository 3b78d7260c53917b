"""Learning Assistant - AI learning tools with a response cache and call history.

This package provides a layered architecture around an LLM-backed API:

Layers:
    - protocols: Interface contracts (CacheStore, HistoryStore, ModelClient)
    - repositories: In-memory stores, log buffer and the DeepSeek client
    - services: Business logic (response cache, call ledger, orchestration)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from learning_assistant.repositories import MemoryCacheRepository
    from learning_assistant.services import CacheService

    cache = CacheService.create(repository=MemoryCacheRepository.create())
    ```

For HTTP API:
    ```python
    from learning_assistant.api.app import app, create_app
    ```
"""

from learning_assistant.config import get_settings, settings
from learning_assistant.dto import (
    ConceptAnalysisRequest,
    LearningPathRequest,
    TestGenerationRequest,
)
from learning_assistant.entities import (
    CacheEntryEntity,
    HistoryEntryEntity,
    RequestOutcome,
    RequestType,
)
from learning_assistant.errors import UpstreamError
from learning_assistant.handlers import DevHandler, GenerationHandler, HistoryHandler
from learning_assistant.protocols import CacheStore, HistoryStore, ModelClient
from learning_assistant.repositories import (
    DeepSeekModelClient,
    LogBufferHandler,
    MemoryCacheRepository,
    MemoryHistoryRepository,
)
from learning_assistant.services import CacheService, HistoryService, RequestService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CacheStore",
    "HistoryStore",
    "ModelClient",
    # Services (business logic)
    "CacheService",
    "HistoryService",
    "RequestService",
    # Handlers (HTTP)
    "DevHandler",
    "GenerationHandler",
    "HistoryHandler",
    # Repositories (data access)
    "MemoryCacheRepository",
    "MemoryHistoryRepository",
    "LogBufferHandler",
    "DeepSeekModelClient",
    # Entities (domain models)
    "CacheEntryEntity",
    "HistoryEntryEntity",
    "RequestOutcome",
    "RequestType",
    # DTOs (API contracts)
    "ConceptAnalysisRequest",
    "LearningPathRequest",
    "TestGenerationRequest",
    # Errors
    "UpstreamError",
]
