"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from learning_assistant.repositories import MemoryCacheRepository, MemoryHistoryRepository
    from learning_assistant.services import CacheService, HistoryService

    cache = CacheService.create(repository=MemoryCacheRepository.create())
    history = HistoryService.create(repository=MemoryHistoryRepository.create())
    ```
"""

from .cache_service import CacheService, fingerprint
from .history_service import HistoryService
from .request_service import RequestService

__all__ = [
    "CacheService",
    "HistoryService",
    "RequestService",
    "fingerprint",
]
