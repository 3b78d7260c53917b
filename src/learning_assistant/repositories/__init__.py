"""Repository layer for data access.

This layer abstracts storage and external dependencies (in-memory stores,
the model API) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (another store, another model provider)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from learning_assistant.protocols import CacheStore, HistoryStore, ModelClient

from .deepseek_model_client import DeepSeekModelClient, parse_json_reply
from .log_buffer import LogBufferHandler
from .memory_cache_repository import MemoryCacheRepository
from .memory_history_repository import MemoryHistoryRepository

__all__ = [
    "CacheStore",
    "HistoryStore",
    "ModelClient",
    "DeepSeekModelClient",
    "LogBufferHandler",
    "MemoryCacheRepository",
    "MemoryHistoryRepository",
    "parse_json_reply",
]
