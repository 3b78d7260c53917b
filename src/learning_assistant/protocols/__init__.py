"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory store, another model provider, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from learning_assistant.protocols import CacheStore, ModelClient

    # Type hints work with any implementation
    store: CacheStore = MemoryCacheRepository()
    client: ModelClient = DeepSeekModelClient.create()
    ```
"""

from .cache_store import CacheStore
from .history_store import HistoryStore
from .model_client import ModelClient

__all__ = [
    "CacheStore",
    "HistoryStore",
    "ModelClient",
]
