"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .dev_handler import DevHandler
from .generation_handler import GenerationHandler
from .history_handler import HistoryHandler

__all__ = [
    "DevHandler",
    "GenerationHandler",
    "HistoryHandler",
]
