"""Request orchestration service.

Connects the HTTP handlers to the cache, the ledger and the model:

    cache.get -> hit:  ledger.append(from_cache=True)
              -> miss: model.invoke -> cache.set -> ledger.append(from_cache=False)

A failed model call writes nothing, so the ledger holds at most one
entry per handled request and the cache never stores failed results.
Concurrent identical misses may both reach the model; the second
cache.set simply overwrites the first.
"""

import json
import logging
import time
from typing import Any

from learning_assistant.entities import RequestOutcome, RequestType
from learning_assistant.protocols import ModelClient
from learning_assistant.services.cache_service import CacheService
from learning_assistant.services.history_service import HistoryService

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> int:
    return round((time.perf_counter() - started) * 1000)


def _size(value: Any) -> int:
    return len(json.dumps(value, ensure_ascii=False, default=str))


class RequestService:
    """Runs one model request through the cache and the call ledger."""

    def __init__(
        self,
        cache_service: CacheService,
        history_service: HistoryService,
        model_client: ModelClient,
    ) -> None:
        """Initialize the request service.

        Args:
            cache_service: Response cache (required).
            history_service: Call ledger (required).
            model_client: Model invocation capability (required).
        """
        self._cache = cache_service
        self._history = history_service
        self._model = model_client

    @classmethod
    def create(
        cls,
        cache_service: CacheService,
        history_service: HistoryService,
        model_client: ModelClient,
    ) -> "RequestService":
        """Factory method to create RequestService."""
        return cls(
            cache_service=cache_service,
            history_service=history_service,
            model_client=model_client,
        )

    async def run(self, request_type: RequestType | str, payload: dict[str, Any]) -> RequestOutcome:
        """Serve one validated request.

        Args:
            request_type: Which operation to perform
            payload: The validated request payload

        Returns:
            RequestOutcome with the result and its provenance

        Raises:
            UpstreamError: If the model call fails (nothing is cached or recorded)
        """
        request_type = RequestType(request_type)
        started = time.perf_counter()

        cached = self._cache.get(request_type, payload)
        if cached is not None:
            duration_ms = _elapsed_ms(started)
            entry = self._history.append(
                request_type, payload, cached, duration_ms=duration_ms, from_cache=True
            )
            logger.info(
                "%s - Input: %dchars, Output: %dchars (Cached)",
                request_type.value,
                _size(payload),
                _size(cached),
                extra={"category": "AI", "duration_ms": duration_ms},
            )
            return RequestOutcome(
                data=cached, from_cache=True, duration_ms=duration_ms, history_id=entry.id
            )

        started = time.perf_counter()
        try:
            result = await self._model.invoke(request_type, payload)
        except Exception:
            logger.error(
                "%s model call failed after %dms",
                request_type.value,
                _elapsed_ms(started),
                extra={"category": "AI"},
            )
            raise
        duration_ms = max(1, _elapsed_ms(started))

        self._cache.set(request_type, payload, result)
        entry = self._history.append(
            request_type, payload, result, duration_ms=duration_ms, from_cache=False
        )
        logger.info(
            "%s - Input: %dchars, Output: %dchars",
            request_type.value,
            _size(payload),
            _size(result),
            extra={"category": "AI", "duration_ms": duration_ms},
        )
        return RequestOutcome(
            data=result, from_cache=False, duration_ms=duration_ms, history_id=entry.id
        )

    @property
    def model_client(self) -> ModelClient:
        """Get the underlying model client (for testing)."""
        return self._model
