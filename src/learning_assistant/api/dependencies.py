"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services created once in lifespan and stored in app.state
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from learning_assistant.config import Settings, get_settings
from learning_assistant.handlers import DevHandler, GenerationHandler, HistoryHandler
from learning_assistant.protocols import ModelClient
from learning_assistant.repositories import (
    DeepSeekModelClient,
    LogBufferHandler,
    MemoryCacheRepository,
    MemoryHistoryRepository,
)
from learning_assistant.services import CacheService, HistoryService, RequestService

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "learning_assistant"


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_generation_handler(request: Request) -> GenerationHandler:
    """Dependency injection for GenerationHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "generation_handler")


def get_history_handler(request: Request) -> HistoryHandler:
    """Dependency injection for HistoryHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "history_handler")


def get_dev_handler(request: Request) -> DevHandler:
    """Dependency injection for DevHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "dev_handler")


def get_model_client(request: Request) -> ModelClient:
    """Dependency injection for the active ModelClient from app.state.

    Raises:
        RuntimeError: If client is not initialized
    """
    return _from_state(request, "model_client")


def _build_model_client(app_settings: Settings) -> ModelClient:
    return DeepSeekModelClient(
        api_key=app_settings.deepseek_api_key,
        base_url=app_settings.deepseek_base_url,
        model_name=app_settings.model_name,
        timeout=app_settings.model_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers once and stores them in app.state:
    1. Log buffer attached to the package logger
    2. Repositories (in-memory cache and history) and the model client
    3. Services (cache, history, request orchestration)
    4. Handlers (generation, history, dev)

    A model client placed in app.state.injected_model_client (see
    create_app) is used instead of the DeepSeek client and is not closed
    on shutdown.

    Cleanup:
        Closes the model client and removes everything from app.state
    """
    app_settings: Settings = getattr(app.state, "settings", None) or get_settings()

    log_buffer = LogBufferHandler(capacity=app_settings.log_buffer_limit)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(log_buffer)

    injected: ModelClient | None = getattr(app.state, "injected_model_client", None)
    model_client = injected or _build_model_client(app_settings)

    cache_service = CacheService.create(
        repository=MemoryCacheRepository.create(),
        ttl=app_settings.cache_ttl_seconds,
    )
    history_service = HistoryService.create(
        repository=MemoryHistoryRepository.create(capacity=app_settings.history_limit),
    )
    request_service = RequestService.create(
        cache_service=cache_service,
        history_service=history_service,
        model_client=model_client,
    )

    app.state.log_buffer = log_buffer
    app.state.model_client = model_client
    app.state.cache_service = cache_service
    app.state.history_service = history_service
    app.state.request_service = request_service
    app.state.generation_handler = GenerationHandler(request_service=request_service)
    app.state.history_handler = HistoryHandler(history_service=history_service)
    app.state.dev_handler = DevHandler(cache_service=cache_service, log_buffer=log_buffer)

    logger.info(
        "Learning assistant started (model=%s, cache TTL=%ss, history limit=%d)",
        model_client.model_name,
        app_settings.cache_ttl_seconds,
        app_settings.history_limit,
        extra={"category": "SYSTEM"},
    )

    try:
        yield
    finally:
        if injected is None:
            await model_client.close()

        del app.state.dev_handler
        del app.state.history_handler
        del app.state.generation_handler
        del app.state.request_service
        del app.state.history_service
        del app.state.cache_service
        del app.state.model_client
        del app.state.log_buffer

        logger.info("Learning assistant shut down", extra={"category": "SYSTEM"})
        package_logger.removeHandler(log_buffer)


# Type aliases for cleaner dependency injection
GenerationHandlerDep = Annotated[GenerationHandler, Depends(get_generation_handler)]
HistoryHandlerDep = Annotated[HistoryHandler, Depends(get_history_handler)]
DevHandlerDep = Annotated[DevHandler, Depends(get_dev_handler)]
ModelClientDep = Annotated[ModelClient, Depends(get_model_client)]
