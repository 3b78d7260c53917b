"""FastAPI application factory.

Creates and configures the FastAPI application with all routes,
middleware, and exception handlers.
"""

from typing import Annotated, Any

from fastapi import APIRouter, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from learning_assistant.api.dependencies import (
    DevHandlerDep,
    GenerationHandlerDep,
    HistoryHandlerDep,
    ModelClientDep,
    lifespan,
)
from learning_assistant.api.exception_handlers import setup_exception_handlers
from learning_assistant.config import Settings, configure_logging, get_settings
from learning_assistant.dto import (
    CacheStatsResponse,
    ConceptAnalysisRequest,
    HealthCheckResponse,
    HistoryDetailResponse,
    HistoryListResponse,
    HistoryStatsResponse,
    LearningPathRequest,
    LogEntryItem,
    LogStatsResponse,
    MessageResponse,
    TestGenerationRequest,
)
from learning_assistant.entities import RequestType
from learning_assistant.protocols import ModelClient

API_VERSION = "0.1.0"

system_router = APIRouter(tags=["System"])
generation_router = APIRouter(prefix="/api", tags=["Generation"])
history_router = APIRouter(prefix="/api/history", tags=["History"])
dev_router = APIRouter(prefix="/api/dev", tags=["Developer"])


# ==================== SYSTEM ====================


@system_router.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Learning Assistant API",
        "version": API_VERSION,
        "description": "AI-generated concept analyses, learning paths and tests",
        "endpoints": {
            "analyze_concepts": "/api/analyze-concepts",
            "generate_path": "/api/generate-path",
            "generate_test": "/api/generate-test",
            "history": "/api/history",
            "dev": "/api/dev",
            "health": "/health",
            "docs": "/docs",
        },
    }


@system_router.get("/health", response_model=HealthCheckResponse)
async def health(model_client: ModelClientDep) -> HealthCheckResponse:
    """Health check endpoint."""
    available = await model_client.is_available()
    return HealthCheckResponse(
        status="healthy" if available else "degraded",
        model=model_client.model_name,
        model_available=available,
    )


# ==================== GENERATION ====================


@generation_router.post("/analyze-concepts")
async def analyze_concepts(
    request: ConceptAnalysisRequest, handler: GenerationHandlerDep
) -> JSONResponse:
    """Break a text down into concepts tailored to the learner."""
    return await handler.analyze_concepts(request)


@generation_router.get("/analyze-concepts")
async def analyze_concepts_status() -> dict[str, str]:
    return {"message": "Concept analysis API is running"}


@generation_router.post("/generate-path")
async def generate_path(request: LearningPathRequest, handler: GenerationHandlerDep) -> JSONResponse:
    """Generate a phased learning path."""
    return await handler.generate_path(request)


@generation_router.get("/generate-path")
async def generate_path_status() -> dict[str, str]:
    return {"message": "Learning path API is running"}


@generation_router.post("/generate-test")
async def generate_test(request: TestGenerationRequest, handler: GenerationHandlerDep) -> JSONResponse:
    """Generate quiz questions for a topic."""
    return await handler.generate_test(request)


@generation_router.get("/generate-test")
async def generate_test_status() -> dict[str, str]:
    return {"message": "Test generation API is running"}


# ==================== HISTORY ====================


@history_router.get("", response_model=HistoryListResponse)
async def list_history(
    handler: HistoryHandlerDep,
    request_type: Annotated[RequestType | None, Query(alias="type")] = None,
    search: Annotated[str | None, Query()] = None,
    from_cache: Annotated[bool | None, Query(alias="fromCache")] = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> HistoryListResponse:
    """List recorded requests, newest first, with optional filters."""
    return await handler.list_history(
        request_type=request_type,
        search=search,
        from_cache=from_cache,
        limit=limit,
    )


@history_router.delete("", response_model=MessageResponse)
async def clear_history(handler: HistoryHandlerDep) -> MessageResponse:
    """Remove every recorded request."""
    return await handler.clear_history()


@history_router.get("/stats", response_model=HistoryStatsResponse)
async def history_stats(handler: HistoryHandlerDep) -> HistoryStatsResponse:
    """Summary statistics over the call history."""
    return await handler.get_stats()


@history_router.get("/{entry_id}", response_model=HistoryDetailResponse)
async def get_history_entry(entry_id: str, handler: HistoryHandlerDep) -> HistoryDetailResponse:
    """Fetch one recorded request by id."""
    return await handler.get_entry(entry_id)


# ==================== DEVELOPER ====================


@dev_router.get("/cache-stats", response_model=CacheStatsResponse)
async def cache_stats(handler: DevHandlerDep) -> CacheStatsResponse:
    return await handler.cache_stats()


@dev_router.post("/clear-cache", response_model=MessageResponse)
async def clear_cache(handler: DevHandlerDep) -> MessageResponse:
    return await handler.clear_cache()


@dev_router.get("/logs", response_model=list[LogEntryItem])
async def list_logs(
    handler: DevHandlerDep,
    level: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
    limit: Annotated[int, Query(ge=1)] = 100,
    since: Annotated[int | None, Query(description="Unix time in milliseconds")] = None,
) -> list[LogEntryItem]:
    return await handler.list_logs(level=level, category=category, limit=limit, since=since)


@dev_router.get("/log-stats", response_model=LogStatsResponse)
async def log_stats(handler: DevHandlerDep) -> LogStatsResponse:
    return await handler.log_stats()


@dev_router.post("/clear-logs", response_model=MessageResponse)
async def clear_logs(handler: DevHandlerDep) -> MessageResponse:
    return await handler.clear_logs()


def create_app(
    app_settings: Settings | None = None,
    model_client: ModelClient | None = None,
) -> FastAPI:
    """Build a configured application.

    Args:
        app_settings: Settings to use. Defaults to the environment settings.
        model_client: Model client to use instead of DeepSeek (tests pass a fake).

    Returns:
        The FastAPI application; services are created when its lifespan starts
    """
    app_settings = app_settings or get_settings()
    configure_logging(app_settings.log_level)

    app = FastAPI(
        title="Learning Assistant API",
        description="AI-generated concept analyses, learning paths and tests "
        "with a response cache and call history",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.injected_model_client = model_client

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=list(app_settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Cache", "X-History-Id", "X-Duration-Ms"],
    )
    setup_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(generation_router)
    app.include_router(history_router)
    app.include_router(dev_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "learning_assistant.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
