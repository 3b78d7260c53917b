"""Centralized exception handlers for the FastAPI application.

Every error leaves the API in one shape:

    {
        "success": false,
        "error": "Human-readable error message",
        "details": "Optional hint"
    }

Mapping:
    - RequestValidationError -> 400 (missing or invalid request fields)
    - HTTPException          -> its own status (e.g. 404 for unknown history ids)
    - UpstreamError          -> 500 (model call failed or reply unparseable)
    - anything else          -> 500
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from learning_assistant.dto import ErrorResponse
from learning_assistant.errors import UpstreamError

logger = logging.getLogger(__name__)

UPSTREAM_HINT = "Check the API configuration or try again later"


def _create_error_response(
    status_code: int,
    message: str,
    details: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, details=details).model_dump(exclude_none=True),
        headers=headers,
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize pydantic errors in one sentence.

    Missing fields are listed together; otherwise the first problem is
    reported.
    """
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing"]
    if missing:
        return f"Missing required parameters: {', '.join(missing)}"
    if errors:
        first = errors[0]
        return f"Invalid parameter '{first['loc'][-1]}': {first['msg']}"
    return "Invalid request"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        message = describe_validation_error(exc)
        logger.warning(
            "Rejected %s %s: %s",
            request.method,
            request.url.path,
            message,
            extra={"category": "API"},
        )
        return _create_error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        return _create_error_response(
            exc.status_code,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(UpstreamError)
    async def upstream_exception_handler(
        request: Request,
        exc: UpstreamError,
    ) -> JSONResponse:
        """Model failures are logged and reported without leaking provider detail."""
        logger.error(
            "Upstream failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            extra={"category": "API"},
        )
        return _create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            exc.message,
            details=UPSTREAM_HINT,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
            extra={"category": "API"},
        )
        return _create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
        )
