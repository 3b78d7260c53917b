"""HTTP handlers for the three generation endpoints.

Request bodies are validated by the DTOs before these handlers run, so
an invalid request never touches the cache or the ledger. Upstream
failures propagate as UpstreamError and are rendered by the exception
handlers.
"""

from fastapi.responses import JSONResponse

from learning_assistant.dto import (
    ConceptAnalysisRequest,
    GenerationRequest,
    LearningPathRequest,
    TestGenerationRequest,
)
from learning_assistant.entities import RequestOutcome, RequestType
from learning_assistant.services import RequestService


def _to_response(outcome: RequestOutcome) -> JSONResponse:
    return JSONResponse(
        content=outcome.data,
        headers={
            "X-Cache": "HIT" if outcome.from_cache else "MISS",
            "X-History-Id": outcome.history_id,
            "X-Duration-Ms": str(outcome.duration_ms),
        },
    )


class GenerationHandler:
    """HTTP handlers for model-backed generation.

    The body of a successful response is the model's JSON result as-is.
    Provenance travels in headers: X-Cache (HIT or MISS), X-History-Id
    and X-Duration-Ms.
    """

    def __init__(self, request_service: RequestService) -> None:
        """Initialize the generation handler.

        Args:
            request_service: Orchestrates cache, model and ledger (required).
        """
        self._requests = request_service

    async def _generate(
        self, request_type: RequestType, request: GenerationRequest
    ) -> JSONResponse:
        outcome = await self._requests.run(request_type, request.to_payload())
        return _to_response(outcome)

    async def analyze_concepts(self, request: ConceptAnalysisRequest) -> JSONResponse:
        """Handle POST /api/analyze-concepts requests."""
        return await self._generate(RequestType.CONCEPT_ANALYSIS, request)

    async def generate_path(self, request: LearningPathRequest) -> JSONResponse:
        """Handle POST /api/generate-path requests."""
        return await self._generate(RequestType.LEARNING_PATH, request)

    async def generate_test(self, request: TestGenerationRequest) -> JSONResponse:
        """Handle POST /api/generate-test requests."""
        return await self._generate(RequestType.TEST_GENERATION, request)
