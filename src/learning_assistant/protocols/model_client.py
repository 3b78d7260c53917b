"""Model client protocol.

Defines the interface for the component that sends a request to a
large-language-model API and returns its structured result.

Implementations can include:
- DeepSeek chat completions (default)
- Any other OpenAI-compatible endpoint
- Fakes for tests
"""

from typing import Any, Protocol, runtime_checkable

from learning_assistant.entities import RequestType


@runtime_checkable
class ModelClient(Protocol):
    """Protocol for model invocation.

    Latency is measured by the caller, not by the client.
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def invoke(self, request_type: RequestType, payload: dict[str, Any]) -> Any:
        """Ask the model to handle one request.

        Args:
            request_type: Which operation to perform
            payload: The validated request payload

        Returns:
            The structured (JSON-decoded) result

        Raises:
            UpstreamError: If the call fails or the reply cannot be parsed
        """
        ...

    async def is_available(self) -> bool:
        """Check if the model endpoint is reachable and configured."""
        ...

    async def close(self) -> None:
        """Release any underlying connections."""
        ...
