"""DeepSeek model client.

Talks to DeepSeek's OpenAI-compatible chat-completions API. Any other
OpenAI-compatible endpoint works by pointing `base_url` elsewhere.

Requirements:
    - DEEPSEEK_API_KEY set in the environment (or passed explicitly)
    - Network access to DEEPSEEK_BASE_URL (default https://api.deepseek.com)
"""

import json
import logging
import re
from typing import Any

import httpx

from learning_assistant.config import settings
from learning_assistant.entities import RequestType
from learning_assistant.errors import UpstreamError
from learning_assistant.prompts import build_prompt

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_json_reply(content: str) -> dict[str, Any]:
    """Decode a model reply that should contain one JSON object.

    Models sometimes wrap the object in prose or code fences, so if the
    reply is not valid JSON as a whole the outermost {...} block is tried.

    Args:
        content: Raw message content from the model

    Returns:
        The decoded JSON object

    Raises:
        ValueError: If no JSON object can be recovered, or the reply
            decodes to something other than an object (e.g. null)
    """
    try:
        value = json.loads(content)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(content)
        if not match:
            raise ValueError("Model reply contains no JSON object")
        try:
            value = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ValueError(f"Could not parse model reply as JSON: {e}") from e

    if not isinstance(value, dict):
        raise ValueError(f"Model reply is a JSON {type(value).__name__}, not an object")
    return value


class DeepSeekModelClient:
    """DeepSeek implementation of the ModelClient protocol.

    This class satisfies the ModelClient protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = DeepSeekModelClient.create()
        result = await client.invoke(
            RequestType.TEST_GENERATION,
            {"topic": "DP", "difficulty": "basic", "questionCount": 3},
        )
        await client.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model_name: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the DeepSeek client.

        Args:
            api_key: API key. Defaults to settings.deepseek_api_key.
            base_url: API base URL. Defaults to settings.deepseek_base_url.
            model_name: Model identifier. Defaults to settings.model_name.
            timeout: Request timeout in seconds. Defaults to settings.model_timeout.
            http_client: Preconfigured async client (tests pass one with a mock transport).
        """
        self._api_key = api_key if api_key is not None else settings.deepseek_api_key
        self._base_url = (base_url or settings.deepseek_base_url).rstrip("/")
        self._model_name = model_name or settings.model_name
        self._timeout = timeout or settings.model_timeout
        self._client = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        model_name: str | None = None,
    ) -> "DeepSeekModelClient":
        """Factory method to create DeepSeekModelClient with defaults.

        Args:
            api_key: API key. If None, uses settings.
            base_url: API base URL. If None, uses settings.
            model_name: Model identifier. If None, uses settings.

        Returns:
            Configured DeepSeekModelClient
        """
        return cls(api_key=api_key, base_url=base_url, model_name=model_name)

    @property
    def model_name(self) -> str:
        return self._model_name

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key or ''}",
            "Content-Type": "application/json",
        }

    async def invoke(self, request_type: RequestType, payload: dict[str, Any]) -> Any:
        """Ask the model to handle one request and decode its JSON reply.

        Args:
            request_type: Which operation to perform
            payload: The validated request payload (camelCase keys)

        Returns:
            The decoded JSON result

        Raises:
            UpstreamError: On HTTP/transport failure, an empty reply, or a
                reply that cannot be parsed as JSON
        """
        prompt = build_prompt(request_type, payload)
        body = {
            "model": self._model_name,
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
            "temperature": prompt.temperature,
            "max_tokens": prompt.max_tokens,
            "stream": False,
        }

        try:
            response = await self.client.post(
                f"{self._base_url}/chat/completions",
                json=body,
                headers=self._headers(),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(
                "%s call to %s failed: %s",
                request_type.value,
                self._model_name,
                e,
                extra={"category": "AI"},
            )
            raise UpstreamError(
                f"{self._model_name} is temporarily unavailable, please retry later",
                request_type=request_type.value,
            ) from e
        except ValueError as e:
            raise UpstreamError(
                f"{self._model_name} returned a malformed response",
                request_type=request_type.value,
            ) from e

        choices = (data.get("choices") if isinstance(data, dict) else None) or []
        content = (choices[0].get("message") or {}).get("content") if choices else None
        if not content:
            raise UpstreamError("Model returned an empty response", request_type=request_type.value)

        try:
            result = parse_json_reply(content)
        except ValueError as e:
            logger.warning(
                "Unparseable %s reply (%d chars)",
                request_type.value,
                len(content),
                extra={"category": "AI"},
            )
            raise UpstreamError(
                "Could not parse the model response as JSON",
                request_type=request_type.value,
            ) from e

        return result

    async def is_available(self) -> bool:
        """Check if the API is configured and reachable.

        Returns:
            True if an API key is set and the models endpoint answers, False otherwise
        """
        if not self._api_key:
            return False
        try:
            response = await self.client.get(f"{self._base_url}/models", headers=self._headers())
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
