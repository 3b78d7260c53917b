"""Exceptions raised outside the cache/history core.

The core itself never raises for absence, expiry or eviction; these
exceptions only come from the model call and request validation.
"""


class LearningAssistantError(Exception):
    """Base class for application errors."""


class UpstreamError(LearningAssistantError):
    """The model call failed or returned output that could not be parsed."""

    def __init__(self, message: str, request_type: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.request_type = request_type
