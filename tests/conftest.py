"""Shared fixtures for the learning assistant tests."""

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from learning_assistant.api.app import create_app
from learning_assistant.config import Settings
from learning_assistant.entities import RequestType
from learning_assistant.repositories import MemoryCacheRepository, MemoryHistoryRepository
from learning_assistant.services import CacheService, HistoryService

DAY = 24 * 60 * 60


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeModelClient:
    """In-process stand-in for the model API.

    Echoes the request back inside a small result object and records
    every call. Set `error` to make every call fail.
    """

    def __init__(self, error: Exception | None = None, delay: float = 0.0) -> None:
        self.calls: list[tuple[RequestType, dict[str, Any]]] = []
        self.error = error
        self.delay = delay
        self.closed = False

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def invoke(self, request_type: RequestType, payload: dict[str, Any]) -> Any:
        self.calls.append((request_type, payload))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return {"kind": request_type.value, "echo": payload, "call": len(self.calls)}

    async def is_available(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    """A controllable clock."""
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Cache service on an empty in-memory repository."""
    return CacheService.create(repository=MemoryCacheRepository.create(), ttl=DAY, clock=clock)


@pytest.fixture
def history(clock):
    """History service with the default capacity of 1000."""
    return HistoryService.create(
        repository=MemoryHistoryRepository.create(capacity=1000), clock=clock
    )


@pytest.fixture
def model_client():
    """A fake model client."""
    return FakeModelClient()


@pytest.fixture
def client(model_client):
    """Test client for an app wired to the fake model client."""
    app = create_app(Settings(history_limit=1000, log_level="INFO"), model_client=model_client)
    with TestClient(app) as test_client:
        yield test_client
