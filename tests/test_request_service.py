"""Tests for request orchestration across cache, model and history."""

import asyncio

import pytest

from learning_assistant.entities import RequestType
from learning_assistant.errors import UpstreamError
from learning_assistant.services import RequestService

from conftest import FakeModelClient

PAYLOAD = {"topic": "Dynamic programming", "difficulty": "basic", "questionCount": 3}


@pytest.fixture
def service(cache, history, model_client):
    return RequestService.create(cache_service=cache, history_service=history, model_client=model_client)


def test_miss_calls_model_then_hit_reuses_result(service, cache, history, model_client):
    first = asyncio.run(service.run(RequestType.TEST_GENERATION, PAYLOAD))
    second = asyncio.run(service.run(RequestType.TEST_GENERATION, dict(PAYLOAD)))

    assert len(model_client.calls) == 1
    assert first.from_cache is False
    assert first.duration_ms >= 1
    assert second.from_cache is True
    assert second.data == first.data

    entries = history.query()
    assert [e.from_cache for e in entries] == [True, False]
    assert entries[0].id == second.history_id
    assert entries[1].id == first.history_id
    assert entries[1].input == PAYLOAD
    assert entries[1].output == first.data
    assert cache.stats()["total_entries"] == 1


def test_request_types_do_not_share_results(service, model_client):
    asyncio.run(service.run("concept-analysis", {"text": "graphs"}))
    outcome = asyncio.run(service.run("learning-path", {"text": "graphs"}))

    assert outcome.from_cache is False
    assert len(model_client.calls) == 2


def test_upstream_failure_leaves_no_trace(cache, history):
    failing = FakeModelClient(error=UpstreamError("model down", request_type="test-generation"))
    service = RequestService.create(cache_service=cache, history_service=history, model_client=failing)

    with pytest.raises(UpstreamError):
        asyncio.run(service.run(RequestType.TEST_GENERATION, PAYLOAD))

    assert len(failing.calls) == 1
    assert cache.stats()["total_entries"] == 0
    assert history.query() == []


def test_failure_is_not_cached(cache, history):
    flaky = FakeModelClient(error=UpstreamError("timeout"))
    service = RequestService.create(cache_service=cache, history_service=history, model_client=flaky)

    with pytest.raises(UpstreamError):
        asyncio.run(service.run(RequestType.CONCEPT_ANALYSIS, {"text": "x"}))

    flaky.error = None
    outcome = asyncio.run(service.run(RequestType.CONCEPT_ANALYSIS, {"text": "x"}))

    assert outcome.from_cache is False
    assert len(flaky.calls) == 2
    assert len(history.query()) == 1


def test_concurrent_identical_misses_both_reach_the_model(cache, history):
    slow = FakeModelClient(delay=0.05)
    service = RequestService.create(cache_service=cache, history_service=history, model_client=slow)

    async def both():
        return await asyncio.gather(
            service.run(RequestType.TEST_GENERATION, PAYLOAD),
            service.run(RequestType.TEST_GENERATION, PAYLOAD),
        )

    outcomes = asyncio.run(both())

    assert len(slow.calls) == 2
    assert all(not o.from_cache for o in outcomes)
    assert cache.stats()["total_entries"] == 1
    assert len(history.query()) == 2


def test_expired_entry_triggers_a_new_model_call(service, clock, model_client):
    asyncio.run(service.run(RequestType.LEARNING_PATH, {"goal": "ML"}))
    clock.advance(24 * 60 * 60 + 1)

    outcome = asyncio.run(service.run(RequestType.LEARNING_PATH, {"goal": "ML"}))

    assert outcome.from_cache is False
    assert len(model_client.calls) == 2
