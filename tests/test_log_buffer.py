"""Tests for the in-process log buffer."""

import logging
import time

import pytest

from learning_assistant.repositories import LogBufferHandler

from conftest import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def buffer(clock):
    return LogBufferHandler(capacity=5, clock=clock)


@pytest.fixture
def log(buffer):
    logger = logging.getLogger("tests.log_buffer.cache")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(buffer)
    yield logger
    logger.removeHandler(buffer)


def test_captures_level_category_and_extras(log, buffer):
    log.info("Model call done", extra={"category": "AI", "duration_ms": 812, "data": {"n": 1}})
    log.warning("no category given")

    newest, oldest = buffer.query()

    assert newest.level == "warn"
    assert newest.category == "CACHE"
    assert oldest.level == "info"
    assert oldest.category == "AI"
    assert oldest.duration_ms == 812
    assert oldest.data == {"n": 1}
    assert oldest.message == "Model call done"


def test_exception_info_becomes_data(log, buffer):
    try:
        raise RuntimeError("disk full")
    except RuntimeError:
        log.exception("Write failed", extra={"category": "SYSTEM"})

    (record,) = buffer.query()
    assert record.level == "error"
    assert record.data == {"name": "RuntimeError", "message": "disk full"}


def test_capacity_keeps_newest(log, buffer):
    for n in range(7):
        log.debug("message %d", n)

    assert [r.message for r in buffer.query()] == [f"message {n}" for n in range(6, 1, -1)]


def test_query_filters(log, buffer):
    log.debug("a", extra={"category": "CACHE"})
    log.info("b", extra={"category": "API"})
    log.error("c", extra={"category": "API"})
    log.info("d", extra={"category": "API"})

    assert [r.message for r in buffer.query(level="info")] == ["d", "b"]
    assert [r.message for r in buffer.query(category="API")] == ["d", "c", "b"]
    assert [r.message for r in buffer.query(category="API", limit=1)] == ["d"]
    assert buffer.query(level="warn") == []


def test_query_since_milliseconds(log, buffer):
    log.info("early")
    (early,) = buffer.query()
    log.info("late")

    cutoff = int(early.timestamp * 1000) + 1
    assert all(r.timestamp * 1000 >= cutoff for r in buffer.query(since_ms=cutoff))
    assert len(buffer.query(since_ms=int(early.timestamp * 1000))) == 2


def test_stats(log, buffer, clock):
    clock.now = time.time()
    log.info("call", extra={"category": "AI", "duration_ms": 100})
    log.info("call", extra={"category": "AI", "duration_ms": 300})
    log.error("failed", extra={"category": "AI"})
    log.debug("miss", extra={"category": "CACHE"})

    stats = buffer.stats()

    assert stats["total"] == 4
    assert stats["by_level"] == {"debug": 1, "error": 1, "info": 2}
    assert stats["by_category"] == {"CACHE": 1, "AI": 3}
    assert stats["recent_errors"] == 1
    assert stats["avg_duration"] == 200


def test_errors_older_than_an_hour_are_not_recent(log, buffer, clock):
    clock.now = time.time()
    log.error("old failure")
    clock.advance(60 * 60 + 1)

    assert buffer.stats()["recent_errors"] == 0


def test_clear(log, buffer):
    log.info("one")
    log.info("two")

    assert buffer.clear() == 2
    assert buffer.query() == []
    assert buffer.stats()["total"] == 0
