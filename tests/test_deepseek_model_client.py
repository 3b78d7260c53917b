"""Tests for the DeepSeek client, using an in-process HTTP transport."""

import asyncio
import json

import httpx
import pytest

from learning_assistant.entities import RequestType
from learning_assistant.errors import UpstreamError
from learning_assistant.prompts import build_prompt
from learning_assistant.repositories import DeepSeekModelClient, parse_json_reply

PAYLOAD = {"text": "Neural networks learn weights", "userBackground": "CS student"}


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def make_client(handler, api_key="sk-test"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DeepSeekModelClient(
        api_key=api_key,
        base_url="https://llm.example/",
        model_name="deepseek-chat",
        timeout=5,
        http_client=http_client,
    )


def test_invoke_posts_chat_completion():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion('{"concepts": [], "summary": "ok"}'))

    client = make_client(handler)
    result = asyncio.run(client.invoke(RequestType.CONCEPT_ANALYSIS, PAYLOAD))

    assert result == {"concepts": [], "summary": "ok"}
    assert seen["url"] == "https://llm.example/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    body = seen["body"]
    assert body["model"] == "deepseek-chat"
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 2000
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert "CS student" in body["messages"][1]["content"]


def test_invoke_extracts_json_from_fenced_reply():
    reply = 'Here you go:\n```json\n{"questions": [{"id": 1}]}\n```'
    client = make_client(lambda request: httpx.Response(200, json=completion(reply)))

    result = asyncio.run(
        client.invoke(
            RequestType.TEST_GENERATION,
            {"topic": "DP", "difficulty": "basic", "questionCount": 1},
        )
    )

    assert result == {"questions": [{"id": 1}]}


def test_http_error_becomes_upstream_error():
    client = make_client(lambda request: httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.invoke(RequestType.CONCEPT_ANALYSIS, PAYLOAD))

    assert exc_info.value.request_type == "concept-analysis"


def test_transport_error_becomes_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(UpstreamError):
        asyncio.run(client.invoke(RequestType.CONCEPT_ANALYSIS, PAYLOAD))


@pytest.mark.parametrize("content", ["", "I cannot help with that.", "{not json}", "null", "[1, 2]"])
def test_empty_or_unparseable_reply_is_an_upstream_error(content):
    client = make_client(lambda request: httpx.Response(200, json=completion(content)))

    with pytest.raises(UpstreamError):
        asyncio.run(client.invoke(RequestType.CONCEPT_ANALYSIS, PAYLOAD))


def test_missing_choices_is_an_upstream_error():
    client = make_client(lambda request: httpx.Response(200, json={"choices": []}))

    with pytest.raises(UpstreamError, match="empty response"):
        asyncio.run(client.invoke(RequestType.CONCEPT_ANALYSIS, PAYLOAD))


def test_is_available_without_key_skips_network():
    def handler(request):
        raise AssertionError("no request expected")

    assert asyncio.run(make_client(handler, api_key="").is_available()) is False


def test_is_available_checks_models_endpoint():
    ok = make_client(lambda request: httpx.Response(200, json={"data": []}))
    denied = make_client(lambda request: httpx.Response(401))

    assert asyncio.run(ok.is_available()) is True
    assert asyncio.run(denied.is_available()) is False


def test_close_releases_http_client():
    client = make_client(lambda request: httpx.Response(200))

    asyncio.run(client.close())

    assert client._client is None


def test_parse_json_reply():
    assert parse_json_reply('{"a": 1}') == {"a": 1}
    assert parse_json_reply('prefix {"a": {"b": 2}} suffix') == {"a": {"b": 2}}
    with pytest.raises(ValueError):
        parse_json_reply("no object here")
    with pytest.raises(ValueError):
        parse_json_reply("{broken")
    with pytest.raises(ValueError):
        parse_json_reply("null")
    with pytest.raises(ValueError):
        parse_json_reply('"just a string"')


def test_prompt_parameters_per_request_type():
    path = build_prompt(
        RequestType.LEARNING_PATH,
        {"goal": "ML", "currentLevel": "beginner", "timeframe": "3 months"},
    )
    test = build_prompt(
        RequestType.TEST_GENERATION,
        {"topic": "DP", "difficulty": "advanced", "questionCount": 5},
    )

    assert (path.temperature, path.max_tokens) == (0.7, 2500)
    assert "no particular preference" in path.user
    assert (test.temperature, test.max_tokens) == (0.8, 3000)
    assert "multiple_choice" in test.user
    with pytest.raises(ValueError):
        build_prompt("unknown", {})
