from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from learnbot.client.gateway import ModelGateway
from learnbot.common.config import GatewayConfig
from learnbot.common.errors import EmptyGeneration, MalformedResponse, TransportFailure
from learnbot.common.schema import GenerationOptions

CONFIG = GatewayConfig(api_key="test-key", base_url="https://example.test/v1beta", model="test-model")


def _ok(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}


def _gateway(handler: Callable[[httpx.Request], httpx.Response], config: GatewayConfig = CONFIG) -> ModelGateway:
    return ModelGateway(config, transport=httpx.MockTransport(handler))


def test_generate_returns_trimmed_text() -> None:
    gw = _gateway(lambda request: httpx.Response(200, json=_ok("  Hello test \n")))
    assert asyncio.run(gw.generate("hi")) == "Hello test"


def test_request_shape() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_ok("ok"))

    asyncio.run(_gateway(handler).generate("the prompt"))

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/test-model:generateContent"
    assert request.url.params["key"] == "test-key"
    body = json.loads(request.content)
    assert body["contents"] == [{"parts": [{"text": "the prompt"}]}]
    assert body["generationConfig"] == {"maxOutputTokens": 2048, "temperature": 0.7, "topP": 0.95, "topK": 40}
    assert [s["category"] for s in body["safetySettings"]] == [
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    ]
    assert {s["threshold"] for s in body["safetySettings"]} == {"BLOCK_MEDIUM_AND_ABOVE"}


def test_generation_config_override_wins() -> None:
    seen: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=_ok("[]"))

    options = GenerationOptions(
        max_output_tokens=8192,
        response_mime_type="json",
        response_schema={"type": "ARRAY"},
        generation_config={"temperature": 0.2, "candidateCount": 1},
    )
    asyncio.run(_gateway(handler).generate("q", options))

    config = seen[0]["generationConfig"]
    assert config["maxOutputTokens"] == 8192
    assert config["temperature"] == 0.2
    assert config["candidateCount"] == 1
    assert config["responseMimeType"] == "application/json"
    assert config["responseSchema"] == {"type": "ARRAY"}


def test_missing_api_key_still_sends_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(403, json={"error": {"message": "API key not valid"}})

    with pytest.raises(TransportFailure) as exc:
        asyncio.run(_gateway(handler, GatewayConfig()).generate("q"))
    assert exc.value.status_code == 403
    assert seen[0].url.params["key"] == ""


def test_http_500_is_transport_failure() -> None:
    gw = _gateway(lambda request: httpx.Response(500, text="upstream exploded"))
    with pytest.raises(TransportFailure) as exc:
        asyncio.run(gw.generate("q"))
    assert exc.value.status_code == 500
    assert exc.value.body == "upstream exploded"
    assert "500" in str(exc.value)


def test_network_error_is_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportFailure) as exc:
        asyncio.run(_gateway(handler).generate("q"))
    assert exc.value.status_code is None


def test_no_candidates_is_empty_generation() -> None:
    gw = _gateway(lambda request: httpx.Response(200, json={"candidates": []}))
    with pytest.raises(EmptyGeneration) as exc:
        asyncio.run(gw.generate("q"))
    assert exc.value.finish_reason == "REASON_UNSPECIFIED"
    assert exc.value.safety_ratings is None


def test_safety_block_carries_reason_and_ratings() -> None:
    ratings = [{"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "probability": "HIGH", "blocked": True}]
    data = {"candidates": [{"finishReason": "SAFETY", "safetyRatings": ratings}]}
    gw = _gateway(lambda request: httpx.Response(200, json=data))
    with pytest.raises(EmptyGeneration) as exc:
        asyncio.run(gw.generate("q"))
    assert exc.value.finish_reason == "SAFETY"
    assert exc.value.safety_ratings == ratings


def test_truncated_candidate_without_text() -> None:
    data = {"candidates": [{"content": {"parts": [{"text": ""}]}, "finishReason": "MAX_TOKENS"}]}
    gw = _gateway(lambda request: httpx.Response(200, json=data))
    with pytest.raises(EmptyGeneration) as exc:
        asyncio.run(gw.generate("q"))
    assert exc.value.finish_reason == "MAX_TOKENS"


def test_non_json_body_is_malformed() -> None:
    gw = _gateway(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(MalformedResponse) as exc:
        asyncio.run(gw.generate("q"))
    assert exc.value.raw_text == "<html>oops</html>"


def test_concurrent_calls_are_independent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        prompt = json.loads(request.content)["contents"][0]["parts"][0]["text"]
        return httpx.Response(200, json=_ok(f"echo:{prompt}"))

    gw = _gateway(handler)

    async def run() -> list[str]:
        return list(await asyncio.gather(gw.generate("one"), gw.generate("two")))

    assert asyncio.run(run()) == ["echo:one", "echo:two"]


@pytest.mark.parametrize(
    "kwargs",
    [{"max_output_tokens": 0}, {"temperature": 1.5}, {"top_p": -0.1}, {"top_k": 0}, {"response_mime_type": "xml"}],
)
def test_invalid_options_rejected(kwargs: dict[str, Any]) -> None:
    with pytest.raises(ValueError):
        GenerationOptions(**kwargs)


@pytest.mark.parametrize("content", [b'{"candidates": "\xc3\x28"}', b"\xff\xfe{not json"])
def test_undecodable_body_is_malformed(content: bytes) -> None:
    gw = _gateway(lambda request: httpx.Response(200, content=content))
    with pytest.raises(MalformedResponse) as exc:
        asyncio.run(gw.generate("q"))
    assert isinstance(exc.value.raw_text, str)


def test_override_cannot_escape_ranges() -> None:
    with pytest.raises(ValueError):
        GenerationOptions(generation_config={"temperature": 1.7})
    with pytest.raises(ValueError):
        GenerationOptions(generation_config={"topP": -0.5})
    with pytest.raises(ValueError):
        GenerationOptions(generation_config={"maxOutputTokens": 0})
    assert GenerationOptions(generation_config={"temperature": 0.1}).to_generation_config()["temperature"] == 0.1
