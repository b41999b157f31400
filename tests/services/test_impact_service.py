"""Tests for the impact indicator generator and its language model client.

HTTP is served by httpx.MockTransport, so nothing leaves the process.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from pydantic import ValidationError

from projexia.api.llm_client import LLMClient
from projexia.exceptions import ImpactGenerationError
from projexia.models import AIConfig, ImpactRequest
from projexia.services.impact_service import ImpactService, build_prompt

DESCRIPTION = (
    "A community solar farm that supplies clean power to three rural villages "
    "and trains local technicians."
)


def _answer(*texts: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": t} for t in texts]}}]}


def _client(handler, retry: int = 0) -> LLMClient:
    config = AIConfig(endpoint="https://llm.example.com", retry=retry)
    return LLMClient(config, transport=httpx.MockTransport(handler))


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "secret-key")


# ---------------------------------------------------------------------------
# LLMClient
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_generate_text_request_shape():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-goog-api-key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_answer("1. Jobs ", "created"))

    client = _client(handler)
    try:
        text = await client.generate_text("hello")
    finally:
        await client.close()

    assert text == "1. Jobs created"
    assert seen["url"] == (
        "https://llm.example.com/v1beta/models/gemini-1.5-flash:generateContent"
    )
    assert seen["key"] == "secret-key"
    assert seen["body"] == {"contents": [{"role": "user", "parts": [{"text": "hello"}]}]}


@pytest.mark.asyncio
async def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY")
    client = _client(lambda request: httpx.Response(200, json=_answer("x")))
    with pytest.raises(ImpactGenerationError, match="GOOGLE_API_KEY"):
        await client.generate_text("hello")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"candidates": []}, _answer("   ")])
async def test_empty_answers(body):
    client = _client(lambda request: httpx.Response(200, json=body))
    with pytest.raises(ImpactGenerationError):
        await client.generate_text("hello")
    await client.close()


@pytest.mark.asyncio
async def test_client_errors_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(403, json={"error": "denied"})

    client = _client(handler, retry=3)
    with pytest.raises(httpx.HTTPStatusError):
        await client.request("POST", "anything")
    assert len(calls) == 1
    await client.close()


@pytest.mark.asyncio
async def test_server_errors_retried():
    responses = [httpx.Response(503), httpx.Response(200, json=_answer("ok"))]

    with patch("projexia.api.llm_client.asyncio.sleep", new=AsyncMock()) as sleep:
        client = _client(lambda request: responses.pop(0), retry=2)
        assert await client.generate_text("hello") == "ok"
        await client.close()

    sleep.assert_awaited_once_with(1)


# ---------------------------------------------------------------------------
# ImpactService
# ---------------------------------------------------------------------------


def test_prompt_contains_description():
    prompt = build_prompt(ImpactRequest(project_description=f"  {DESCRIPTION}  "))
    assert f"Project Description: {DESCRIPTION}\n" in prompt


def test_short_description_rejected():
    with pytest.raises(ValidationError, match="at least 50 characters"):
        ImpactRequest(project_description="Too short")


@pytest.mark.asyncio
async def test_generate_returns_indicators():
    client = _client(lambda request: httpx.Response(200, json=_answer("- Local jobs")))
    result = await ImpactService(client).generate(DESCRIPTION)
    assert result.indicators == "- Local jobs"
    assert client._client is None


@pytest.mark.asyncio
async def test_generate_short_description_makes_no_call():
    handler_calls = []
    client = _client(lambda request: handler_calls.append(request))
    with pytest.raises(ValidationError):
        await ImpactService(client).generate("short")
    assert handler_calls == []


@pytest.mark.asyncio
async def test_generate_http_error_wrapped():
    client = _client(lambda request: httpx.Response(400, json={}))
    with pytest.raises(ImpactGenerationError, match="HTTP 400"):
        await ImpactService(client).generate(DESCRIPTION)


@pytest.mark.asyncio
async def test_generate_network_error_wrapped():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    client = _client(handler)
    with pytest.raises(ImpactGenerationError, match="Could not reach"):
        await ImpactService(client).generate(DESCRIPTION)
