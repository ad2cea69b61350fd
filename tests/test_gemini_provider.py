"""Unit tests for the Gemini vision client.

Upstream responses are simulated with httpx.MockTransport and backoff
delays are recorded by a fake sleep, so no test waits or touches the network.
"""

import json

import httpx
import pytest

from ingredient_api.core.exceptions import (
    ParseError,
    RateLimited,
    RecognitionError,
    UpstreamUnavailable,
)
from ingredient_api.models import IngredientSource
from ingredient_api.services.vision import GeminiVisionClient, RetryPolicy

from .conftest import gemini_items, gemini_response

PRIMARY = "gemini-2.5-pro"
FALLBACK = "gemini-1.5-flash"


class ScriptedUpstream:
    """MockTransport handler replaying a scripted sequence per model."""

    def __init__(self, primary: list, fallback: list | None = None) -> None:
        self.script = {PRIMARY: list(primary), FALLBACK: list(fallback or [])}
        self.requests: list[httpx.Request] = []

    def calls_to(self, model: str) -> int:
        return sum(1 for r in self.requests if f"/models/{model}:" in r.url.path)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        model = FALLBACK if f"/models/{FALLBACK}:" in request.url.path else PRIMARY
        step = self.script[model].pop(0)
        if isinstance(step, Exception):
            raise step
        if isinstance(step, int):
            return httpx.Response(step, text="error")
        return step


def make_client(upstream: ScriptedUpstream, fake_sleep, api_key: str = "test-key") -> GeminiVisionClient:
    client = GeminiVisionClient(
        api_key=api_key,
        base_url="https://gemini.test/v1beta",
        primary_model=PRIMARY,
        fallback_model=FALLBACK,
        retry_policy=RetryPolicy(sleep=fake_sleep),
    )
    client._client = httpx.AsyncClient(
        base_url=client.base_url, transport=httpx.MockTransport(upstream)
    )
    return client


class TestGeminiVisionClient:
    """Tests for GeminiVisionClient.analyze_detailed."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([gemini_response(gemini_items(("tomato", 0.9), ("basil", 0.8)))])
        client = make_client(upstream, fake_sleep)

        result = await client.analyze_detailed(tiny_png, "en")

        assert [c.name for c in result.candidates] == ["tomato", "basil"]
        assert result.source == IngredientSource.PRIMARY_MODEL
        assert result.attempts == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_request_format(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([gemini_response("[]")])
        client = make_client(upstream, fake_sleep)

        await client.analyze(tiny_png, "it")

        request = upstream.requests[0]
        assert request.method == "POST"
        assert request.url.path == f"/v1beta/models/{PRIMARY}:generateContent"
        assert request.url.params["key"] == "test-key"
        parts = json.loads(request.content)["contents"][0]["parts"]
        assert "ingredienti" in parts[0]["text"]
        assert parts[1]["inline_data"]["mime_type"] == "image/png"

    @pytest.mark.asyncio
    async def test_overloaded_then_success(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream(
            [503, 503, gemini_response(gemini_items(("onion", 0.7)))]
        )
        client = make_client(upstream, fake_sleep)

        result = await client.analyze_detailed(tiny_png)

        assert result.attempts == 3
        assert fake_sleep.delays == [3.0, 6.0]

    @pytest.mark.asyncio
    async def test_overloaded_exhausts_budget(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([503, 503, 503])
        client = make_client(upstream, fake_sleep)

        with pytest.raises(UpstreamUnavailable):
            await client.analyze(tiny_png)

        assert upstream.calls_to(PRIMARY) == 3
        assert fake_sleep.delays == [3.0, 6.0]

    @pytest.mark.asyncio
    async def test_rate_limited_exhausts_budget(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([429, 429, 429])
        client = make_client(upstream, fake_sleep)

        with pytest.raises(RateLimited):
            await client.analyze(tiny_png)

        assert fake_sleep.delays == [6.0, 12.0]

    @pytest.mark.asyncio
    async def test_network_error_retries(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream(
            [
                httpx.ConnectError("connection refused"),
                gemini_response(gemini_items(("leek", 0.6))),
            ]
        )
        client = make_client(upstream, fake_sleep)

        result = await client.analyze(tiny_png)

        assert [c.name for c in result] == ["leek"]
        assert fake_sleep.delays == [2.0]

    @pytest.mark.asyncio
    async def test_network_error_exhausts_budget(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([httpx.ReadTimeout("timeout")] * 3)
        client = make_client(upstream, fake_sleep)

        with pytest.raises(UpstreamUnavailable):
            await client.analyze(tiny_png)

        assert fake_sleep.delays == [2.0, 4.0]

    @pytest.mark.asyncio
    async def test_not_found_switches_to_fallback_model(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream(
            [404], fallback=[gemini_response(gemini_items(("rice", 0.8)))]
        )
        client = make_client(upstream, fake_sleep)

        result = await client.analyze_detailed(tiny_png)

        assert result.source == IngredientSource.FALLBACK_MODEL
        assert result.model == FALLBACK
        assert upstream.calls_to(PRIMARY) == 1
        assert upstream.calls_to(FALLBACK) == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_fallback_is_single_attempt(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([404], fallback=[503])
        client = make_client(upstream, fake_sleep)

        with pytest.raises(UpstreamUnavailable):
            await client.analyze(tiny_png)

        assert upstream.calls_to(FALLBACK) == 1

    @pytest.mark.asyncio
    async def test_other_status_fails_immediately(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([400])
        client = make_client(upstream, fake_sleep)

        with pytest.raises(RecognitionError) as exc_info:
            await client.analyze(tiny_png)

        assert exc_info.value.details["status_code"] == 400
        assert upstream.calls_to(PRIMARY) == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_unparseable_response_is_not_retried(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([gemini_response("I see a lovely kitchen.")])
        client = make_client(upstream, fake_sleep)

        with pytest.raises(ParseError):
            await client.analyze(tiny_png)

        assert upstream.calls_to(PRIMARY) == 1

    @pytest.mark.asyncio
    async def test_missing_text_is_parse_error(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([httpx.Response(200, json={"candidates": []})])
        client = make_client(upstream, fake_sleep)

        with pytest.raises(ParseError):
            await client.analyze(tiny_png)

    @pytest.mark.asyncio
    async def test_missing_api_key(self, tiny_png, fake_sleep):
        upstream = ScriptedUpstream([])
        client = make_client(upstream, fake_sleep, api_key="")

        with pytest.raises(UpstreamUnavailable):
            await client.analyze(tiny_png)

        assert upstream.requests == []


class TestGeminiHealthCheck:
    """Tests for GeminiVisionClient.health_check."""

    @pytest.mark.asyncio
    async def test_healthy(self, fake_sleep):
        client = make_client(ScriptedUpstream([httpx.Response(200, json={})]), fake_sleep)

        assert await client.health_check() is True

    @pytest.mark.asyncio
    async def test_unhealthy_without_key(self, fake_sleep):
        client = make_client(ScriptedUpstream([]), fake_sleep, api_key="")

        assert await client.health_check() is False

    @pytest.mark.asyncio
    async def test_unhealthy_on_error(self, fake_sleep):
        client = make_client(ScriptedUpstream([httpx.ConnectError("down")]), fake_sleep)

        assert await client.health_check() is False
