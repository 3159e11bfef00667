"""AI insight client tests: every failure degrades to the static text."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from fitbusiness.services.insights import (
    FALLBACK_INSIGHTS,
    PROMPTS,
    InsightClient,
    InsightClientError,
    InsightKey,
    InsightSource,
    _extract_text,
)


def _client(handler) -> InsightClient:
    return InsightClient(
        api_key="test-key",
        model="gemini-test",
        api_url="https://gen.test/v1beta/",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


def _ok(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


class TestFallback:

    @pytest.mark.parametrize("key", list(InsightKey))
    def test_unconfigured_uses_fallback(self, key):
        client = InsightClient(api_key="", model="m", api_url="https://gen.test")
        insight = asyncio.run(client.generate(key))
        assert insight.source is InsightSource.FALLBACK
        assert insight.text == FALLBACK_INSIGHTS[key]
        assert insight.key is key

    def test_every_key_has_prompt_and_fallback(self):
        assert set(PROMPTS) == set(InsightKey)
        assert set(FALLBACK_INSIGHTS) == set(InsightKey)

    def test_http_error_status(self):
        client = _client(lambda request: httpx.Response(500, text="boom"))
        insight = asyncio.run(client.generate(InsightKey.REPORT))
        assert insight.source is InsightSource.FALLBACK

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        insight = asyncio.run(_client(handler).generate(InsightKey.FORECAST))
        assert insight.source is InsightSource.FALLBACK
        assert insight.text == FALLBACK_INSIGHTS[InsightKey.FORECAST]

    def test_malformed_payload(self):
        client = _client(lambda request: httpx.Response(200, json={"unexpected": True}))
        assert asyncio.run(client.generate(InsightKey.OVERVIEW)).source is InsightSource.FALLBACK

    def test_non_json_body(self):
        client = _client(lambda request: httpx.Response(200, text="<html>"))
        assert asyncio.run(client.generate(InsightKey.OVERVIEW)).source is InsightSource.FALLBACK

    def test_empty_text(self):
        client = _client(lambda request: _ok("   "))
        assert asyncio.run(client.generate(InsightKey.OVERVIEW)).source is InsightSource.FALLBACK


class TestGenerated:

    def test_generated_text(self):
        insight = asyncio.run(_client(lambda request: _ok(" Stress is rising. ")).generate(InsightKey.RISK_ANALYSIS))
        assert insight.source is InsightSource.AI
        assert insight.text == "Stress is rising."

    def test_request_shape(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            seen["body"] = request.content.decode()
            return _ok("ok")

        asyncio.run(_client(handler).generate(InsightKey.OVERVIEW))

        assert seen["url"].path == "/v1beta/models/gemini-test:generateContent"
        assert seen["url"].params["key"] == "test-key"
        assert "FitScore" in seen["body"]

    def test_configured_flag(self):
        assert _client(lambda r: _ok("x")).configured
        assert not InsightClient(api_key="", model="m", api_url="u").configured

    def test_from_settings(self, settings):
        client = InsightClient.from_settings(settings)
        assert client.model == settings.gemini_model
        assert client.timeout == settings.insight_timeout_seconds
        assert not client.configured


class TestExtractText:

    def test_joins_parts(self):
        payload = {"candidates": [{"content": {"parts": [{"text": "a "}, {"text": "b"}]}}]}
        assert _extract_text(payload) == "a b"

    def test_no_candidates(self):
        with pytest.raises(InsightClientError):
            _extract_text({"candidates": []})

    def test_null_parts(self):
        with pytest.raises(InsightClientError):
            _extract_text({"candidates": [{"content": {"parts": None}}]})

    def test_non_string_text(self):
        with pytest.raises(InsightClientError):
            _extract_text({"candidates": [{"content": {"parts": [{"text": 42}]}}]})

    def test_non_dict_parts_skipped(self):
        payload = {"candidates": [{"content": {"parts": ["noise", {"text": "kept"}]}}]}
        assert _extract_text(payload) == "kept"

    @pytest.mark.parametrize("parts", [None, "text", [{"text": None}], [{"text": ["a"]}]])
    def test_odd_parts_fall_back(self, parts):
        client = _client(
            lambda request: httpx.Response(200, json={"candidates": [{"content": {"parts": parts}}]})
        )
        insight = asyncio.run(client.generate(InsightKey.OVERVIEW))
        assert insight.source is InsightSource.FALLBACK
        assert insight.text == FALLBACK_INSIGHTS[InsightKey.OVERVIEW]
