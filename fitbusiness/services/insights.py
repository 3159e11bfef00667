"""AI narrative insights with a static fallback.

Insights come from the Gemini ``generateContent`` REST endpoint. Missing
configuration, HTTP errors, timeouts and malformed responses all resolve to
the fallback text for the same key; ``InsightClient.generate`` never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

from fitbusiness.config import Settings

logger = structlog.get_logger()


class InsightKey(str, Enum):
    OVERVIEW = "overview"
    RISK_ANALYSIS = "riskAnalysis"
    REPORT = "report"
    FORECAST = "forecast"


class InsightSource(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"


PROMPTS: dict[InsightKey, str] = {
    InsightKey.OVERVIEW: (
        "Analyse the following employee wellness data and write a concise insight "
        "(2-3 sentences) about the overall health of the organisation. Highlight one "
        "positive trend and one area of concern. Data: global average FitScore fell 6% "
        "last week, check-in frequency in the industrial sector dropped, technology "
        "companies show a 10% increase in engagement."
    ),
    InsightKey.RISK_ANALYSIS: (
        "Based on this data, write a risk analysis insight with one actionable "
        "recommendation (2-3 sentences). Data: the sales department of VitalTech has "
        "shown rising stress for 3 weeks, correlated with average sleep under 6 hours."
    ),
    InsightKey.REPORT: (
        "Write an executive summary (2-3 sentences) for the October wellness report. "
        "Highlight the main difference between sectors and its cause. Data: average "
        "energy in technology was 22% above the overall mean; the main driver of the "
        "decline in industry was rising stress; hydration was stable."
    ),
    InsightKey.FORECAST: (
        "Write a concise predictive alert (2-3 sentences) with a mitigation "
        "suggestion. Data: 72% probability of an engagement drop for logistics "
        "companies in the next 30 days."
    ),
}

FALLBACK_INSIGHTS: dict[InsightKey, str] = {
    InsightKey.OVERVIEW: (
        "The global average FitScore fell 6% compared to last week, driven by fewer "
        "check-ins in the industrial sector. Technology companies, on the other hand, "
        "show a 10% increase in engagement."
    ),
    InsightKey.RISK_ANALYSIS: (
        "VitalTech's sales department has shown rising stress for 3 weeks, correlated "
        "with average sleep below 6 hours. A sleep-hygiene awareness campaign is "
        "recommended for this group."
    ),
    InsightKey.REPORT: (
        "In October, average energy among technology employees was 22% above the "
        "overall mean. The main driver of the decline in industrial companies was "
        "rising stress during peak-demand periods. Hydration remained stable across "
        "all sectors."
    ),
    InsightKey.FORECAST: (
        "Current data indicates a 72% probability of an engagement drop for logistics "
        "companies in the next 30 days. Proactive actions such as gamified challenges "
        "can mitigate this risk."
    ),
}


class InsightClientError(Exception):
    """Raised internally when the generative API gives no usable text."""


@dataclass(frozen=True)
class Insight:
    key: InsightKey
    text: str
    source: InsightSource


def _extract_text(payload: dict[str, Any]) -> str:
    """Pull the generated text out of a generateContent response."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as exc:
        raise InsightClientError("Malformed generateContent response") from exc
    if not isinstance(parts, list):
        raise InsightClientError("Malformed generateContent response: parts is not a list")

    chunks = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        chunk = part.get("text", "")
        if not isinstance(chunk, str):
            raise InsightClientError("Malformed generateContent response: non-text part")
        chunks.append(chunk)
    text = "".join(chunks).strip()
    if not text:
        raise InsightClientError("Empty generateContent response")
    return text


class InsightClient:
    """HTTP client for the generative-AI insight API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> InsightClient:
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_url=settings.gemini_api_url,
            timeout=settings.insight_timeout_seconds,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _request(self, prompt: str) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                f"{self.api_url}/models/{self.model}:generateContent",
                params={"key": self.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
            )
            if response.status_code != 200:
                raise InsightClientError(
                    f"Insight request failed: {response.status_code} {response.text[:200]}"
                )
            return _extract_text(response.json())

    async def generate(self, key: InsightKey) -> Insight:
        """Return an insight for ``key``, falling back to static text on any failure."""
        fallback = Insight(key=key, text=FALLBACK_INSIGHTS[key], source=InsightSource.FALLBACK)
        if not self.configured:
            logger.info("insight_fallback", key=key.value, reason="not_configured")
            return fallback

        try:
            text = await self._request(PROMPTS[key])
        except (InsightClientError, httpx.HTTPError, ValueError) as exc:
            logger.warning("insight_fallback", key=key.value, reason=str(exc)[:200])
            return fallback

        logger.info("insight_generated", key=key.value, model=self.model)
        return Insight(key=key, text=text, source=InsightSource.AI)
