"""Single-shot async client for the Gemini generateContent endpoint.

One call is one POST: no retries, no streaming, no shared state between
calls. A request only times out if ``GatewayConfig.timeout_s`` is set.
"""
from __future__ import annotations
import json
import logging
from typing import Any

import httpx

from learnbot.common.config import GatewayConfig
from learnbot.common.errors import EmptyGeneration, MalformedResponse, TransportFailure
from learnbot.common.schema import GenerationOptions, GenerationRequest

LOGGER = logging.getLogger("learnbot.client.gateway")


class ModelGateway:
    def __init__(self, config: GatewayConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport

    async def generate(self, prompt: str, options: GenerationOptions | None = None) -> str:
        """
        Send one prompt and return the first candidate's text, stripped.

        Raises:
            TransportFailure: network error or non-2xx status.
            MalformedResponse: 2xx body that is not JSON.
            EmptyGeneration: no candidate, or a candidate without text.
        """
        request = GenerationRequest(prompt=prompt, options=options or GenerationOptions())
        data = await self._post(request.to_payload())
        return _extract_text(data)

    async def _post(self, payload: dict[str, Any]) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_s, transport=self._transport) as client:
                r = await client.post(
                    self.config.endpoint,
                    params={"key": self.config.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
        except httpx.HTTPError as e:
            LOGGER.error("Gemini request failed: %s", type(e).__name__)
            raise TransportFailure(f"Gemini API request failed: {type(e).__name__}") from e

        if not r.is_success:
            LOGGER.error("Gemini API error response (%s): %s", r.status_code, r.text)
            raise TransportFailure(
                f"Gemini API request failed: {r.status_code} {r.reason_phrase}",
                status_code=r.status_code,
                body=r.text,
            )

        try:
            return r.json()
        except (ValueError, RecursionError) as e:
            LOGGER.error("Gemini API returned a non-JSON body: %s", r.text)
            raise MalformedResponse("Gemini API returned a non-JSON body", raw_text=r.text) from e


def _extract_text(data: Any) -> str:
    candidates = data.get("candidates") if isinstance(data, dict) else None
    candidate = candidates[0] if isinstance(candidates, list) and candidates else None
    if not isinstance(candidate, dict):
        candidate = {}

    text = None
    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if isinstance(parts, list) and parts and isinstance(parts[0], dict):
        text = parts[0].get("text")

    if not isinstance(text, str) or not text:
        finish_reason = candidate.get("finishReason") or "REASON_UNSPECIFIED"
        safety_ratings = candidate.get("safetyRatings")
        LOGGER.error(
            "Gemini API returned no content: finish_reason=%s safety_ratings=%s",
            finish_reason,
            json.dumps(safety_ratings) if safety_ratings is not None else "N/A",
        )
        raise EmptyGeneration(finish_reason, safety_ratings)

    return text.strip()
