# Overview: Minimal client for the hosted language model behind the AI summary.

from __future__ import annotations

import logging
from typing import Mapping

import httpx


logger = logging.getLogger(__name__)


class TextGenerationError(Exception):
    """The model could not be reached or returned nothing usable."""
    pass


class TextGenClient:
    """
    Calls a Gemini-style ``models/<model>:generateContent`` endpoint.

    One request per call: no retries, no streaming. ``transport`` exists so
    tests can plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_config(cls, config: Mapping, transport: httpx.BaseTransport | None = None) -> "TextGenClient":
        return cls(
            api_key=config.get("TEXTGEN_API_KEY", ""),
            model=config.get("TEXTGEN_MODEL", ""),
            base_url=config.get("TEXTGEN_BASE_URL", ""),
            timeout=float(config.get("TEXTGEN_TIMEOUT_SECONDS", 30)),
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise TextGenerationError("text generation API key is not configured")

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self.api_key}

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.endpoint, json=body, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Text generation failed with HTTP %s", exc.response.status_code)
            raise TextGenerationError(f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Text generation request failed: %s", exc)
            raise TextGenerationError(str(exc)) from exc

        if not isinstance(data, dict):
            raise TextGenerationError("unexpected response body")
        return _extract_text(data)


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise TextGenerationError("unexpected response body")
    content = candidates[0].get("content") or {}
    if not isinstance(content, dict):
        raise TextGenerationError("unexpected response body")
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise TextGenerationError("unexpected response body")

    texts = []
    for part in parts:
        text = part.get("text", "") if isinstance(part, dict) else None
        if not isinstance(text, str):
            raise TextGenerationError("unexpected response body")
        texts.append(text)
    return "".join(texts).strip()
