"""Gemini generateContent client."""

from __future__ import annotations

from typing import Any

import requests
from loguru import logger

from gemini_search.config import DEFAULT_API_BASE, DEFAULT_MODEL, Settings
from gemini_search.errors import DispatchError, MalformedResponseError

PROMPT_TEMPLATE = """User query: '{query}'

Rules:
- Be extremely concise and direct
- If asking for installation: Only provide the exact commands needed, nothing else
- If asking how to do something: Only provide the minimal steps/commands
- No explanations, no background info, no troubleshooting unless specifically asked
- No introductory text or conclusions
- Format: Just the essential commands or answer

Respond with only what's necessary to answer the query."""

NO_TEXT_MESSAGE = "No valid response found in API response"


def build_prompt(query: str) -> str:
    """Wrap ``query`` in the concise-answer instructions."""
    return PROMPT_TEMPLATE.format(query=query)


def build_payload(prompt: str, *, temperature: float = 0.3, max_output_tokens: int = 512) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_output_tokens,
        },
    }


def extract_text(body: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or raise."""

    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError(NO_TEXT_MESSAGE) from exc
    if not isinstance(text, str):
        raise MalformedResponseError(NO_TEXT_MESSAGE)
    return text


class GeminiClient:
    """Single-shot client for the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_API_BASE,
        temperature: float = 0.3,
        max_output_tokens: int = 512,
        timeout_seconds: float = 30,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout_seconds = timeout_seconds
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, *, session: requests.Session | None = None) -> GeminiClient:
        """Build a client from settings. Raises MissingCredentialError without a key."""

        return cls(
            settings.require_api_key(),
            model=settings.model,
            base_url=settings.api_base,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            timeout_seconds=settings.timeout_seconds,
            session=session,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def search(self, query: str) -> str:
        """Send ``query`` and return the generated answer text."""

        payload = build_payload(
            build_prompt(query),
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )
        logger.debug("gemini.request model={} chars={}", self.model, len(query))
        try:
            response = self._session.post(
                self.endpoint,
                params={"key": self._api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise DispatchError(f"API request failed: {exc}") from exc

        logger.debug("gemini.response status={}", response.status_code)
        if not response.ok:
            raise DispatchError(f"API request failed: {response.text}")

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponseError(NO_TEXT_MESSAGE) from exc
        return extract_text(body)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> GeminiClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        self.close()
