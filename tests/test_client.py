from __future__ import annotations

from typing import Any

import pytest
import requests

from gemini_search.client import GeminiClient, build_payload, build_prompt, extract_text
from gemini_search.config import Settings
from gemini_search.errors import DispatchError, MalformedResponseError, MissingCredentialError


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("not json")
        return self._body


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response

    def close(self) -> None:
        self.closed = True


def _answer(text: Any) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_search_posts_generate_content_request() -> None:
    session = FakeSession(FakeResponse(body=_answer("sudo apt install jq")))
    client = GeminiClient("key-123", session=session)

    assert client.search("install jq") == "sudo apt install jq"

    call = session.calls[0]
    assert call["url"] == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    )
    assert call["params"] == {"key": "key-123"}
    assert call["json"] == build_payload(build_prompt("install jq"))
    assert call["json"]["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 512}
    assert call["timeout"] == 30


def test_prompt_embeds_query() -> None:
    prompt = build_prompt("list files")
    assert prompt.startswith("User query: 'list files'")
    assert "Be extremely concise and direct" in prompt


def test_non_success_status_raises_dispatch_error() -> None:
    session = FakeSession(FakeResponse(status_code=403, text="API key not valid"))
    client = GeminiClient("bad", session=session)
    with pytest.raises(DispatchError, match="API key not valid"):
        client.search("anything")


def test_transport_error_raises_dispatch_error() -> None:
    session = FakeSession(error=requests.ConnectionError("boom"))
    client = GeminiClient("key", session=session)
    with pytest.raises(DispatchError, match="boom"):
        client.search("anything")


def test_invalid_json_raises_malformed_response() -> None:
    client = GeminiClient("key", session=FakeSession(FakeResponse(body=None)))
    with pytest.raises(MalformedResponseError):
        client.search("anything")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {}}]},
        _answer(None),
        [],
    ],
)
def test_extract_text_rejects_missing_text(body: Any) -> None:
    with pytest.raises(MalformedResponseError, match="No valid response"):
        extract_text(body)


def test_from_settings_threads_configuration() -> None:
    settings = Settings(
        api_key="k",
        model="gemini-test",
        api_base="http://localhost:9999/models/",
        temperature=0.7,
        max_output_tokens=64,
        timeout_seconds=5,
    )
    session = FakeSession(FakeResponse(body=_answer("ok")))
    client = GeminiClient.from_settings(settings, session=session)
    client.search("q")

    call = session.calls[0]
    assert call["url"] == "http://localhost:9999/models/gemini-test:generateContent"
    assert call["json"]["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 64}
    assert call["timeout"] == 5


def test_from_settings_without_key_raises() -> None:
    with pytest.raises(MissingCredentialError):
        GeminiClient.from_settings(Settings())


def test_injected_session_is_not_closed() -> None:
    session = FakeSession(FakeResponse(body=_answer("ok")))
    with GeminiClient("k", session=session) as client:
        client.search("q")
    assert session.closed is False
