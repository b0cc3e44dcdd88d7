"""Fixtures compartidas.

- Settings aislados del entorno y de cualquier `.env`.
- Un transporte httpx falso que registra las requests enviadas.
"""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from adapters.http_client import build_client
from adapters.openai_chat import SummarizeClient
from adapters.settings_stores import MappingSettingsStore
from core.config import AppSettings

API_KEY = "sk-test-123"


class RecordingTransport(httpx.MockTransport):
    """`MockTransport` que guarda cada request recibida."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def completion_body(content: object) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "model": "gpt-3.5-turbo",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 2, "total_tokens": 12},
    }


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    for var in ("API_KEY", "MODEL", "PROMPT", "API_URL", "HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(f"PG_SUMMARIZER_{var}", raising=False)
    return AppSettings(_env_file=None)


@pytest.fixture
def store() -> MappingSettingsStore:
    return MappingSettingsStore({"pg_summarizer.api_key": API_KEY})


@pytest.fixture
def make_client(settings: AppSettings) -> Callable[..., tuple[SummarizeClient, RecordingTransport]]:
    """Devuelve (cliente, transporte) para un handler o una respuesta fija."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        *,
        status_code: int = 200,
        json_body: object | None = None,
        content: bytes | None = None,
    ) -> tuple[SummarizeClient, RecordingTransport]:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                if json_body is not None:
                    return httpx.Response(status_code, json=json_body)
                return httpx.Response(status_code, content=content or b"")

        transport = RecordingTransport(handler)
        client = SummarizeClient(settings, http_client=build_client(settings, transport=transport))
        return client, transport

    return _make
