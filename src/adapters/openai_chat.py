"""Adaptador del endpoint chat-completions (API HTTP JSON compatible OpenAI).

Responsabilidad:
- Construir el `ChatRequest` (system prompt + texto envuelto en `<text>`).
- Hacer un único POST bloqueante con httpx.
- Validar status y forma JSON, y extraer `choices[0].message.content`.

Sin reintentos, sin streaming, sin caché: cada fallo es terminal y se traduce
a un error tipado del dominio.
"""

from __future__ import annotations

import json
import logging
import re

import httpx
from pydantic import ValidationError

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import (
    ApiError,
    MalformedResponseError,
    RequestConstructionError,
    TransportError,
)
from core.domain.models import ChatRequest, ChatResponse, ResolvedConfig

logger = logging.getLogger(__name__)

BODY_EXCERPT_MAX_CHARS = 500

# Valores de header válidos: ASCII visible, espacio y tab.
_HEADER_VALUE_RE = re.compile(r"[\t\x20-\x7e]*")


def build_chat_request(text: str, config: ResolvedConfig) -> ChatRequest:
    return ChatRequest.for_summary(text, config)


def build_headers(api_key: str) -> dict[str, str]:
    """Headers de la request; falla antes de cualquier I/O si la key es inválida."""

    authorization = f"Bearer {api_key}"
    if not _HEADER_VALUE_RE.fullmatch(authorization):
        raise RequestConstructionError("API key contains characters that are not valid in an HTTP header")
    return {
        "Content-Type": "application/json",
        "Authorization": authorization,
    }


def _excerpt(body: str, max_chars: int = BODY_EXCERPT_MAX_CHARS) -> str:
    s = body.strip()
    if len(s) <= max_chars:
        return s
    return s[: max_chars - 1].rstrip() + "…"


def extract_summary(response: httpx.Response) -> str:
    """Valida status y forma; devuelve el contenido sin modificar."""

    if not response.is_success:
        raise ApiError(response.status_code, _excerpt(response.text))

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponseError("Unexpected response format: body is not valid JSON") from exc

    try:
        return ChatResponse.model_validate(payload).first_content()
    except ValidationError as exc:
        raise MalformedResponseError(
            "Unexpected response format: missing string at choices[0].message.content"
        ) from exc


class SummarizeClient:
    """Cliente bloqueante para resumir texto con un modelo de chat.

    Reglas de diseño:
    - No guarda estado por llamada; un mismo cliente puede compartirse entre hilos.
    - El `httpx.Client` se crea en `__init__` o se inyecta (tests, pooling externo);
      nunca se crea durante una llamada.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = http_client is None
        self._http_client = http_client if http_client is not None else build_client(self._settings)

    @property
    def endpoint(self) -> str:
        return self._settings.api_url

    @property
    def http_client(self) -> httpx.Client:
        return self._http_client

    def close(self) -> None:
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "SummarizeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def summarize(self, text: str, config: ResolvedConfig) -> str:
        chat_request = build_chat_request(text, config)
        headers = build_headers(config.api_key)
        client = self._http_client

        try:
            request = client.build_request(
                "POST",
                self.endpoint,
                headers=headers,
                json=chat_request.model_dump(mode="json"),
            )
        except (httpx.InvalidURL, ValueError) as exc:
            raise RequestConstructionError(f"Could not build request: {exc}") from exc

        logger.debug("POST %s model=%s", self.endpoint, chat_request.model)
        try:
            response = client.send(request)
        except httpx.TransportError as exc:
            logger.warning("Transport failure calling %s: %s", self.endpoint, type(exc).__name__)
            raise TransportError(f"Request to {self.endpoint} failed: {exc}") from exc

        logger.debug("Response status %s", response.status_code)
        return extract_summary(response)
