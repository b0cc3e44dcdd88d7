"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent de las llamadas al proveedor.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_timeout(settings: AppSettings) -> httpx.Timeout:
    """`None` en settings significa sin timeout (la llamada bloquea lo que haga falta)."""

    return httpx.Timeout(settings.http_timeout_seconds)


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
    timeout: httpx.Timeout | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults del proyecto.

    Por qué síncrono:
    - La operación del host es bloqueante; no hay event loop al que ceder.

    `timeout` pisa el de settings (p.ej. chequeos de diagnóstico acotados).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    # Sin follow_redirects (default de httpx): un 3xx llega como respuesta no-2xx y acaba en ApiError.
    return httpx.Client(
        timeout=timeout if timeout is not None else build_timeout(settings),
        headers=headers,
        transport=transport,
    )
