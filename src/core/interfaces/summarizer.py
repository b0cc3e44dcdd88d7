"""Contratos del pipeline de resumen.

Por qué dos contratos:
- `ChatSummarizer` es el cliente remoto (recibe config ya resuelta).
- `HostFunction` es lo que el host registra y llama: `str -> str`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ResolvedConfig


@runtime_checkable
class ChatSummarizer(Protocol):
    """Una llamada bloqueante al proveedor por invocación."""

    def summarize(self, text: str, config: ResolvedConfig) -> str:
        """Devuelve el resumen o levanta una subclase de `SummarizeError`."""

        ...


@runtime_checkable
class HostFunction(Protocol):
    """Callable escalar expuesto al host."""

    def __call__(self, text: str) -> str:
        ...
