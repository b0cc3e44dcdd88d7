"""Binding con el mecanismo de dispatch del host.

Por qué un adaptador aparte:
- El pipeline no conoce tipos del host; aquí se registran callables `str -> str`.
- Es el único punto donde un `SummarizeError` se convierte en `HostAbort`
  (el host aborta la unidad de trabajo, p.ej. la query entera).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from adapters.openai_chat import SummarizeClient
from core.config import AppSettings
from core.domain.errors import HostAbort, SummarizeError
from core.interfaces.settings_store import SettingsStore
from core.interfaces.summarizer import ChatSummarizer, HostFunction
from core.services.summarize_pipeline import hello, summarize_text

logger = logging.getLogger(__name__)


class SummarizeFunction(HostFunction):
    """Función escalar `summarize(text)` lista para registrar en el host."""

    def __init__(
        self,
        store: SettingsStore,
        client: ChatSummarizer | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._store = store
        self._client = client or SummarizeClient(self._settings)

    def __call__(self, text: str) -> str:
        try:
            return summarize_text(
                text,
                store=self._store,
                client=self._client,
                namespace=self._settings.settings_namespace,
            )
        except SummarizeError as exc:
            logger.error("summarize aborted: %s", exc)
            raise HostAbort(f"Error: {exc}") from exc


def hello_pg_summarize() -> str:
    return hello()


def _summarize_factory(store: SettingsStore, settings: AppSettings | None = None) -> HostFunction:
    return SummarizeFunction(store, settings=settings)


def _hello_factory(store: SettingsStore, settings: AppSettings | None = None) -> Callable[[], str]:
    return hello_pg_summarize


# Nombre exportado -> factory(store, settings) del callable.
FUNCTIONS: dict[str, Callable[..., Callable[..., str]]] = {
    "summarize": _summarize_factory,
    "hello_pg_summarize": _hello_factory,
}


def register_functions(
    register: Callable[[str, Callable[..., str]], None],
    store: SettingsStore,
    settings: AppSettings | None = None,
) -> list[str]:
    """Registra todas las funciones exportadas usando el hook del host."""

    names: list[str] = []
    for name, factory in FUNCTIONS.items():
        register(name, factory(store, settings))
        names.append(name)
    return names
