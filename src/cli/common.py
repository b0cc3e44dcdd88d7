"""Helpers compartidos por los comandos de la CLI (logging, stores)."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.logging import RichHandler

from adapters.settings_stores import EnvSettingsStore, PostgresSettingsStore
from core.config import AppSettings
from core.interfaces.settings_store import SettingsStore


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    """Configura el logging raíz con `RichHandler` (stderr por defecto)."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request a INFO; solo lo queremos en DEBUG.
    if logging.getLogger().level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)


@contextmanager
def open_settings_store(settings: AppSettings, dsn: str | None = None) -> Iterator[SettingsStore]:
    """Store de PostgreSQL si hay DSN; si no, entorno/.env."""

    if not dsn:
        yield EnvSettingsStore(settings)
        return

    store = PostgresSettingsStore.connect(dsn)
    try:
        yield store
    finally:
        store.close()
