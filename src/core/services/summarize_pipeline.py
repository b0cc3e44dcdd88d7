"""Summarize pipeline: config resolution followed by one remote call.

Every invocation re-resolves configuration and performs a fresh round trip,
so nothing here holds state between calls. Entry points (host binding, CLI,
tests) go through these helpers instead of wiring the pieces themselves.
"""

from __future__ import annotations

import logging

from core.config import SETTINGS_NAMESPACE
from core.interfaces.settings_store import SettingsStore
from core.interfaces.summarizer import ChatSummarizer
from core.services.config_resolver import resolve_config

logger = logging.getLogger(__name__)

HELLO_MESSAGE = "Hello, pg_summarize"


def hello() -> str:
    """Fixed greeting used to check that the integration point is wired."""

    return HELLO_MESSAGE


def summarize_text(
    text: str,
    *,
    store: SettingsStore,
    client: ChatSummarizer,
    namespace: str = SETTINGS_NAMESPACE,
) -> str:
    """Summarize `text` with settings read from `store`.

    Raises a `SummarizeError` subclass on failure. A missing API key fails
    before `client` is touched.
    """

    config = resolve_config(store, namespace=namespace)
    logger.debug("Summarizing %d characters with model %s", len(text), config.model)
    return client.summarize(text, config)
