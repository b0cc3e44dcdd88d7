"""Resolución de configuración por invocación.

La API key no tiene default y debe provisionarla un operador; `model` y
`prompt` caen a valores fijos si faltan o el store falla.
"""

from __future__ import annotations

import logging

from core.config import DEFAULT_MODEL, DEFAULT_PROMPT, SETTINGS_NAMESPACE
from core.domain.errors import MissingApiKeyError, SettingsLookupError
from core.domain.models import ResolvedConfig
from core.interfaces.settings_store import SettingsStore

logger = logging.getLogger(__name__)


def setting_name(key: str, namespace: str = SETTINGS_NAMESPACE) -> str:
    return f"{namespace}.{key}"


def _lookup_or_default(store: SettingsStore, name: str, default: str) -> str:
    try:
        value = store.get_setting(name)
    except SettingsLookupError as exc:
        logger.debug("Setting lookup failed, using default: %s", exc)
        return default
    if value is None:
        logger.debug("Setting %s not set, using default", name)
        return default
    return value


def resolve_config(store: SettingsStore, *, namespace: str = SETTINGS_NAMESPACE) -> ResolvedConfig:
    """Lee api_key/model/prompt del store y aplica defaults.

    Levanta `MissingApiKeyError` si la API key está ausente, es nula o vacía, o
    si el store falla al leerla.
    """

    api_key_name = setting_name("api_key", namespace)
    try:
        api_key = store.get_setting(api_key_name)
    except SettingsLookupError as exc:
        raise MissingApiKeyError(api_key_name) from exc
    if not api_key:
        raise MissingApiKeyError(api_key_name)

    model = _lookup_or_default(store, setting_name("model", namespace), DEFAULT_MODEL)
    prompt = _lookup_or_default(store, setting_name("prompt", namespace), DEFAULT_PROMPT)

    return ResolvedConfig(api_key=api_key, model=model, prompt=prompt)
