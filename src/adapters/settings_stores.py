"""Implementaciones concretas de `SettingsStore`.

- `MappingSettingsStore`: en memoria (tests, embebido).
- `LayeredSettingsStore`: overrides explícitos (CLI) sobre otro store.
- `EnvSettingsStore`: variables de entorno / `.env` vía `AppSettings`.
- `PostgresSettingsStore`: settings de sesión de PostgreSQL
  (`current_setting(name, true)`), como los lee una extensión del servidor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import psycopg2

from core.config import AppSettings
from core.domain.errors import SettingsLookupError
from core.interfaces.settings_store import SettingsStore

_CURRENT_SETTING_SQL = "SELECT current_setting(%s, true)"


class MappingSettingsStore:
    """Store en memoria; un valor `None` equivale a un setting nulo."""

    def __init__(self, values: Mapping[str, str | None] | None = None) -> None:
        self._values = dict(values or {})

    def get_setting(self, name: str) -> str | None:
        return self._values.get(name)


class LayeredSettingsStore:
    """Consulta `overrides` primero y cae a `base` si allí no hay valor."""

    def __init__(self, base: SettingsStore, overrides: Mapping[str, str | None]) -> None:
        self._base = base
        self._overrides = {k: v for k, v in overrides.items() if v is not None}

    def get_setting(self, name: str) -> str | None:
        if name in self._overrides:
            return self._overrides[name]
        return self._base.get_setting(name)


class EnvSettingsStore:
    """Expone `AppSettings` como store: `<namespace>.<campo>` -> campo.

    Solo `api_key`, `model` y `prompt` son visibles; cualquier otro nombre
    devuelve `None`.
    """

    _FIELDS = ("api_key", "model", "prompt")

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def get_setting(self, name: str) -> str | None:
        namespace, _, key = name.rpartition(".")
        if namespace != self._settings.settings_namespace or key not in self._FIELDS:
            return None
        return getattr(self._settings, key)


class PostgresSettingsStore:
    """Lee settings de sesión/sistema de PostgreSQL.

    Por qué `current_setting(name, true)`:
    - Con `missing_ok=true` un setting no definido devuelve NULL en vez de error.
    - El scoping sesión/sistema y `pg_reload_conf()` quedan del lado del servidor.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    @classmethod
    def connect(cls, dsn: str) -> "PostgresSettingsStore":
        try:
            connection = psycopg2.connect(dsn)
        except psycopg2.Error as exc:
            raise SettingsLookupError("<connection>", str(exc).strip()) from exc
        connection.autocommit = True
        return cls(connection)

    def close(self) -> None:
        self._connection.close()

    def get_setting(self, name: str) -> str | None:
        try:
            with self._connection.cursor() as cursor:
                cursor.execute(_CURRENT_SETTING_SQL, (name,))
                row = cursor.fetchone()
        except psycopg2.Error as exc:
            raise SettingsLookupError(name, str(exc).strip()) from exc
        if row is None:
            return None
        return row[0]
