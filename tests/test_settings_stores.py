"""Tests de los stores de settings (memoria, overrides, entorno, PostgreSQL)."""

from __future__ import annotations

import psycopg2
import pytest

from adapters.settings_stores import (
    EnvSettingsStore,
    LayeredSettingsStore,
    MappingSettingsStore,
    PostgresSettingsStore,
)
from core.config import AppSettings
from core.domain.errors import SettingsLookupError
from core.interfaces.settings_store import SettingsStore
from core.services.config_resolver import resolve_config


class _FakeCursor:
    def __init__(self, connection: "_FakeConnection") -> None:
        self._connection = connection
        self._row: tuple[str | None] | None = None

    def __enter__(self) -> "_FakeCursor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def execute(self, sql: str, params: tuple[str]) -> None:
        self._connection.executed.append((sql, params))
        if self._connection.error is not None:
            raise self._connection.error
        (name,) = params
        self._row = (self._connection.settings.get(name),)

    def fetchone(self) -> tuple[str | None] | None:
        return self._row


class _FakeConnection:
    """Conexión DB-API mínima que emula `current_setting(name, true)`."""

    def __init__(self, settings: dict[str, str], error: Exception | None = None) -> None:
        self.settings = settings
        self.error = error
        self.executed: list[tuple[str, tuple[str]]] = []
        self.closed = False

    def cursor(self) -> _FakeCursor:
        return _FakeCursor(self)

    def close(self) -> None:
        self.closed = True


def test_stores_satisfy_protocol(settings: AppSettings) -> None:
    stores = [
        MappingSettingsStore(),
        LayeredSettingsStore(MappingSettingsStore(), {}),
        EnvSettingsStore(settings),
        PostgresSettingsStore(_FakeConnection({})),
    ]
    for store in stores:
        assert isinstance(store, SettingsStore)


def test_mapping_store_returns_none_for_missing_and_null() -> None:
    store = MappingSettingsStore({"a": "1", "b": None})

    assert store.get_setting("a") == "1"
    assert store.get_setting("b") is None
    assert store.get_setting("c") is None


def test_layered_store_prefers_overrides() -> None:
    base = MappingSettingsStore({"ns.model": "base-model", "ns.api_key": "k"})
    store = LayeredSettingsStore(base, {"ns.model": "override", "ns.prompt": None})

    assert store.get_setting("ns.model") == "override"
    assert store.get_setting("ns.api_key") == "k"
    assert store.get_setting("ns.prompt") is None


def test_env_store_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PG_SUMMARIZER_API_KEY", "sk-env")
    monkeypatch.setenv("PG_SUMMARIZER_MODEL", "gpt-4o-mini")
    monkeypatch.delenv("PG_SUMMARIZER_PROMPT", raising=False)
    store = EnvSettingsStore(AppSettings(_env_file=None))

    assert store.get_setting("pg_summarizer.api_key") == "sk-env"
    assert store.get_setting("pg_summarizer.model") == "gpt-4o-mini"
    assert store.get_setting("pg_summarizer.prompt") is None
    assert store.get_setting("pg_summarizer.user_agent") is None
    assert store.get_setting("other.api_key") is None


def test_env_store_feeds_resolver(settings: AppSettings) -> None:
    settings.api_key = "sk-from-settings"

    config = resolve_config(EnvSettingsStore(settings))

    assert config.api_key == "sk-from-settings"
    assert config.model == "gpt-3.5-turbo"


def test_postgres_store_uses_current_setting_missing_ok() -> None:
    connection = _FakeConnection({"pg_summarizer.api_key": "sk-pg"})
    store = PostgresSettingsStore(connection)

    assert store.get_setting("pg_summarizer.api_key") == "sk-pg"
    assert store.get_setting("pg_summarizer.model") is None
    assert connection.executed[0] == ("SELECT current_setting(%s, true)", ("pg_summarizer.api_key",))


def test_postgres_store_wraps_driver_errors() -> None:
    store = PostgresSettingsStore(_FakeConnection({}, error=psycopg2.OperationalError("server closed")))

    with pytest.raises(SettingsLookupError) as info:
        store.get_setting("pg_summarizer.model")

    assert info.value.setting_name == "pg_summarizer.model"
    assert isinstance(info.value.__cause__, psycopg2.Error)


def test_postgres_store_errors_fall_back_for_model_only() -> None:
    class _PartialConnection(_FakeConnection):
        def cursor(self) -> _FakeCursor:
            cursor = _FakeCursor(self)
            real_execute = cursor.execute

            def execute(sql: str, params: tuple[str]) -> None:
                if params[0].endswith(".model"):
                    raise psycopg2.OperationalError("lost")
                real_execute(sql, params)

            cursor.execute = execute  # type: ignore[method-assign]
            return cursor

    store = PostgresSettingsStore(_PartialConnection({"pg_summarizer.api_key": "sk-pg"}))

    config = resolve_config(store)

    assert config.api_key == "sk-pg"
    assert config.model == "gpt-3.5-turbo"


def test_postgres_store_close() -> None:
    connection = _FakeConnection({})
    PostgresSettingsStore(connection).close()

    assert connection.closed is True


def test_postgres_connect_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _refuse(dsn: str) -> None:
        raise psycopg2.OperationalError("could not connect")

    monkeypatch.setattr(psycopg2, "connect", _refuse)

    with pytest.raises(SettingsLookupError):
        PostgresSettingsStore.connect("postgresql://nowhere/db")
