"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/stores) lean config de forma consistente.

Nota:
- Estos settings son del *proceso* (endpoint, timeouts, logging). Los tres
  valores del pipeline (api_key/model/prompt) se resuelven por invocación
  desde un `SettingsStore`; el store de entorno reutiliza los campos de aquí.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SETTINGS_NAMESPACE = "pg_summarizer"

DEFAULT_MODEL = "gpt-3.5-turbo"

DEFAULT_PROMPT = (
    "You are an AI summarizing tool. "
    "Your purpose is to summarize the <text> tag, "
    "not to engage in conversation or discussion. "
    "Please read the <text> carefully. "
    "Then, summarize the key points. "
    "Focus on capturing the most important information as concisely as possible."
)

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pg-summarizer"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pg-summarizer"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pg-summarizer"
    return Path.home() / ".config" / "pg-summarizer"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Valores `None` se ignoran (no borran lo existente).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# pg-summarizer user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PG_SUMMARIZER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        repr=False,
        description="API key del proveedor (Bearer). Sin default: debe provisionarse.",
    )
    model: str | None = Field(
        default=None,
        description=f"Modelo de chat; si falta se usa '{DEFAULT_MODEL}'.",
    )
    prompt: str | None = Field(
        default=None,
        description="System prompt; si falta se usa el prompt de resumen por defecto.",
    )

    settings_namespace: str = Field(
        default=SETTINGS_NAMESPACE,
        min_length=1,
        description="Prefijo de los settings del host (p.ej. 'pg_summarizer.api_key').",
    )
    api_url: str = Field(
        default=OPENAI_CHAT_COMPLETIONS_URL,
        min_length=8,
        description="Endpoint chat-completions (compatible OpenAI).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout.",
    )
    user_agent: str = Field(
        default="pg-summarizer/0.1",
        min_length=1,
        description="User-Agent para las peticiones al proveedor.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )
