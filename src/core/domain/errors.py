"""Errores del dominio.

Por qué una jerarquía propia:
- El pipeline señala fallos con tipos explícitos; solo el binding del host los
  convierte en un abort.
- Los mensajes distinguen config faltante, fallo de red, status HTTP no-2xx y
  respuesta inutilizable.
"""

from __future__ import annotations


class SummarizeError(Exception):
    """Base de todos los fallos del pipeline de resumen."""


class ConfigError(SummarizeError):
    """Configuración inválida o ausente."""


class MissingApiKeyError(ConfigError):
    def __init__(self, setting_name: str) -> None:
        self.setting_name = setting_name
        super().__init__(f"missing required setting '{setting_name}' (API key is not configured)")


class SettingsLookupError(Exception):
    """El propio store de configuración falló al leer un setting."""

    def __init__(self, setting_name: str, reason: str) -> None:
        self.setting_name = setting_name
        super().__init__(f"failed to read setting '{setting_name}': {reason}")


class RequestConstructionError(SummarizeError):
    """No se pudo construir la request (p.ej. header inválido)."""


class TransportError(SummarizeError):
    """Fallo de red/TLS/I-O al contactar el endpoint."""


class ApiError(SummarizeError):
    """El endpoint respondió con un status fuera de 2xx."""

    def __init__(self, status_code: int, body_excerpt: str = "") -> None:
        self.status_code = status_code
        self.body_excerpt = body_excerpt
        message = f"Request failed with status: {status_code}"
        if body_excerpt:
            message = f"{message} ({body_excerpt})"
        super().__init__(message)


class MalformedResponseError(SummarizeError):
    """Respuesta 2xx sin `choices[0].message.content` como string."""


class HostAbort(RuntimeError):
    """Señal irrecuperable hacia el host: aborta la unidad de trabajo actual."""
