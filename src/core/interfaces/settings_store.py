"""Contrato del store de configuración del host.

Por qué Protocol:
- El pipeline solo necesita `get_setting(name)`; el scoping (sesión/sistema) y
  la recarga son asunto del store.
- Permite tests deterministas con un store en memoria.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SettingsStore(Protocol):
    """Lookup clave-valor de settings con nombre.

    Reglas de diseño:
    - Devuelve `None` si el setting no existe o es nulo.
    - Si el store mismo falla, levanta `SettingsLookupError`.
    """

    def get_setting(self, name: str) -> str | None:
        ...
