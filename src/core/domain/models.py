"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- La request y la respuesta del proveedor se validan con el mismo mecanismo.

Nota:
- Todos los modelos viven lo que dura una invocación; nada se cachea.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, StrictStr
from pydantic.config import ConfigDict

from core.config import DEFAULT_MODEL, DEFAULT_PROMPT

TEXT_OPEN_TAG = "<text>"
TEXT_CLOSE_TAG = "</text>"


class ResolvedConfig(BaseModel):
    """Los tres parámetros del pipeline ya resueltos (con defaults aplicados)."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Secreto Bearer; siempre provisionado por un operador.",
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Identificador del modelo de chat.",
    )
    prompt: str = Field(
        default=DEFAULT_PROMPT,
        description="System prompt que instruye el resumen.",
    )


class ChatMessage(BaseModel):
    role: Literal["system", "user"]
    content: str


class ChatRequest(BaseModel):
    """Cuerpo JSON de un chat-completion: modelo + mensajes ordenados."""

    model: str
    messages: list[ChatMessage] = Field(..., min_length=2, max_length=2)

    @classmethod
    def for_summary(cls, text: str, config: ResolvedConfig) -> "ChatRequest":
        """System con el prompt, user con el texto envuelto en `<text>`.

        El texto no se escapa: un `</text>` dentro del input pasa tal cual.
        """

        return cls(
            model=config.model,
            messages=[
                ChatMessage(role="system", content=config.prompt),
                ChatMessage(role="user", content=f"{TEXT_OPEN_TAG}{text}{TEXT_CLOSE_TAG}"),
            ],
        )


class _ResponseMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: StrictStr


class _ResponseChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: _ResponseMessage


class ChatResponse(BaseModel):
    """Vista mínima de la respuesta: solo se lee `choices[0].message.content`."""

    model_config = ConfigDict(extra="ignore")

    choices: list[Any] = Field(..., min_length=1)

    def first_content(self) -> str:
        """Contenido de la primera choice; el resto de choices no se valida."""

        return _ResponseChoice.model_validate(self.choices[0]).message.content


class BatchItem(BaseModel):
    """Resultado de un elemento en `batch` (CLI)."""

    index: int = Field(..., ge=0)
    input: str
    summary: str
