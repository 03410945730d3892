"""Modelos base de wire (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y alias camelCase declarados en un solo sitio (Field).
- La serialización por alias reproduce exactamente el JSON del servicio.

Nota:
- Estos modelos describen *qué* forma tiene el payload, no *cómo* llega
  (eso es cosa de los adaptadores HTTP).
"""

from __future__ import annotations

from typing import Annotated, Any, Generic, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    SerializerFunctionWrapHandler,
    ValidationError,
    model_serializer,
)
from pydantic.config import ConfigDict

from core.domain.errors import DecodeError

T = TypeVar("T")
M = TypeVar("M", bound="WireModel")


def _null_as_empty(value: Any) -> Any:
    return [] if value is None else value


WireList = Annotated[list[T], BeforeValidator(_null_as_empty)]
"""Lista donde un `null` explícito del servicio se decodifica como `[]`."""


class WireModel(BaseModel):
    """Base de todas las shapes de wire.

    Reglas:
    - `extra="ignore"`: campos nuevos del servicio no rompen la decodificación.
    - `frozen=True`: una shape decodificada no se re-etiqueta ni se muta.
    - `populate_by_name=True`: en Python se construye con nombres snake_case.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @classmethod
    def from_wire(cls: type[M], data: Any) -> M:
        """Decodifica un objeto JSON ya parseado."""

        return decode_model(cls, data)

    def to_wire(self) -> dict[str, Any]:
        """Codifica a un `dict` listo para `json.dumps` (alias, sin nulos ni listas vacías)."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @model_serializer(mode="wrap")
    def _skip_empty_lists(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Solo se omiten listas vacías de campos opcionales; una requerida
        # vacía se emite para que el payload vuelva a decodificar.
        data = handler(self)
        optional = _optional_wire_keys(type(self))
        return {key: value for key, value in data.items() if not (value == [] and key in optional)}


def _optional_wire_keys(model: type[BaseModel]) -> frozenset[str]:
    keys: set[str] = set()
    for name, info in model.model_fields.items():
        if info.is_required():
            continue
        keys.add(name)
        for alias in (info.alias, info.serialization_alias):
            if isinstance(alias, str):
                keys.add(alias)
    return frozenset(keys)


def decode_model(model: type[M], data: Any) -> M:
    """`model_validate` que falla con `DecodeError` (encadenado, nunca silenciado)."""

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"{model.__name__}: {exc}") from exc


def decode_json(model: type[M], raw: str | bytes) -> M:
    """Decodifica bytes/texto JSON; el JSON mal formado también es `DecodeError`."""

    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"{model.__name__}: {exc}") from exc


class NextLinkPage(WireModel, Generic[T]):
    """Envoltorio de colección paginada por `nextLink`."""

    value: WireList[T] = Field(
        default_factory=list,
        description="Elementos de esta página.",
    )
    next_link: str | None = Field(
        default=None,
        alias="nextLink",
        description="URL (absoluta o relativa) de la siguiente página.",
    )

    def continuation(self) -> str | None:
        # Un nextLink vacío es condición de fin, igual que uno ausente.
        return self.next_link or None

    def items(self) -> list[T]:
        return list(self.value)
