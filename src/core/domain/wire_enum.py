"""Enums de wire: abiertos (con fallback) y cerrados.

Por qué dos tipos:
- Los servicios Azure añaden valores a enums marcados `modelAsString` sin
  avisar; un cliente viejo no debe romperse por eso (`OpenEnum`).
- Los enums sin `modelAsString` son contratos cerrados: un valor desconocido
  es un error de decodificación (`WireEnum`).

Cómo:
- Los miembros conocidos son miembros normales (`str`, `Enum`); el nombre
  simbólico puede diferir del string de wire (`N1_0 = "1.0"`).
- El valor desconocido es un *pseudo-miembro* `UNKNOWN_VALUE` que envuelve el
  string crudo. Se crea en cada decodificación y nunca se registra en la
  clase, así que no hay instancias compartidas ni cacheadas.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from core.domain.errors import (
    DecodeError,
    KnownEnumValueError,
    MissingFieldError,
    UnknownEnumValueError,
)

logger = logging.getLogger(__name__)

UNKNOWN_VALUE = "UNKNOWN_VALUE"


def _serialize(value: Any) -> Any:
    if isinstance(value, WireEnum):
        return value.to_wire()
    return value


class WireEnum(str, Enum):
    """Enum cerrado: solo acepta los strings documentados."""

    def __str__(self) -> str:
        return self._value_

    @classmethod
    def from_wire(cls, raw: Any) -> WireEnum:
        """Decodifica un string de wire (match exacto, sensible a mayúsculas)."""

        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise DecodeError(f"{cls.__name__}: expected a string, got {type(raw).__name__}")
        try:
            return cls(raw)
        except ValueError:
            raise UnknownEnumValueError(cls.__name__, raw, cls.known_values()) from None

    def to_wire(self) -> str:
        return self._value_

    @classmethod
    def known_values(cls) -> tuple[str, ...]:
        return tuple(member._value_ for member in cls)

    @classmethod
    def default(cls) -> WireEnum | None:
        """Variante usada cuando el campo falta por completo. Opt-in por tipo."""

        return None

    @classmethod
    def from_absent(cls) -> WireEnum:
        """Valor para un campo ausente del payload.

        Solo los tipos que sobrescriben `default()` tienen respuesta; el resto
        deja la condición de campo faltante al decodificador del objeto.
        """

        default = cls.default()
        if default is None:
            raise MissingFieldError(cls.__name__)
        return default

    @property
    def is_unknown(self) -> bool:
        return False

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.from_wire,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize,
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "enum": list(cls.known_values()),
            "x-ms-enum": {"name": cls.__name__, "modelAsString": False},
        }


class OpenEnum(WireEnum):
    """Enum extensible: los valores no reconocidos se conservan tal cual.

    Ley de ida y vuelta:
    - `from_wire(s).to_wire() == s` para cualquier string `s`.
    - `from_wire(v.to_wire()) == v` para cualquier valor `v`.
    """

    @classmethod
    def _missing_(cls, value: object) -> OpenEnum | None:
        if not isinstance(value, str):
            return None
        logger.debug("%s: unrecognized value %r kept as UNKNOWN_VALUE", cls.__name__, value)
        return cls._pseudo_member(value)

    @classmethod
    def _pseudo_member(cls, value: str) -> OpenEnum:
        member = str.__new__(cls, value)
        member._name_ = UNKNOWN_VALUE
        member._value_ = value
        return member

    @classmethod
    def unknown(cls, value: str) -> OpenEnum:
        """Construye explícitamente la variante fallback (`UnknownValue(value)`)."""

        if value in cls.known_values():
            raise KnownEnumValueError(cls.__name__, value)
        return cls._pseudo_member(value)

    @property
    def is_unknown(self) -> bool:
        return self._name_ == UNKNOWN_VALUE

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "examples": list(cls.known_values()),
            "x-ms-enum": {"name": cls.__name__, "modelAsString": True},
        }


def defaulted(enum_cls: type[WireEnum]) -> Any:
    """Tipo de campo para un enum con `default()`: un `null` explícito cuenta como ausente.

    Úsese junto a `Field(default_factory=enum_cls.from_absent)` para que el
    campo ausente y el `null` den el mismo valor.
    """

    def _null_as_default(value: Any) -> Any:
        return enum_cls.from_absent() if value is None else value

    return Annotated[enum_cls, BeforeValidator(_null_as_default)]
