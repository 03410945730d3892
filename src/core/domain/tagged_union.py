"""Uniones discriminadas (modelos polimórficos) por campo tag.

Por qué un registro estático y no herencia/reflexión:
- Cada unión de Azure es un conjunto cerrado y conocido de shapes
  (`deploymentType`, `osType`, `configurationType`...).
- Un dict `tag -> shape` basta para despachar; no hay plugins ni subclases
  descubiertas en runtime.

Reglas:
- El tag lo consume la unión: las shapes no lo declaran como campo propio.
- Un tag sin shape registrada es un error duro (`UnknownDiscriminatorError`),
  a diferencia de los enums abiertos: sin shape no hay forma de interpretar
  el resto de campos.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Union

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from core.domain.errors import (
    DecodeError,
    EncodeError,
    MissingDiscriminatorError,
    UnknownDiscriminatorError,
)
from core.domain.models import WireModel, decode_model

logger = logging.getLogger(__name__)


def _declares_field(shape: type[WireModel], wire_name: str) -> bool:
    for name, info in shape.model_fields.items():
        if wire_name in (name, info.alias, info.validation_alias, info.serialization_alias):
            return True
    return False


class TaggedUnion:
    """Codec de una unión discriminada.

    `decode` devuelve directamente la instancia de la shape elegida; el tag
    se recupera a partir de su clase con `tag_of`.
    """

    def __init__(self, name: str, tag: str, shapes: Mapping[str, type[WireModel]]) -> None:
        if not shapes:
            raise ValueError(f"{name}: a tagged union needs at least one shape")

        tags_by_shape: dict[type[WireModel], str] = {}
        for tag_value, shape in shapes.items():
            if not (isinstance(shape, type) and issubclass(shape, WireModel)):
                raise ValueError(f"{name}: shape for {tag_value!r} must be a WireModel subclass")
            if shape in tags_by_shape:
                raise ValueError(
                    f"{name}: {shape.__name__} registered twice "
                    f"({tags_by_shape[shape]!r} and {tag_value!r})"
                )
            if _declares_field(shape, tag):
                raise ValueError(f"{name}: {shape.__name__} must not declare the tag field {tag!r}")
            tags_by_shape[shape] = tag_value

        self.name = name
        self.tag = tag
        self._shapes = MappingProxyType(dict(shapes))
        self._tags = MappingProxyType(tags_by_shape)

    def __repr__(self) -> str:
        return f"TaggedUnion({self.name!r}, tag={self.tag!r}, tags={list(self._shapes)!r})"

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._shapes)

    @property
    def annotation(self) -> Any:
        """Tipo `Annotated[ShapeA | ShapeB, self]` para usar como campo Pydantic."""

        return Annotated[Union[tuple(self._shapes.values())], self]  # noqa: UP007

    def shape_for(self, tag_value: str) -> type[WireModel]:
        try:
            return self._shapes[tag_value]
        except KeyError:
            raise UnknownDiscriminatorError(self.name, self.tag, tag_value, self.tags) from None

    def tag_of(self, value: Any) -> str:
        try:
            return self._tags[type(value)]
        except KeyError:
            raise EncodeError(
                f"{self.name}: {type(value).__name__} is not a registered shape"
            ) from None

    def decode(self, payload: Any) -> WireModel:
        """Selecciona la shape por el tag y la decodifica con el resto de campos."""

        if type(payload) in self._tags:
            return payload
        if not isinstance(payload, Mapping):
            raise DecodeError(f"{self.name}: expected a JSON object, got {type(payload).__name__}")

        tag_value = payload.get(self.tag)
        if not isinstance(tag_value, str):
            raise MissingDiscriminatorError(self.name, self.tag)

        shape = self._shapes.get(tag_value)
        if shape is None:
            logger.debug("%s: rejected discriminator %s=%r", self.name, self.tag, tag_value)
            raise UnknownDiscriminatorError(self.name, self.tag, tag_value, self.tags)

        fields = {key: value for key, value in payload.items() if key != self.tag}
        return decode_model(shape, fields)

    def encode(self, value: WireModel) -> dict[str, Any]:
        """Campos propios de la shape con el par tag/valor reinyectado (primero)."""

        tag_value = self.tag_of(value)
        return {self.tag: tag_value, **value.to_wire()}

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self.decode,
            serialization=core_schema.plain_serializer_function_ser_schema(
                self.encode,
                return_schema=core_schema.dict_schema(),
            ),
        )

    def __get_pydantic_json_schema__(
        self, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "object",
            "title": self.name,
            "required": [self.tag],
            "properties": {self.tag: {"type": "string", "enum": list(self.tags)}},
        }
