"""Errores del protocolo de wire.

Por qué una jerarquía propia:
- Separa fallos *estructurales* (discriminador desconocido, JSON mal formado)
  de la deriva de valores (enums abiertos), que nunca es un error.
- `DecodeError` hereda de `ValueError` para que Pydantic lo convierta en
  `ValidationError` cuando se lanza desde un campo anidado.
"""

from __future__ import annotations

from typing import Iterable


class WireError(Exception):
    """Raíz de todos los errores de azwire."""


class DecodeError(WireError, ValueError):
    """El payload no se puede interpretar con el tipo pedido."""


class EncodeError(WireError, TypeError):
    """El valor no pertenece al tipo que se intenta serializar."""


class UnknownEnumValueError(DecodeError):
    """Valor fuera del conjunto de un enum cerrado."""

    def __init__(self, enum_name: str, value: str, known: Iterable[str]) -> None:
        self.enum_name = enum_name
        self.value = value
        self.known = tuple(known)
        super().__init__(
            f"{enum_name}: unknown value {value!r} (expected one of {', '.join(self.known)})"
        )


class MissingFieldError(DecodeError):
    """Campo requerido ausente y sin default declarado."""

    def __init__(self, type_name: str, detail: str = "field is absent and has no default") -> None:
        self.type_name = type_name
        super().__init__(f"{type_name}: {detail}")


class MissingDiscriminatorError(DecodeError):
    def __init__(self, union_name: str, tag: str) -> None:
        self.union_name = union_name
        self.tag = tag
        super().__init__(f"{union_name}: discriminator field {tag!r} is missing or not a string")


class UnknownDiscriminatorError(DecodeError):
    """El valor del tag no tiene shape registrada (no hay fallback)."""

    def __init__(self, union_name: str, tag: str, value: str, known: Iterable[str]) -> None:
        self.union_name = union_name
        self.tag = tag
        self.value = value
        self.known = tuple(known)
        super().__init__(
            f"{union_name}: unrecognized discriminator {tag}={value!r} "
            f"(registered: {', '.join(self.known)})"
        )


class KnownEnumValueError(WireError, ValueError):
    """Se pidió la variante fallback para un valor que el enum ya reconoce."""

    def __init__(self, enum_name: str, value: str) -> None:
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"{enum_name}: {value!r} is a known value, use the member instead")
