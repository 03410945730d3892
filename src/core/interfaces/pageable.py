"""Contrato de respuestas paginadas.

Por qué Protocol:
- Cualquier modelo de página (nextLink en el body, token en header, etc.)
  sirve al walker si sabe exponer sus items y su continuación.
- No obliga a heredar de `NextLinkPage`.
"""

from __future__ import annotations

from typing import Iterable, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Pageable(Protocol[T_co]):
    """Página de una colección.

    Reglas de diseño:
    - `continuation()` devuelve `None` (o vacío) cuando no hay más páginas.
    - `items()` no hace I/O: la página ya está decodificada.
    """

    def continuation(self) -> str | None:
        ...

    def items(self) -> Iterable[T_co]:
        ...
