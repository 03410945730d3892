"""Piezas Rich de la CLI `azwire`.

Cada comando arma su salida con estas funciones; ninguna decodifica nada,
solo presentan lo que ya devolvieron los codecs o el walker.
"""

from __future__ import annotations

import json

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.models import WireModel
from core.domain.tagged_union import TaggedUnion
from core.domain.wire_enum import OpenEnum, WireEnum


def print_banner(console: Console, *, endpoint: str | None = None) -> None:
    """Cabecera de una línea: nombre, endpoint activo y lo que sabe decodificar.

    Solo se muestra con `--banner`, así la salida por defecto se puede pegar
    en un issue sin ruido.
    """

    summary = Text.assemble(
        ("azwire", "bold cyan"),
        ("  open enums / tagged unions / nextLink paging", "dim"),
    )
    if endpoint:
        summary.append(f"  @ {endpoint}", style="magenta")
    console.rule(summary, style="cyan")


def build_enum_table(enum_cls: type[WireEnum], value: WireEnum) -> Table:
    """Tabla con el resultado de decodificar un valor de enum."""

    kind = "open" if issubclass(enum_cls, OpenEnum) else "closed"
    table = Table(title=f"{enum_cls.__name__} ({kind})")
    table.add_column("Variant", style="cyan", no_wrap=True)
    table.add_column("Unknown", style="yellow")
    table.add_column("Wire", style="magenta")
    table.add_column("Known values", style="dim")
    table.add_row(
        value.name,
        "yes" if value.is_unknown else "no",
        escape(value.to_wire()),
        ", ".join(enum_cls.known_values()),
    )
    return table


def build_shape_panel(union: TaggedUnion, shape: WireModel) -> Panel:
    """Panel con la shape elegida y su JSON re-codificado."""

    encoded = json.dumps(union.encode(shape), ensure_ascii=False, indent=2)
    title = Text(f"{union.name}: {union.tag}={union.tag_of(shape)!r} -> {type(shape).__name__}", style="bold green")
    return Panel(Syntax(encoded, "json", word_wrap=True), title=title, border_style="green")


def build_pages_table() -> Table:
    table = Table(title="Pages")
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Items", style="white")
    table.add_column("Next link", style="magenta")
    return table
