"""CLI `azwire`: inspección de payloads Azure desde la terminal.

Comandos:
- `enum`: decodifica un string con un enum del catálogo.
- `decode`: decodifica un JSON con una unión del catálogo (y re-exporta).
- `pages`: recorre una colección paginada por nextLink.
- `doctor`: diagnóstico de configuración.
"""

from __future__ import annotations

import json
from itertools import islice
from pathlib import Path
from typing import Any, Optional

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from adapters.http_client import HttpResponseError, build_client
from adapters.json_exporter import export_wire_json, load_json_file
from adapters.pager import list_pages
from cli import doctor
from cli.ui_components import build_enum_table, build_pages_table, build_shape_panel, print_banner
from core.config import AppSettings
from core.domain.catalog import get_enum, get_union
from core.domain.errors import DecodeError
from core.domain.models import NextLinkPage
from core.logging_setup import setup_logging

app = typer.Typer(no_args_is_help=True, help="Resilient decoding of Azure REST payloads.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


class RawPage(NextLinkPage[dict[str, Any]]):
    """Página genérica: los items se dejan como objetos JSON."""


def _fail(message: str, code: int = 1) -> typer.Exit:
    _console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(code=code)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logging a nivel DEBUG."),
    banner: bool = typer.Option(False, "--banner", help="Mostrar banner."),
) -> None:
    settings = AppSettings()
    setup_logging("DEBUG" if verbose else settings.log_level, rich=settings.rich_logging)
    if banner:
        print_banner(_console, endpoint=settings.endpoint)


@app.command("enum")
def enum_command(
    name: str = typer.Argument(..., help="Nombre del enum (p.ej. AuthenticationMode)."),
    value: str = typer.Argument(..., help="String de wire a decodificar."),
) -> None:
    """Decode a wire string with a catalog enum."""

    try:
        enum_cls = get_enum(name)
    except KeyError as exc:
        raise _fail(str(exc.args[0]), code=2) from exc

    try:
        decoded = enum_cls.from_wire(value)
    except DecodeError as exc:
        raise _fail(f"Decode error: {exc}") from exc

    _console.print(build_enum_table(enum_cls, decoded))


@app.command("decode")
def decode_command(
    union_name: str = typer.Argument(..., help="Nombre de la unión (p.ej. InfrastructureConfiguration)."),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Exportar el JSON re-codificado."),
) -> None:
    """Decode a JSON object through a catalog tagged union."""

    try:
        union = get_union(union_name)
    except KeyError as exc:
        raise _fail(str(exc.args[0]), code=2) from exc

    try:
        shape = union.decode(load_json_file(path))
    except json.JSONDecodeError as exc:
        raise _fail(f"Decode error: malformed JSON ({exc})") from exc
    except DecodeError as exc:
        raise _fail(f"Decode error: {exc}") from exc

    _console.print(build_shape_panel(union, shape))
    if output is not None:
        written = export_wire_json(payload=union.encode(shape), output_path=output)
        _console.print(f"[green]Saved:[/green] {written}")


@app.command("pages")
def pages_command(
    url: str = typer.Argument(..., help="URL (absoluta o relativa al endpoint) de la colección."),
    api_version: Optional[str] = typer.Option(None, "--api-version", help="Sobrescribe AZWIRE_API_VERSION."),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Sobrescribe AZWIRE_ENDPOINT."),
    max_pages: Optional[int] = typer.Option(None, "--max-pages", min=1),
    continuation_token: Optional[str] = typer.Option(None, "--continuation-token"),
    token: Optional[str] = typer.Option(
        None, "--token", envvar="AZWIRE_BEARER_TOKEN", help="Bearer token ya obtenido."
    ),
) -> None:
    """Walk a nextLink-paged collection and summarize each page."""

    settings = AppSettings()
    overrides = {k: v for k, v in {"api_version": api_version, "endpoint": endpoint}.items() if v}
    if overrides:
        settings = settings.model_copy(update=overrides)

    client = None
    if token:
        client = build_client(settings, extra_headers={"Authorization": f"Bearer {token}"})

    table = build_pages_table()
    pages = list_pages(url, RawPage, settings=settings, client=client, continuation_token=continuation_token)
    try:
        for index, page in enumerate(islice(pages, max_pages), start=1):
            table.add_row(str(index), str(len(page.value)), escape(page.next_link or "-"))
    except (HttpResponseError, DecodeError, httpx.HTTPError) as exc:
        raise _fail(f"Paging failed: {exc}") from exc
    finally:
        pages.close()
        if client is not None:
            client.close()

    _console.print(table)


def run() -> None:
    app()
