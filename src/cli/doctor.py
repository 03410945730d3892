"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.catalog import ENUMS, UNIONS

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Show the effective settings and check connectivity to the endpoint."""

    settings = AppSettings()

    table = Table(title="azwire Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Endpoint", "OK", settings.endpoint)
    if settings.api_version:
        table.add_row("api-version", "OK", settings.api_version)
    else:
        table.add_row("api-version", "OPTIONAL", "Not set -> next links are followed as returned")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Catalog", "OK", f"{len(ENUMS)} enums, {len(UNIONS)} unions")
    table.add_row("User .env", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))

    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        # Best-effort: un 401 de ARM también demuestra conectividad.
        ok_http, detail_http = asyncio.run(_check_http(settings.endpoint, settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", escape(detail_http))

    _console.print(table)


@app.command(name="configure")
def configure() -> None:
    """Interactive setup (stores endpoint/api-version in the user config .env)."""

    settings = AppSettings()
    endpoint = typer.prompt("Endpoint", default=settings.endpoint, show_default=True).strip()
    api_version = typer.prompt(
        "api-version (empty to skip)", default=settings.api_version or "", show_default=False
    ).strip()

    if not endpoint.startswith(("http://", "https://")):
        raise typer.BadParameter("endpoint must be an http(s) URL")

    env_path = write_user_env_vars(
        {
            "AZWIRE_ENDPOINT": endpoint,
            "AZWIRE_API_VERSION": api_version or None,
        }
    )
    _console.print(f"[green]Saved config to:[/green] {env_path}")
