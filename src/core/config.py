"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El walker y el cliente HTTP leen endpoint/api-version del mismo contrato.

Orden de precedencia: argumentos explícitos > entorno (`AZWIRE_*`) >
`.env` del proyecto > `.env` de usuario.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "azwire"
ENV_PREFIX = "AZWIRE_"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or Path.home()) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _read_env_file(env_path: Path) -> dict[str, str]:
    # Formato KEY=VALUE; comentarios y líneas sin `=` se ignoran.
    entries: dict[str, str] = {}
    if not env_path.exists():
        return entries
    for line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if not sep or key.startswith("#") or not key.strip():
            continue
        entries[key.strip()] = value.strip().strip("\"'")
    return entries


def write_user_env_vars(values: Mapping[str, str | None], env_path: Path | None = None) -> Path:
    """Fusiona `values` en el `.env` de usuario y devuelve su ruta.

    - Las claves que ya existían y no vienen en `values` se conservan.
    - Un valor `None` no pisa lo guardado (prompt vacío = sin cambios).
    """

    env_path = env_path or get_user_env_file()
    merged = _read_env_file(env_path)
    merged.update({key: value for key, value in values.items() if value is not None})

    env_path.parent.mkdir(parents=True, exist_ok=True)
    body = "".join(f"{key}={merged[key]}\n" for key in sorted(merged))
    env_path.write_text(f"# {APP_NAME} user config (.env)\n{body}", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar los codecs.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # El último archivo gana: el .env del proyecto pisa al de usuario.
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    endpoint: str = Field(
        default="https://management.azure.com",
        min_length=8,
        description="Endpoint base; los nextLink relativos se resuelven contra él.",
    )
    api_version: str | None = Field(
        default=None,
        description="Valor de `api-version` añadido a la petición inicial y a los nextLink que no lo traigan.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="azwire/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    continuation_header: str = Field(
        default="x-ms-continuation",
        min_length=1,
        description="Header usado por colecciones paginadas por token en vez de nextLink.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )
    rich_logging: bool = Field(
        default=False,
        description="Usar `rich.logging.RichHandler` en vez del formato plano.",
    )
