"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y el mapeo de respuestas no-2xx a errores.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Fuera de alcance: adquisición de tokens. Quien necesite `Authorization` lo
pasa en `extra_headers`.
"""

from __future__ import annotations

import json
from urllib.parse import urljoin, urlsplit

import httpx

from core.config import AppSettings
from core.domain.errors import WireError

API_VERSION = "api-version"


class HttpResponseError(WireError):
    """Respuesta con status fuera de 2xx."""

    def __init__(
        self,
        status_code: int,
        *,
        error_code: str | None = None,
        message: str | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.url = url
        detail = f"HTTP {status_code}"
        if error_code:
            detail += f" ({error_code})"
        if message:
            detail += f": {message}"
        if url:
            detail += f" [{url}]"
        super().__init__(detail)


def _default_headers(settings: AppSettings, extra_headers: dict[str, str] | None) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con los defaults del proyecto."""

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - Facilita testeo y futuras políticas (retries, proxies).
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


def _error_details(response: httpx.Response) -> tuple[str | None, str | None]:
    error_code = response.headers.get("x-ms-error-code")
    message: str | None = None
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        if error_code is None and isinstance(error.get("code"), str):
            error_code = error["code"]
        if isinstance(error.get("message"), str):
            message = error["message"]
    return error_code, message


def raise_for_status(response: httpx.Response) -> None:
    """Lanza `HttpResponseError` si el status no es 2xx.

    El código de error sale del header `x-ms-error-code` o, si no está, de
    `error.code` en el body (formato ARM).
    """

    if response.is_success:
        return
    error_code, message = _error_details(response)
    try:
        url: str | None = str(response.request.url)
    except RuntimeError:
        # Respuesta construida a mano, sin request asociada.
        url = None
    raise HttpResponseError(response.status_code, error_code=error_code, message=message, url=url)


def resolve_next_link(endpoint: str, link: str) -> str:
    """Resuelve un nextLink (absoluto o relativo) contra la raíz del endpoint."""

    parts = urlsplit(endpoint)
    root = f"{parts.scheme}://{parts.netloc}/"
    return urljoin(root, link)


def ensure_api_version(url: str, api_version: str | None) -> str:
    """Añade `api-version` solo si la URL no lo trae ya."""

    if not api_version:
        return url
    parsed = httpx.URL(url)
    if API_VERSION in parsed.params:
        return url
    return str(parsed.copy_add_param(API_VERSION, api_version))
