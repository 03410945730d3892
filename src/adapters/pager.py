"""Walker de paginación (nextLink / token de continuación).

Por qué está en adapters:
- Es I/O puro (HTTP); el dominio solo aporta el modelo de página.

Reglas:
- Las páginas se piden en serie: la continuación solo se conoce tras
  decodificar la respuesta anterior.
- Continuación ausente o vacía = fin (no es error). Tras la última página no
  se emite ninguna petición más.
- Un error en una página se propaga y termina la iteración.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    Iterator,
    TypeVar,
)

import httpx

from adapters.http_client import (
    build_async_client,
    build_client,
    ensure_api_version,
    raise_for_status,
    resolve_next_link,
)
from core.config import AppSettings
from core.domain.models import decode_json
from core.interfaces.pageable import Pageable

logger = logging.getLogger(__name__)

P = TypeVar("P")
T = TypeVar("T")


@dataclass(frozen=True)
class PagerResult(Generic[P]):
    """Una página y el token para pedir la siguiente (`None` = fin)."""

    page: P
    continuation: str | None = None

    @property
    def done(self) -> bool:
        return not self.continuation


FetchPage = Callable[[str | None], PagerResult[P]]
AsyncFetchPage = Callable[[str | None], Awaitable[PagerResult[P]]]


def _page_items(page: Any) -> Iterable[Any]:
    if not isinstance(page, Pageable):
        raise TypeError(f"{type(page).__name__} does not implement Pageable; pass extract_items")
    return page.items()


def continuation_from_header(response: httpx.Response, header_name: str) -> str | None:
    """Continuación leída de un header (p.ej. `x-ms-continuation`)."""

    return response.headers.get(header_name) or None


class PageIterator(Generic[P]):
    """Iterador bloqueante de páginas.

    `fetch_page(None)` pide la primera página; después se llama con cada
    continuación mientras no sea vacía. `continuation_token` permite retomar
    la paginación en otro proceso.
    """

    def __init__(self, fetch_page: FetchPage[P], *, continuation_token: str | None = None) -> None:
        self._fetch_page = fetch_page
        self._continuation_token = continuation_token or None
        self._done = False

    @property
    def continuation_token(self) -> str | None:
        """Token de la *siguiente* página (None antes de empezar o al terminar)."""

        return self._continuation_token

    def __iter__(self) -> Iterator[P]:
        while not self._done:
            result = self._fetch_page(self._continuation_token)
            self._continuation_token = result.continuation or None
            self._done = self._continuation_token is None
            yield result.page


class AsyncPageIterator(Generic[P]):
    """Versión asíncrona de `PageIterator` (mismas reglas)."""

    def __init__(self, fetch_page: AsyncFetchPage[P], *, continuation_token: str | None = None) -> None:
        self._fetch_page = fetch_page
        self._continuation_token = continuation_token or None
        self._done = False

    @property
    def continuation_token(self) -> str | None:
        return self._continuation_token

    async def __aiter__(self) -> AsyncIterator[P]:
        while not self._done:
            result = await self._fetch_page(self._continuation_token)
            self._continuation_token = result.continuation or None
            self._done = self._continuation_token is None
            yield result.page


class ItemPager(Generic[P, T]):
    """Itera items atravesando páginas; `by_page()` da acceso a las páginas."""

    def __init__(
        self,
        fetch_page: FetchPage[P],
        extract_items: Callable[[P], Iterable[T]] | None = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._extract_items = extract_items or _page_items

    def by_page(self, continuation_token: str | None = None) -> PageIterator[P]:
        return PageIterator(self._fetch_page, continuation_token=continuation_token)

    def __iter__(self) -> Iterator[T]:
        for page in self.by_page():
            yield from self._extract_items(page)


class AsyncItemPager(Generic[P, T]):
    def __init__(
        self,
        fetch_page: AsyncFetchPage[P],
        extract_items: Callable[[P], Iterable[T]] | None = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._extract_items = extract_items or _page_items

    def by_page(self, continuation_token: str | None = None) -> AsyncPageIterator[P]:
        return AsyncPageIterator(self._fetch_page, continuation_token=continuation_token)

    async def __aiter__(self) -> AsyncIterator[T]:
        async for page in self.by_page():
            for item in self._extract_items(page):
                yield item


class _NextLinkRequest(Generic[P]):
    """Construcción de URLs y decodificación compartidas por los fetchers."""

    def __init__(
        self,
        url: str,
        page_model: type[P],
        *,
        settings: AppSettings | None = None,
        endpoint: str | None = None,
        api_version: str | None = None,
    ) -> None:
        settings = settings or AppSettings()
        self._settings = settings
        self._endpoint = endpoint or settings.endpoint
        self._api_version = api_version or settings.api_version
        self._url = resolve_next_link(self._endpoint, url)
        self._page_model = page_model

    def _page_url(self, continuation: str | None) -> str:
        if continuation is None:
            return ensure_api_version(self._url, self._api_version)
        # El servicio puede devolver el nextLink sin api-version; se respeta si lo trae.
        return ensure_api_version(resolve_next_link(self._endpoint, continuation), self._api_version)

    def _to_result(self, response: httpx.Response) -> PagerResult[P]:
        raise_for_status(response)
        page = decode_json(self._page_model, response.content)
        return PagerResult(page, page.continuation())


class NextLinkFetcher(_NextLinkRequest[P]):
    """`fetch_page` que sigue el `nextLink` del body."""

    def __init__(self, client: httpx.Client, url: str, page_model: type[P], **kwargs: Any) -> None:
        super().__init__(url, page_model, **kwargs)
        self._client = client

    def __call__(self, continuation: str | None) -> PagerResult[P]:
        url = self._page_url(continuation)
        logger.debug("GET page %s", url)
        return self._to_result(self._client.get(url))


class AsyncNextLinkFetcher(_NextLinkRequest[P]):
    def __init__(self, client: httpx.AsyncClient, url: str, page_model: type[P], **kwargs: Any) -> None:
        super().__init__(url, page_model, **kwargs)
        self._client = client

    async def __call__(self, continuation: str | None) -> PagerResult[P]:
        url = self._page_url(continuation)
        logger.debug("GET page %s", url)
        return self._to_result(await self._client.get(url))


class HeaderTokenFetcher(_NextLinkRequest[P]):
    """`fetch_page` para colecciones que paginan por header.

    La continuación viaja en el mismo header en la respuesta y en la
    siguiente petición; la URL no cambia entre páginas.
    """

    def __init__(
        self,
        client: httpx.Client,
        url: str,
        page_model: type[P],
        *,
        header_name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(url, page_model, **kwargs)
        self._client = client
        self._header_name = header_name or self._settings.continuation_header

    def __call__(self, continuation: str | None) -> PagerResult[P]:
        headers = {self._header_name: continuation} if continuation else None
        url = self._page_url(None)
        logger.debug("GET page %s (continuation=%r)", url, continuation)
        response = self._client.get(url, headers=headers)
        raise_for_status(response)
        page = decode_json(self._page_model, response.content)
        return PagerResult(page, continuation_from_header(response, self._header_name))


def list_pages(
    url: str,
    page_model: type[P],
    *,
    settings: AppSettings | None = None,
    client: httpx.Client | None = None,
    continuation_token: str | None = None,
) -> Iterator[P]:
    """Recorre una colección por nextLink; cierra el cliente si lo creó."""

    settings = settings or AppSettings()
    owns_client = client is None
    http = client or build_client(settings)
    try:
        fetcher = NextLinkFetcher(http, url, page_model, settings=settings)
        yield from PageIterator(fetcher, continuation_token=continuation_token)
    finally:
        if owns_client:
            http.close()


def list_items(
    url: str,
    page_model: type[P],
    *,
    settings: AppSettings | None = None,
    client: httpx.Client | None = None,
) -> Iterator[Any]:
    for page in list_pages(url, page_model, settings=settings, client=client):
        yield from _page_items(page)


async def alist_pages(
    url: str,
    page_model: type[P],
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
    continuation_token: str | None = None,
) -> AsyncIterator[P]:
    settings = settings or AppSettings()
    owns_client = client is None
    http = client or build_async_client(settings)
    try:
        fetcher = AsyncNextLinkFetcher(http, url, page_model, settings=settings)
        async for page in AsyncPageIterator(fetcher, continuation_token=continuation_token):
            yield page
    finally:
        if owns_client:
            await http.aclose()


async def alist_items(
    url: str,
    page_model: type[P],
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> AsyncIterator[Any]:
    async for page in alist_pages(url, page_model, settings=settings, client=client):
        for item in _page_items(page):
            yield item
