"""Asyncio HTTP client for the trace.moe API.

Same operations and error mapping as `trace_moe.client.Client`, sent over an
aiohttp session for callers running on an event loop.
"""

import asyncio
import logging
import os
from pathlib import Path
from types import TracebackType
from typing import Any, Optional, Type

import aiohttp

from trace_moe.config import DEFAULT_BASE_URI, TraceMoeSettings, get_settings
from trace_moe.exceptions import RequestFailedError
from trace_moe.models import AnilistID, Me, SearchRequest, SearchResponse
from trace_moe.responses import check_search_status, decode_body

logger = logging.getLogger(__name__)


class AsyncClient:
    """Async client for the trace.moe API.

    Args:
        base_uri: Defaults to ``"https://trace.moe/api"``.
        token: Access token that registered developers have.
        session: An aiohttp-style session supporting ``session.request(...)``
            as an async context manager. When omitted, an
            `aiohttp.ClientSession` is created lazily on first use and closed by
            `aclose()`.
    """

    def __init__(
        self,
        base_uri: str = DEFAULT_BASE_URI,
        token: Optional[str] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._base_uri = base_uri.rstrip("/")
        self._token = token
        self._owns_session = session is None
        self.session: Optional[aiohttp.ClientSession] = session

    @classmethod
    def with_token(cls, token: str) -> "AsyncClient":
        return cls(token=token)

    @classmethod
    def from_settings(
        cls, settings: Optional[TraceMoeSettings] = None
    ) -> "AsyncClient":
        settings = settings or get_settings()
        return cls(base_uri=settings.base_uri, token=settings.token)

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def token(self) -> Optional[str]:
        return self._token

    def __repr__(self) -> str:
        token = "***" if self._token is not None else None
        return f"{type(self).__name__}(base_uri={self._base_uri!r}, token={token!r})"

    async def search(
        self, image: bytes, filter: Optional[AnilistID] = None
    ) -> SearchResponse:
        """Search for the anime scene an image was taken from.

        See `Client.search` for the status codes and errors raised.
        """
        body = SearchRequest.from_image(image, filter=filter)
        status, content = await self._request(
            "POST", "search", json=body.to_payload()
        )
        check_search_status(status, content)
        result = decode_body(SearchResponse, content)
        logger.debug(
            "trace.moe search returned %d docs (cache_hit=%s)",
            len(result.docs),
            result.cache_hit,
        )
        return result

    async def search_file(
        self, path: str | os.PathLike[str], filter: Optional[AnilistID] = None
    ) -> SearchResponse:
        """Read an image file off the event loop and `search` for it."""
        image = await asyncio.to_thread(Path(path).read_bytes)
        return await self.search(image, filter=filter)

    async def me(self) -> Me:
        """Check the search quota and limit for your account (or IP address)."""
        _, content = await self._request("GET", "me")
        return decode_body(Me, content)

    async def _request(
        self, method: str, path: str, **kwargs: Any
    ) -> tuple[int, bytes]:
        """Send a request and return its status and full body."""
        if self.session is None:
            self.session = aiohttp.ClientSession()

        url = f"{self._base_uri}/{path}"
        params = {"token": self._token} if self._token is not None else None
        logger.debug("trace.moe %s %s", method, url)
        try:
            async with self.session.request(
                method, url, params=params, **kwargs
            ) as response:
                return response.status, await response.read()
        except aiohttp.ClientError as e:
            raise RequestFailedError(f"Request to {url} failed: {e}") from e

    async def aclose(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
