"""Blocking HTTP client for the trace.moe API.

This module provides a small client responsible for:
- Building request URLs from the configured base URI.
- Sending the optional access token as the `token` query parameter.
- Mapping error statuses to exceptions and decoding JSON bodies into models.

No retries are performed; every failure is raised to the caller.
"""

import logging
import os
from types import TracebackType
from typing import Any, Optional, Type

import requests

from trace_moe.config import DEFAULT_BASE_URI, TraceMoeSettings, get_settings
from trace_moe.exceptions import RequestFailedError
from trace_moe.models import AnilistID, Me, SearchRequest, SearchResponse
from trace_moe.responses import check_search_status, decode_body

logger = logging.getLogger(__name__)


class Client:
    """A wrapper around `requests.Session` to talk to the trace.moe API.

    Args:
        base_uri: Defaults to ``"https://trace.moe/api"``. Primarily useful for testing.
        token: Access token that registered developers have.
        session: Optional session to send requests with. A session passed in is
            owned by the caller and is not closed by `close()`.
    """

    def __init__(
        self,
        base_uri: str = DEFAULT_BASE_URI,
        token: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_uri = base_uri.rstrip("/")
        self._token = token
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @classmethod
    def with_token(cls, token: str) -> "Client":
        """Create a `Client` with an API token and default settings."""
        return cls(token=token)

    @classmethod
    def from_settings(cls, settings: Optional[TraceMoeSettings] = None) -> "Client":
        """Create a `Client` from `TraceMoeSettings` (environment by default)."""
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

    def search(self, image: bytes, filter: Optional[AnilistID] = None) -> SearchResponse:
        """Search for the anime scene an image was taken from.

        Args:
            image: Raw image bytes. Size is not checked client-side.
            filter: Optional AniList ID to restrict the search to.

        Returns:
            The decoded SearchResponse, docs in the order the server ranked them.

        Raises:
            ImageEmptyError: HTTP 400, the search image is empty.
            InvalidTokenError: HTTP 403, the token is invalid.
            ImageTooLargeError: HTTP 413, the image is >1MB.
            RateLimitError: HTTP 429, requesting too fast.
            InternalServerError: HTTP 500 or 503, something went wrong in backend.
            RequestFailedError: The request could not be completed.
            JsonFailedError: The body could not be decoded.
        """
        body = SearchRequest.from_image(image, filter=filter)
        response = self._request("POST", "search", json=body.to_payload())
        check_search_status(response.status_code, response.content)
        result = decode_body(SearchResponse, response.content)
        logger.debug(
            "trace.moe search returned %d docs (cache_hit=%s)",
            len(result.docs),
            result.cache_hit,
        )
        return result

    def search_file(
        self, path: str | os.PathLike[str], filter: Optional[AnilistID] = None
    ) -> SearchResponse:
        """Read an image file and `search` for it."""
        with open(path, "rb") as f:
            image = f.read()
        return self.search(image, filter=filter)

    def me(self) -> Me:
        """Check the search quota and limit for your account (or IP address).

        Raises:
            RequestFailedError: The request could not be completed.
            JsonFailedError: The body could not be decoded.
        """
        response = self._request("GET", "me")
        return decode_body(Me, response.content)

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self._base_uri}/{path}"
        params = {"token": self._token} if self._token is not None else None
        logger.debug("trace.moe %s %s", method, url)
        try:
            return self._session.request(method, url, params=params, **kwargs)
        except requests.RequestException as e:
            raise RequestFailedError(f"Request to {url} failed: {e}") from e

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
