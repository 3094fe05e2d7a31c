"""
Shared test fixtures for the trace.moe client tests.

Transport is replaced by mock sessions injected into the clients, so no test
touches the network.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.helpers import async_cm, load_fixture, make_async_response, make_response
from trace_moe.config import get_settings


@pytest.fixture
def search_body() -> bytes:
    return load_fixture("hataraku_saibou_07.response.json")


@pytest.fixture
def me_body() -> bytes:
    return load_fixture("me.response.json")


@pytest.fixture
def image_bytes() -> bytes:
    # JPEG SOI/APP0 header followed by every byte value
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(range(256))


@pytest.fixture
def mock_session() -> MagicMock:
    """A mock `requests.Session` answering every request with HTTP 200 and no body."""
    session = MagicMock()
    session.request.return_value = make_response(200)
    return session


@pytest.fixture
def mock_async_session() -> MagicMock:
    """A mock aiohttp session answering every request with HTTP 200 and no body."""
    session = MagicMock()
    session.request = MagicMock(return_value=async_cm(make_async_response(200)))
    session.close = AsyncMock()
    return session


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Reset the cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
