"""Mock transport helpers for the trace.moe client tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

FIXTURES_DIR = Path(__file__).parent / "fixtures"
TEST_BASE_URI = "http://trace.test/api"


def load_fixture(name: str) -> bytes:
    """Read a response body fixture as raw bytes."""
    return (FIXTURES_DIR / name).read_bytes()


def make_response(status_code: int, content: bytes = b"") -> MagicMock:
    """Create a mock `requests.Response` with the given status and body."""
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode("utf-8")
    return response


def make_async_response(status: int, content: bytes = b"") -> AsyncMock:
    """Create a mock aiohttp response with the given status and body."""
    response = AsyncMock()
    response.status = status
    response.read = AsyncMock(return_value=content)
    return response


def async_cm(response: AsyncMock) -> AsyncMock:
    """Wrap a response so it can be used with ``async with``."""
    cm = AsyncMock()
    cm.__aenter__ = AsyncMock(return_value=response)
    cm.__aexit__ = AsyncMock(return_value=None)
    return cm
