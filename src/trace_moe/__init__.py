"""Client library for the trace.moe reverse image search API."""

from .async_client import AsyncClient
from .client import Client
from .config import TraceMoeSettings, get_settings
from .exceptions import (
    APIStatusError,
    ImageEmptyError,
    ImageTooLargeError,
    InternalServerError,
    InvalidTokenError,
    JsonFailedError,
    RateLimitError,
    RequestFailedError,
    ResponseEmptyError,
    TraceMoeError,
)
from .models import Doc, Limit, Me, Quota, SearchRequest, SearchResponse, UserLimit, UserQuota

__all__ = [
    "AsyncClient",
    "Client",
    "TraceMoeSettings",
    "get_settings",
    "Doc",
    "Limit",
    "Me",
    "Quota",
    "SearchRequest",
    "SearchResponse",
    "UserLimit",
    "UserQuota",
    "TraceMoeError",
    "RequestFailedError",
    "JsonFailedError",
    "ResponseEmptyError",
    "APIStatusError",
    "ImageEmptyError",
    "InvalidTokenError",
    "ImageTooLargeError",
    "RateLimitError",
    "InternalServerError",
]
