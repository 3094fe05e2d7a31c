"""Exceptions raised by the trace.moe API clients."""


class TraceMoeError(Exception):
    """Base exception for trace.moe client errors."""


class RequestFailedError(TraceMoeError):
    """Raised when the request could not be sent or no response was received."""


class JsonFailedError(TraceMoeError):
    """Raised when a response body cannot be decoded into the expected model."""


class ResponseEmptyError(TraceMoeError):
    """Raised when a response body was expected but none was returned."""


class APIStatusError(TraceMoeError):
    """Base exception for errors signalled by a known HTTP status code."""

    status_code: int = 0
    default_message: str = "trace.moe API error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ImageEmptyError(APIStatusError):
    """Raised on HTTP 400 when the search image is empty."""

    status_code = 400
    default_message = "Search image is empty"


class InvalidTokenError(APIStatusError):
    """Raised on HTTP 403 when the token is invalid or expired."""

    status_code = 403
    default_message = "API token is invalid"


class ImageTooLargeError(APIStatusError):
    """Raised on HTTP 413 when the search image is larger than 1MB."""

    status_code = 413
    default_message = "Search image is too large"


class RateLimitError(APIStatusError):
    """Raised on HTTP 429 when the limit or quota was reached.

    The server explains which one in the response body, kept in `message`.
    """

    status_code = 429

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InternalServerError(APIStatusError):
    """Raised on HTTP 500 or 503 when something went wrong on the trace.moe side."""

    status_code = 500
    default_message = "trace.moe internal server error"

    def __init__(self, status_code: int = 500):
        super().__init__(f"{self.default_message} (HTTP {status_code})")
        self.status_code = status_code
