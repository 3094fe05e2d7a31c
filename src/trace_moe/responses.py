"""Status-code mapping and body decoding shared by the sync and async clients."""

import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from trace_moe.exceptions import (
    APIStatusError,
    ImageEmptyError,
    ImageTooLargeError,
    InternalServerError,
    InvalidTokenError,
    JsonFailedError,
    RateLimitError,
    ResponseEmptyError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SEARCH_STATUS_ERRORS: dict[int, type[APIStatusError]] = {
    400: ImageEmptyError,
    403: InvalidTokenError,
    413: ImageTooLargeError,
}


def check_search_status(status_code: int, body: bytes) -> None:
    """Raise the error a search response status maps to.

    Statuses without a mapping fall through so the body can be decoded.

    Args:
        status_code: HTTP status of the search response.
        body: Raw response body; only read for HTTP 429.

    Raises:
        ImageEmptyError: HTTP 400.
        InvalidTokenError: HTTP 403.
        ImageTooLargeError: HTTP 413.
        RateLimitError: HTTP 429, with the body text as message.
        ResponseEmptyError: HTTP 429 without a body.
        InternalServerError: HTTP 500 or 503.
    """
    error_class = SEARCH_STATUS_ERRORS.get(status_code)
    if error_class is not None:
        logger.warning("trace.moe search returned HTTP %s", status_code)
        raise error_class()

    if status_code == 429:
        if not body:
            raise ResponseEmptyError("Rate limit response has no body")
        message = body.decode("utf-8", errors="replace")
        logger.warning("trace.moe rate limit reached: %s", message)
        raise RateLimitError(message)

    if status_code in (500, 503):
        logger.warning("trace.moe search returned HTTP %s", status_code)
        raise InternalServerError(status_code)


def decode_body(model: type[ModelT], body: bytes) -> ModelT:
    """Decode a JSON response body into ``model``.

    Raises:
        JsonFailedError: If the body is not valid JSON or does not match the model.
    """
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise JsonFailedError(
            f"Failed to decode {model.__name__} from response: {e}"
        ) from e
