# infrastructure/response_decoder.py

from __future__ import annotations

import email.utils
import logging
from datetime import datetime, timezone
from typing import Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from domain.entities.api_error import WrappedError
from domain.errors import ApiError, DeserializationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_PREVIEW = 500


def _text(content: Union[bytes, str]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def decode_json(content: Union[bytes, str], model_type: Type[T]) -> T:
    """Deserialize a success body into `model_type` or raise DeserializationError."""
    try:
        return model_type.model_validate_json(content)
    except ValidationError as exc:
        text = _text(content)
        raise DeserializationError(
            f"failed to deserialize {model_type.__name__}: {exc}; content: {text[:_PREVIEW]}",
            content=text,
        ) from exc


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Retry-After as seconds; accepts delta-seconds or an HTTP-date."""
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        dt = email.utils.parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        # "-0000" dates parse naive but are UTC
        dt = dt.replace(tzinfo=timezone.utc)
    return max(0.0, (dt - datetime.now(timezone.utc)).total_seconds())


def api_error_from(
    status_code: int,
    content: Union[bytes, str],
    retry_after: Optional[str] = None,
) -> ApiError:
    """
    Map a non-success body to ApiError.

    Uses the `{"error": {...}}` envelope when it parses; otherwise the raw
    status and body text are carried so nothing is lost.
    """
    delay = parse_retry_after(retry_after)
    try:
        wrapped = WrappedError.model_validate_json(content)
    except ValidationError:
        text = _text(content)
        return ApiError(
            text[:_PREVIEW] or f"HTTP {status_code}",
            status_code=status_code,
            retry_after=delay,
        )
    err = wrapped.error
    return ApiError(
        err.message,
        type=err.type,
        param=err.param,
        code=err.code,
        status_code=status_code,
        retry_after=delay,
    )


def raise_for_status(response: httpx.Response) -> None:
    """Raise ApiError for a non-success response whose body has been read."""
    if response.is_success:
        return
    error = api_error_from(
        response.status_code,
        response.content,
        response.headers.get("Retry-After"),
    )
    logger.debug(
        "api error %s on %s %s: %s",
        response.status_code,
        response.request.method,
        response.request.url.path,
        error.message,
    )
    raise error
