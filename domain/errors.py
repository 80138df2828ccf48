# domain/errors.py
# -----------------------------------------------------------------------------
# One exception family for every failure the client can surface. Callers catch
# `OpenAIError` (or a subclass) and never see raw httpx / pydantic / OS errors;
# those are chained as `__cause__` for diagnostics.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional, Union

__all__ = [
    "OpenAIError",
    "ConfigurationError",
    "FileIOError",
    "TransportError",
    "DeserializationError",
    "ApiError",
    "RetryExhaustedError",
    "InvalidArgumentError",
]


class OpenAIError(RuntimeError):
    """Base exception for every client failure."""

    kind = "error"


class ConfigurationError(OpenAIError):
    """Raised when a required configuration value is missing or invalid."""

    kind = "configuration"


class FileIOError(OpenAIError):
    """Raised when a file-backed input cannot be read."""

    kind = "io"

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class TransportError(OpenAIError):
    """Raised for connection-level failures (connect, read, timeout, protocol)."""

    kind = "transport"


class DeserializationError(OpenAIError):
    """Raised when a response body does not match the expected shape."""

    kind = "deserialization"

    def __init__(self, message: str, *, content: str = "") -> None:
        super().__init__(message)
        self.content = content


class ApiError(OpenAIError):
    """Raised when the server reports an error."""

    kind = "api"

    def __init__(
        self,
        message: str,
        *,
        type: Optional[str] = None,
        param: Optional[Union[str, int]] = None,
        code: Optional[Union[str, int]] = None,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = type
        self.param = param
        self.code = code
        self.status_code = status_code
        self.retry_after = retry_after

    def __str__(self) -> str:
        prefix = f"{self.type}: " if self.type else ""
        status = f" (status {self.status_code})" if self.status_code is not None else ""
        return f"{prefix}{self.message}{status}"


class RetryExhaustedError(OpenAIError):
    """Raised when the retry budget is spent; wraps the last observed error."""

    kind = "retry_exhausted"

    def __init__(self, last_error: BaseException, *, attempts: int) -> None:
        super().__init__(f"retry budget exhausted after {attempts} attempt(s): {last_error}")
        self.last_error = last_error
        self.attempts = attempts


class InvalidArgumentError(OpenAIError):
    """Raised when the caller asks for an unsatisfiable combination."""

    kind = "invalid_argument"
