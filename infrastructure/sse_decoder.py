# infrastructure/sse_decoder.py
"""Incremental decoding of server-sent-event streams into typed chunks.

Wire format: one JSON object per `data:` line, blank separator lines between
events, and a final `data: [DONE]` sentinel.

`SSELineDecoder` is the pure framing layer (bytes in, complete lines out);
`ChunkStream` drives it from an httpx response and yields one typed chunk per
event. Only the unterminated tail of the input is buffered, so memory stays
bounded by the longest single line however long the stream runs.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import AsyncGenerator, Awaitable, Callable, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from domain.entities.api_error import WrappedError
from domain.errors import ApiError, DeserializationError, OpenAIError, TransportError
from infrastructure.response_decoder import decode_json

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"
EVENT_STREAM = "text/event-stream"


class StreamState(str, Enum):
    AWAITING_LINE = "awaiting_line"
    HAVE_EVENT = "have_event"
    DONE = "done"
    FAILED = "failed"


class SSELineDecoder:
    """Splits a byte stream on line boundaries and extracts `data:` payloads."""

    def __init__(self, prefix: str = DATA_PREFIX) -> None:
        self.prefix = prefix
        self._tail = bytearray()

    @property
    def buffered(self) -> int:
        return len(self._tail)

    def feed(self, data: bytes) -> List[str]:
        """Append bytes; return every line completed by them."""
        self._tail.extend(data)
        lines: List[str] = []
        while True:
            idx = self._tail.find(b"\n")
            if idx < 0:
                break
            raw = bytes(self._tail[:idx])
            del self._tail[: idx + 1]
            lines.append(raw.rstrip(b"\r").decode("utf-8", errors="replace"))
        return lines

    def flush(self) -> List[str]:
        """Return the unterminated last line, if any, at end of input."""
        if not self._tail:
            return []
        raw = bytes(self._tail)
        self._tail.clear()
        return [raw.rstrip(b"\r").decode("utf-8", errors="replace")]

    def payload(self, line: str) -> Optional[str]:
        """Trimmed event payload, or None for separators, comments and other fields."""
        if not line.startswith(self.prefix):
            return None
        return line[len(self.prefix):].strip()


def _in_band_error(payload: str) -> Optional[ApiError]:
    try:
        wrapped = WrappedError.model_validate_json(payload)
    except ValidationError:
        return None
    err = wrapped.error
    return ApiError(err.message, type=err.type, param=err.param, code=err.code)


def decode_chunk(payload: str, chunk_type: Type[T]) -> T:
    """One event payload to a typed chunk; an in-band `{"error": ...}` becomes ApiError."""
    try:
        return decode_json(payload, chunk_type)
    except DeserializationError:
        error = _in_band_error(payload)
        if error is None:
            raise
        raise error from None


Opener = Callable[[], Awaitable[httpx.Response]]


def _not_event_stream(response: httpx.Response, name: str) -> OpenAIError:
    text = response.text
    error = _in_band_error(text)
    if error is not None:
        return error
    content_type = response.headers.get("Content-Type", "")
    return DeserializationError(
        f"{name} returned {content_type or 'no content type'} instead of {EVENT_STREAM}",
        content=text,
    )


class ChunkStream(Generic[T]):
    """
    Lazy, forward-only sequence of typed chunks from one streaming call.

    Nothing is sent until the first chunk is requested. A decode or transport
    failure is raised once from `__anext__`; after that, and after the
    `[DONE]` sentinel, iteration simply stops. The response is owned by an
    async generator, so closing the stream (explicitly, via `async with`, on
    exhaustion, or by dropping it mid-iteration) releases the connection.
    """

    def __init__(self, opener: Opener, chunk_type: Type[T], *, name: str = "stream") -> None:
        self._opener = opener
        self._chunk_type = chunk_type
        self._name = name
        self._events: Optional[AsyncGenerator[T, None]] = None
        self.state = StreamState.AWAITING_LINE
        self.chunks_yielded = 0

    def __aiter__(self) -> ChunkStream[T]:
        return self

    async def __aenter__(self) -> ChunkStream[T]:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._events is not None:
            await self._events.aclose()
        if self.state in (StreamState.AWAITING_LINE, StreamState.HAVE_EVENT):
            self.state = StreamState.DONE

    async def __anext__(self) -> T:
        if self.state in (StreamState.DONE, StreamState.FAILED):
            raise StopAsyncIteration
        if self._events is None:
            self._events = self._decode()
        return await self._events.__anext__()

    async def _decode(self) -> AsyncGenerator[T, None]:
        try:
            response = await self._opener()
        except OpenAIError:
            self.state = StreamState.FAILED
            raise
        logger.debug("%s opened", self._name)

        try:
            content_type = response.headers.get("Content-Type")
            if content_type is not None and EVENT_STREAM not in content_type.lower():
                try:
                    await response.aread()
                except httpx.HTTPError as exc:
                    raise TransportError(f"{self._name} interrupted: {exc}") from exc
                raise _not_event_stream(response, self._name)

            decoder = SSELineDecoder()
            data = response.aiter_bytes()
            while True:
                try:
                    raw = await data.__anext__()
                    lines = decoder.feed(raw)
                except StopAsyncIteration:
                    lines = decoder.flush()
                    raw = None
                except httpx.HTTPError as exc:
                    raise TransportError(f"{self._name} interrupted: {exc}") from exc

                for line in lines:
                    payload = decoder.payload(line)
                    if payload is None:
                        continue
                    if payload == DONE_SENTINEL:
                        self.state = StreamState.DONE
                        return
                    self.state = StreamState.HAVE_EVENT
                    try:
                        chunk = decode_chunk(payload, self._chunk_type)
                    except (DeserializationError, ApiError) as exc:
                        logger.warning(
                            "%s failed after %d chunk(s): %s", self._name, self.chunks_yielded, exc
                        )
                        raise
                    self.state = StreamState.AWAITING_LINE
                    self.chunks_yielded += 1
                    yield chunk

                if raw is None:
                    # Connection closed without a sentinel: a clean end
                    return
        except OpenAIError:
            self.state = StreamState.FAILED
            raise
        finally:
            await response.aclose()
            if self.state in (StreamState.AWAITING_LINE, StreamState.HAVE_EVENT):
                self.state = StreamState.DONE
            logger.debug("%s closed after %d chunk(s)", self._name, self.chunks_yielded)
