# infrastructure/openai_client.py
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel

from common.config import settings
from domain.contracts.i_config import IConfig
from domain.contracts.i_openai_client import IOpenAIClient, JsonBody
from domain.entities.form_parts import MultipartRequest
from domain.errors import ConfigurationError, TransportError
from infrastructure.backoff import BackoffController, ExponentialBackoff
from infrastructure.config import OpenAIConfig
from infrastructure.request_encoder import RequestDescriptor, encode_json, encode_multipart
from infrastructure.response_decoder import decode_json, raise_for_status
from infrastructure.sse_decoder import ChunkStream

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

Builder = Callable[[], Awaitable[RequestDescriptor]]


class OpenAIClient(IOpenAIClient):
    """
    Async client for the OpenAI API and Azure OpenAI deployments.

    One pooled `httpx.AsyncClient` serves every call; it is created lazily
    unless injected, and only a lazily created one is closed by `aclose()`.
    Every call runs through the backoff controller; pass `NoBackoff()` to
    disable retries without changing anything else.
    """

    def __init__(
        self,
        config: Optional[IConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        backoff: Optional[BackoffController] = None,
        timeout: Optional[float] = None,
    ):
        self._config = config or OpenAIConfig.from_settings()
        self._backoff = backoff if backoff is not None else ExponentialBackoff()
        self._timeout = timeout if timeout is not None else settings.http_timeout
        self._injected_client = http_client
        self._client: Optional[httpx.AsyncClient] = http_client

    @property
    def config(self) -> IConfig:
        return self._config

    def _replace(self, **changes: Any) -> "OpenAIClient":
        kwargs = {
            "config": self._config,
            "http_client": self._injected_client,
            "backoff": self._backoff,
            "timeout": self._timeout,
        }
        kwargs.update(changes)
        return OpenAIClient(**kwargs)

    def with_config(self, config: IConfig) -> "OpenAIClient":
        return self._replace(config=config)

    def with_http_client(self, http_client: httpx.AsyncClient) -> "OpenAIClient":
        return self._replace(http_client=http_client)

    def with_backoff(self, backoff: BackoffController) -> "OpenAIClient":
        return self._replace(backoff=backoff)

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._client is not self._injected_client:
            await self._client.aclose()
        self._client = self._injected_client

    async def __aenter__(self) -> "OpenAIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ---------------- Request building ----------------

    def _json(
        self,
        method: str,
        path: str,
        body: Optional[JsonBody] = None,
        *,
        query: Optional[Union[BaseModel, Mapping[str, Any]]] = None,
        stream: bool = False,
    ) -> Builder:
        async def build() -> RequestDescriptor:
            return encode_json(self._config, method, path, body, query=query, stream=stream)

        return build

    def _form(self, path: str, form: MultipartRequest, *, stream: bool = False) -> Builder:
        # Re-run on every attempt so file sources are read at send time
        async def build() -> RequestDescriptor:
            return await encode_multipart(self._config, path, form, stream=stream)

        return build

    # ---------------- Single attempt ----------------

    async def _send(self, build: Builder, *, stream: bool = False) -> httpx.Response:
        """One request/response cycle; non-success statuses raise ApiError."""
        client = self._ensure_client()
        descriptor = await build()
        try:
            request = descriptor.build(client)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"invalid request URL {descriptor.url!r}: {exc}") from exc

        logger.debug("%s %s", request.method, request.url.path)
        try:
            response = await client.send(request, stream=stream)
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method} {request.url.path} failed: {exc}") from exc

        if stream and not response.is_success:
            try:
                await response.aread()
            except httpx.HTTPError as exc:
                raise TransportError(f"{request.method} {request.url.path} failed: {exc}") from exc
            finally:
                await response.aclose()
        raise_for_status(response)
        return response

    async def _execute(self, build: Builder, response_type: Type[T]) -> T:
        async def operation() -> T:
            response = await self._send(build)
            return decode_json(response.content, response_type)

        return await self._backoff.execute(operation)

    async def _execute_raw(self, build: Builder) -> bytes:
        async def operation() -> bytes:
            response = await self._send(build)
            return response.content

        return await self._backoff.execute(operation)

    def _stream(self, build: Builder, chunk_type: Type[T], name: str) -> ChunkStream[T]:
        # Only opening the stream is retried; chunks are never replayed
        async def open_once() -> httpx.Response:
            return await self._send(build, stream=True)

        async def opener() -> httpx.Response:
            return await self._backoff.execute(open_once)

        return ChunkStream(opener, chunk_type, name=name)

    # ---------------- Public dispatch ----------------

    async def get(self, path: str, response_type: Type[T]) -> T:
        return await self._execute(self._json("GET", path), response_type)

    async def get_with_query(
        self, path: str, query: Union[BaseModel, Mapping[str, Any]], response_type: Type[T]
    ) -> T:
        return await self._execute(self._json("GET", path, query=query), response_type)

    async def get_raw(self, path: str) -> bytes:
        return await self._execute_raw(self._json("GET", path))

    async def delete(self, path: str, response_type: Type[T]) -> T:
        return await self._execute(self._json("DELETE", path), response_type)

    async def post(self, path: str, body: JsonBody, response_type: Type[T]) -> T:
        return await self._execute(self._json("POST", path, body), response_type)

    async def post_raw(self, path: str, body: JsonBody) -> bytes:
        return await self._execute_raw(self._json("POST", path, body))

    async def post_form(self, path: str, form: MultipartRequest, response_type: Type[T]) -> T:
        return await self._execute(self._form(path, form), response_type)

    def post_stream(self, path: str, body: JsonBody, chunk_type: Type[T]) -> ChunkStream[T]:
        return self._stream(
            self._json("POST", path, body, stream=True), chunk_type, name=f"POST {path}"
        )

    def post_form_stream(
        self, path: str, form: MultipartRequest, chunk_type: Type[T]
    ) -> ChunkStream[T]:
        return self._stream(self._form(path, form, stream=True), chunk_type, name=f"POST {path}")
