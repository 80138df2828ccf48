# domain/contracts/i_openai_client.py
# -----------------------------------------------------------------------------
# This interface defines the dispatch contract the API groups (chat, audio,
# images, files, ...) are written against. Keeping the surface small allows
# multiple implementations (httpx, test doubles) to be swapped in without
# touching call sites.
# -----------------------------------------------------------------------------

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from domain.entities.form_parts import MultipartRequest

T = TypeVar("T", bound=BaseModel)

JsonBody = Union[BaseModel, Mapping[str, Any]]


class IOpenAIClient(ABC):
    """
    Generic contract for calling the API.

    Design notes
    ------------
    - Every method takes an endpoint path (`/chat/completions`); the backend
      configuration decides the final URL, query and auth headers.
    - Non-streaming calls return the parsed response model (or raw bytes for
      binary endpoints). Streaming calls return an async iterator of typed
      chunks that sends nothing until it is first iterated.
    - Failures are raised as `domain.errors.OpenAIError` subclasses.
    """

    @abstractmethod
    async def get(self, path: str, response_type: Type[T]) -> T:
        pass

    @abstractmethod
    async def get_with_query(
        self, path: str, query: Union[BaseModel, Mapping[str, Any]], response_type: Type[T]
    ) -> T:
        pass

    @abstractmethod
    async def get_raw(self, path: str) -> bytes:
        pass

    @abstractmethod
    async def delete(self, path: str, response_type: Type[T]) -> T:
        pass

    @abstractmethod
    async def post(self, path: str, body: JsonBody, response_type: Type[T]) -> T:
        pass

    @abstractmethod
    async def post_raw(self, path: str, body: JsonBody) -> bytes:
        pass

    @abstractmethod
    async def post_form(self, path: str, form: MultipartRequest, response_type: Type[T]) -> T:
        pass

    @abstractmethod
    def post_stream(self, path: str, body: JsonBody, chunk_type: Type[T]) -> AsyncIterator[T]:
        """
        Stream a JSON request as server-sent events.

        Returns
        -------
        An async iterator of `chunk_type` values in wire order. A mid-stream
        failure is raised from the iterator and ends it.
        """
        pass

    @abstractmethod
    def post_form_stream(
        self, path: str, form: MultipartRequest, chunk_type: Type[T]
    ) -> AsyncIterator[T]:
        pass
