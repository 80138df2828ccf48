# application/services/chat_service.py

from typing import AsyncIterator

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.chat import (
    CreateChatCompletionRequest,
    CreateChatCompletionResponse,
    CreateChatCompletionStreamResponse,
)
from domain.errors import InvalidArgumentError


class Chat:
    """Chat completions: `/chat/completions`."""

    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def create(self, request: CreateChatCompletionRequest) -> CreateChatCompletionResponse:
        """
        Creates a model response for the given chat conversation.

        Raises:
            InvalidArgumentError: If `request.stream` is true; use `create_stream`.
        """
        if request.stream:
            raise InvalidArgumentError("When stream is true, use Chat.create_stream")
        return await self.client.post("/chat/completions", request, CreateChatCompletionResponse)

    def create_stream(
        self, request: CreateChatCompletionRequest
    ) -> AsyncIterator[CreateChatCompletionStreamResponse]:
        """
        Streams partial message deltas as server-sent events.

        `stream` is forced to true. Chunks with empty `choices` (Azure sends
        one first) are passed through; skip them at the call site if unwanted.
        """
        request = request.model_copy(update={"stream": True})
        return self.client.post_stream(
            "/chat/completions", request, CreateChatCompletionStreamResponse
        )
