# application/services/completion_service.py

from typing import AsyncIterator

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.completion import CreateCompletionRequest, CreateCompletionResponse
from domain.errors import InvalidArgumentError


class Completions:
    """Legacy text completions: `/completions`."""

    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def create(self, request: CreateCompletionRequest) -> CreateCompletionResponse:
        if request.stream:
            raise InvalidArgumentError("When stream is true, use Completions.create_stream")
        return await self.client.post("/completions", request, CreateCompletionResponse)

    def create_stream(self, request: CreateCompletionRequest) -> AsyncIterator[CreateCompletionResponse]:
        request = request.model_copy(update={"stream": True})
        return self.client.post_stream("/completions", request, CreateCompletionResponse)
