# application/services/embedding_service.py

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.embedding import CreateEmbeddingRequest, CreateEmbeddingResponse


class Embeddings:
    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def create(self, request: CreateEmbeddingRequest) -> CreateEmbeddingResponse:
        return await self.client.post("/embeddings", request, CreateEmbeddingResponse)
