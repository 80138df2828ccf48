# application/services/model_service.py

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.model import DeleteModelResponse, ListModelResponse, Model


class Models:
    """Lists and describes the models available through the API."""

    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def list(self) -> ListModelResponse:
        return await self.client.get("/models", ListModelResponse)

    async def retrieve(self, model: str) -> Model:
        return await self.client.get(f"/models/{model}", Model)

    async def delete(self, model: str) -> DeleteModelResponse:
        """Deletes a fine-tuned model owned by the caller's organization."""
        return await self.client.delete(f"/models/{model}", DeleteModelResponse)
