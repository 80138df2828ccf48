# application/services/moderation_service.py

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.moderation import CreateModerationRequest, CreateModerationResponse


class Moderations:
    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def create(self, request: CreateModerationRequest) -> CreateModerationResponse:
        """Classifies whether the input violates the content policy."""
        return await self.client.post("/moderations", request, CreateModerationResponse)
