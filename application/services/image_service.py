# application/services/image_service.py

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.image import (
    CreateImageEditRequest,
    CreateImageRequest,
    CreateImageVariationRequest,
    ImagesResponse,
)


class Images:
    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def create(self, request: CreateImageRequest) -> ImagesResponse:
        return await self.client.post("/images/generations", request, ImagesResponse)

    async def create_edit(self, request: CreateImageEditRequest) -> ImagesResponse:
        """Edits an image given the original `image`, a `prompt` and an optional `mask`."""
        return await self.client.post_form("/images/edits", request, ImagesResponse)

    async def create_variation(self, request: CreateImageVariationRequest) -> ImagesResponse:
        return await self.client.post_form("/images/variations", request, ImagesResponse)
