# application/services/file_service.py

from typing import Optional

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.file import CreateFileRequest, DeleteFileResponse, ListFilesResponse, OpenAIFile


class Files:
    """Uploads and manages files used by fine-tuning and assistants."""

    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def create(self, request: CreateFileRequest) -> OpenAIFile:
        """Uploads a file; the form carries `file` then `purpose`."""
        return await self.client.post_form("/files", request, OpenAIFile)

    async def list(self, purpose: Optional[str] = None) -> ListFilesResponse:
        if purpose is None:
            return await self.client.get("/files", ListFilesResponse)
        return await self.client.get_with_query("/files", {"purpose": purpose}, ListFilesResponse)

    async def retrieve(self, file_id: str) -> OpenAIFile:
        return await self.client.get(f"/files/{file_id}", OpenAIFile)

    async def delete(self, file_id: str) -> DeleteFileResponse:
        return await self.client.delete(f"/files/{file_id}", DeleteFileResponse)

    async def retrieve_content(self, file_id: str) -> bytes:
        return await self.client.get_raw(f"/files/{file_id}/content")
