# application/services/audio_service.py

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.audio import (
    CreateSpeechRequest,
    CreateTranscriptionRequest,
    CreateTranscriptionResponse,
    CreateTranslationRequest,
    CreateTranslationResponse,
)


class Audio:
    """Speech-to-text and text-to-speech: `/audio/*`."""

    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def transcribe(self, request: CreateTranscriptionRequest) -> CreateTranscriptionResponse:
        """
        Transcribes audio into the input language.

        Sent as multipart/form-data: `file` first, then `model` and the optional
        fields that are set. A path-backed file is read when the call is made.
        """
        return await self.client.post_form(
            "/audio/transcriptions", request, CreateTranscriptionResponse
        )

    async def translate(self, request: CreateTranslationRequest) -> CreateTranslationResponse:
        """Translates audio into English."""
        return await self.client.post_form("/audio/translations", request, CreateTranslationResponse)

    async def speech(self, request: CreateSpeechRequest) -> bytes:
        """Generates audio from text; returns the encoded audio bytes."""
        return await self.client.post_raw("/audio/speech", request)
