# domain/entities/audio.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from domain.entities.form_parts import FilePart, FormPart, TextPart, compact, repeated_text_field, text_field
from domain.entities.input_source import AudioInput


class AudioResponseFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"


class TimestampGranularity(str, Enum):
    WORD = "word"
    SEGMENT = "segment"


@dataclass(frozen=True)
class CreateTranscriptionRequest:
    file: AudioInput
    model: str
    prompt: Optional[str] = None
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[float] = None
    language: Optional[str] = None
    timestamp_granularities: Optional[List[TimestampGranularity]] = None

    def form_parts(self) -> List[FormPart]:
        return compact(
            FilePart("file", self.file),
            TextPart("model", self.model),
            text_field("prompt", self.prompt),
            text_field("response_format", self.response_format),
            text_field("temperature", self.temperature),
            text_field("language", self.language),
            repeated_text_field("timestamp_granularities[]", self.timestamp_granularities),
        )


@dataclass(frozen=True)
class CreateTranslationRequest:
    file: AudioInput
    model: str
    prompt: Optional[str] = None
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[float] = None

    def form_parts(self) -> List[FormPart]:
        return compact(
            FilePart("file", self.file),
            TextPart("model", self.model),
            text_field("prompt", self.prompt),
            text_field("response_format", self.response_format),
            text_field("temperature", self.temperature),
        )


class CreateTranscriptionResponse(BaseModel):
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    words: Optional[List[Dict[str, Any]]] = None
    segments: Optional[List[Dict[str, Any]]] = None


class CreateTranslationResponse(BaseModel):
    text: str


class CreateSpeechRequest(BaseModel):
    model: str
    input: str
    voice: str
    response_format: Optional[str] = None
    speed: Optional[float] = None
