# domain/entities/file.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel

from domain.entities.form_parts import FilePart, FormPart, TextPart
from domain.entities.input_source import FileInput


@dataclass(frozen=True)
class CreateFileRequest:
    file: FileInput
    purpose: str

    def form_parts(self) -> List[FormPart]:
        return [FilePart("file", self.file), TextPart("purpose", self.purpose)]


class OpenAIFile(BaseModel):
    id: str
    object: str
    bytes: int
    created_at: int
    filename: str
    purpose: str
    status: Optional[str] = None
    status_details: Optional[str] = None


class ListFilesResponse(BaseModel):
    object: str
    data: List[OpenAIFile]


class DeleteFileResponse(BaseModel):
    id: str
    object: str
    deleted: bool
