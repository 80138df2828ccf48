# domain/entities/image.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from domain.entities.form_parts import FilePart, FormPart, TextPart, compact, text_field
from domain.entities.input_source import ImageInput


class ImageSize(str, Enum):
    S256X256 = "256x256"
    S512X512 = "512x512"
    S1024X1024 = "1024x1024"
    S1792X1024 = "1792x1024"
    S1024X1792 = "1024x1792"


class ImageResponseFormat(str, Enum):
    URL = "url"
    B64_JSON = "b64_json"


class CreateImageRequest(BaseModel):
    prompt: str
    model: Optional[str] = None
    n: Optional[int] = None
    quality: Optional[str] = None
    response_format: Optional[ImageResponseFormat] = None
    size: Optional[ImageSize] = None
    style: Optional[str] = None
    user: Optional[str] = None


@dataclass(frozen=True)
class CreateImageEditRequest:
    image: ImageInput
    prompt: str
    mask: Optional[ImageInput] = None
    model: Optional[str] = None
    n: Optional[int] = None
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None

    def form_parts(self) -> List[FormPart]:
        return compact(
            FilePart("image", self.image),
            TextPart("prompt", self.prompt),
            FilePart("mask", self.mask) if self.mask is not None else None,
            text_field("model", self.model),
            text_field("n", self.n),
            text_field("size", self.size),
            text_field("response_format", self.response_format),
            text_field("user", self.user),
        )


@dataclass(frozen=True)
class CreateImageVariationRequest:
    image: ImageInput
    model: Optional[str] = None
    n: Optional[int] = None
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None

    def form_parts(self) -> List[FormPart]:
        return compact(
            FilePart("image", self.image),
            text_field("model", self.model),
            text_field("n", self.n),
            text_field("size", self.size),
            text_field("response_format", self.response_format),
            text_field("user", self.user),
        )


class Image(BaseModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class ImagesResponse(BaseModel):
    created: int
    data: List[Image]
