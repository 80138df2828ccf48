# domain/entities/moderation.py

from typing import Dict, List, Optional, Union

from pydantic import BaseModel


class CreateModerationRequest(BaseModel):
    input: Union[str, List[str]]
    model: Optional[str] = None


class ContentModerationResult(BaseModel):
    flagged: bool
    categories: Dict[str, bool]
    category_scores: Dict[str, float]


class CreateModerationResponse(BaseModel):
    id: str
    model: str
    results: List[ContentModerationResult]
