# domain/entities/model.py

from typing import List

from pydantic import BaseModel


class Model(BaseModel):
    id: str
    object: str
    created: int
    owned_by: str


class ListModelResponse(BaseModel):
    object: str
    data: List[Model]


class DeleteModelResponse(BaseModel):
    id: str
    object: str
    deleted: bool
