# domain/entities/fine_tuning.py

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class Hyperparameters(BaseModel):
    # Each knob is either "auto" or an explicit value
    n_epochs: Optional[Union[str, int]] = None
    batch_size: Optional[Union[str, int]] = None
    learning_rate_multiplier: Optional[Union[str, float]] = None


class CreateFineTuningJobRequest(BaseModel):
    model: str
    training_file: str
    hyperparameters: Optional[Hyperparameters] = None
    suffix: Optional[str] = None
    validation_file: Optional[str] = None
    seed: Optional[int] = None


class FineTuningJob(BaseModel):
    id: str
    object: str
    created_at: int
    model: str
    status: str
    training_file: str
    organization_id: Optional[str] = None
    fine_tuned_model: Optional[str] = None
    finished_at: Optional[int] = None
    hyperparameters: Optional[Hyperparameters] = None
    result_files: List[str] = []
    trained_tokens: Optional[int] = None
    validation_file: Optional[str] = None
    error: Optional[Dict[str, Any]] = None


class ListPaginatedFineTuningJobsResponse(BaseModel):
    object: str
    data: List[FineTuningJob]
    has_more: bool = False


class FineTuningJobEvent(BaseModel):
    id: str
    object: str
    created_at: int
    level: str
    message: str


class ListFineTuningJobEventsResponse(BaseModel):
    object: str
    data: List[FineTuningJobEvent]
    has_more: bool = False
