# domain/entities/completion.py

from typing import Dict, List, Optional, Union

from pydantic import BaseModel

from domain.entities.chat import CompletionUsage


class CreateCompletionRequest(BaseModel):
    model: str
    prompt: Union[str, List[str], List[int], List[List[int]]] = ""
    suffix: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    stream: Optional[bool] = None
    logprobs: Optional[int] = None
    echo: Optional[bool] = None
    stop: Optional[Union[str, List[str]]] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    best_of: Optional[int] = None
    logit_bias: Optional[Dict[str, int]] = None
    user: Optional[str] = None
    seed: Optional[int] = None


class CompletionChoice(BaseModel):
    text: str
    index: int
    finish_reason: Optional[str] = None


class CreateCompletionResponse(BaseModel):
    # Also the shape of each streamed completion chunk
    id: str
    object: str
    created: int
    model: str
    choices: List[CompletionChoice]
    usage: Optional[CompletionUsage] = None
