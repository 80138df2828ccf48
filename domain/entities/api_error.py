# domain/entities/api_error.py

from typing import Optional, Union

from pydantic import BaseModel


class ApiErrorBody(BaseModel):
    message: str
    type: Optional[str] = None
    # Gateways send integer codes as well as strings
    param: Optional[Union[str, int]] = None
    code: Optional[Union[str, int]] = None


class WrappedError(BaseModel):
    """Error envelope returned on non-success responses: {"error": {...}}."""

    error: ApiErrorBody
