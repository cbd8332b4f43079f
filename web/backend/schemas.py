from pydantic import BaseModel
from typing import Optional


class StationResponse(BaseModel):
    id: str
    name: str
    url: str
    description: Optional[str] = None
    bitrate: Optional[str] = None


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    message: str
    errors: Optional[list[FieldErrorResponse]] = None
