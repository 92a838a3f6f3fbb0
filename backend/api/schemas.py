from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.generation import GeneratedDocument


class TailorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    cv: Optional[GeneratedDocument] = None
    cover_letter: Optional[GeneratedDocument] = Field(default=None, alias="coverLetter")
    email: Optional[GeneratedDocument] = None


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "OK"
