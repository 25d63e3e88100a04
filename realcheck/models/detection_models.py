from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ImageSubmission(BaseModel):
    imageBase64: Optional[str] = Field(
        default=None,
        description="Data URL of the image, e.g. data:image/jpeg;base64,...",
    )


class Verdict(BaseModel):
    """Shape the model is asked to produce; extra fields pass through."""
    model_config = ConfigDict(extra="allow")

    is_ai: Optional[bool] = None
    confidence: Optional[float] = Field(default=None, ge=0, le=100)
    reason: Optional[str] = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    error: str
    details: Optional[str] = None
    model_output: Optional[str] = None
