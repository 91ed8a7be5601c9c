from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from ytchapters.models.schemas import TimestampSegment


class GenerateRequest(BaseModel):
    """Model for requesting timestamps and a summary."""
    video_url: Optional[str] = Field(default=None, alias="videoUrl")

    model_config = ConfigDict(populate_by_name=True)


class GenerateResponse(BaseModel):
    """Model for generation responses."""
    timestamps: List[TimestampSegment]
    summary: str


class ErrorResponse(BaseModel):
    """Model for error responses."""
    error: str
