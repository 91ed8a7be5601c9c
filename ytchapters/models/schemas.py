"""
Data models for the YouTube chapter generator application.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ytchapters.utils.helpers import truncate_text


class TranscriptSource(str, Enum):
    """Channels that can produce a transcript."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SYNTHETIC = "synthetic"


class TranscriptEntry(BaseModel):
    """One caption line. Offsets and durations are in milliseconds."""
    text: str = ""
    offset: int = Field(ge=0)
    duration: int = Field(gt=0)

    model_config = ConfigDict(frozen=True)


class Transcript(BaseModel):
    """Caption entries for a video together with the channel that produced them."""
    video_id: str
    source: TranscriptSource
    entries: List[TranscriptEntry]

    model_config = ConfigDict(frozen=True)


class TimestampSegment(BaseModel):
    """A topic boundary: where it starts and what it is about."""
    time: str
    title: str

    @field_validator('title')
    def limit_title_length(cls, v):
        return truncate_text(v.strip(), max_length=59)


class GenerationResult(BaseModel):
    """Timestamps and summary returned for one video."""
    timestamps: List[TimestampSegment]
    summary: str


class TranscriptConfig(BaseModel):
    """Configuration for transcript acquisition."""
    timeout_seconds: float = 15.0
    fallback_url_template: str = "https://youtubetranscript.com/?server_vid2={video_id}"
    prefer_fallback_first: bool = False
    languages: List[str] = ["en", "en-US"]
    fallback_line_duration_ms: int = 3000
    placeholder_interval_ms: int = 15000
    max_fetch_workers: int = Field(default=4, ge=1)


class GenerationConfig(BaseModel):
    """Configuration for text generation requests."""
    model: str = "gemini-1.5-flash"
    temperature: float = 0.2
    max_output_tokens: Optional[int] = None


def total_duration_seconds(entries: List[TranscriptEntry]) -> float:
    """Video length estimated from the offset of the last caption."""
    if not entries:
        return 0.0
    return entries[-1].offset / 1000
