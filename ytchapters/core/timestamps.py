"""
Module for generating chapter timestamps from transcripts.

The model is asked for a JSON array of {time, title} objects, but what comes
back is often wrapped in prose or code fences, truncated, or has every time
collapsed to 0:00. The response is run through a list of parse strategies
and repaired before it is returned; if nothing usable is found a default set
of evenly spaced chapters is produced instead.
"""

import json
import math
import re
from typing import Any, Callable, List, Optional

from ytchapters.core.prompts import timestamp_template
from ytchapters.models.schemas import TimestampSegment, TranscriptEntry, total_duration_seconds
from ytchapters.utils.error_handling import DiagnosticLog
from ytchapters.utils.helpers import format_time
from ytchapters.utils.logger import logging


_JSON_ARRAY_PATTERN = re.compile(r"\[\s*\{.*\}\s*\]", re.DOTALL)
_TIME_FIELD_PATTERN = re.compile(r'"time"\s*:\s*"([^"]*)"')
_TITLE_FIELD_PATTERN = re.compile(r'"title"\s*:\s*"([^"]*)"')

DEGENERATE_TIMES = ("0:00", "")

DEFAULT_CHAPTERS = [
    (0.0, "Introduction"),
    (0.2, "First Key Point"),
    (0.4, "Second Key Point"),
    (0.6, "Third Key Point"),
    (0.8, "Fourth Key Point"),
    (0.95, "Conclusion"),
]


def _segments_from_items(items: Any) -> Optional[List[TimestampSegment]]:
    if not isinstance(items, list):
        return None

    segments = []
    for item in items:
        if not isinstance(item, dict):
            continue
        time = item.get("time")
        title = item.get("title")
        segments.append(TimestampSegment(
            time="" if time is None else str(time).strip(),
            title="" if title is None else str(title),
        ))
    return segments or None


def parse_full_json(text: str) -> Optional[List[TimestampSegment]]:
    """Parse the whole response as a JSON array."""
    try:
        return _segments_from_items(json.loads(text))
    except (ValueError, RecursionError):
        return None


def parse_embedded_json(text: str) -> Optional[List[TimestampSegment]]:
    """Parse the first array of objects found inside the response."""
    match = _JSON_ARRAY_PATTERN.search(text)
    if not match:
        return None
    try:
        return _segments_from_items(json.loads(match.group(0)))
    except (ValueError, RecursionError):
        logging.debug("Extracted text still not valid JSON")
        return None


def parse_key_pairs(text: str) -> Optional[List[TimestampSegment]]:
    """Pair up "time" and "title" fields by position when their counts match."""
    times = _TIME_FIELD_PATTERN.findall(text)
    titles = _TITLE_FIELD_PATTERN.findall(text)
    if not times or len(times) != len(titles):
        return None
    return [TimestampSegment(time=time.strip(), title=title) for time, title in zip(times, titles)]


PARSE_STRATEGIES: List[Callable[[str], Optional[List[TimestampSegment]]]] = [
    parse_full_json,
    parse_embedded_json,
    parse_key_pairs,
]


def parse_timestamps(text: str) -> List[TimestampSegment]:
    """
    Run the parse strategies in order and return the first non-empty result.

    Args:
        text: Raw model response

    Returns:
        Parsed segments, or an empty list if no strategy succeeded
    """
    for strategy in PARSE_STRATEGIES:
        segments = strategy(text)
        if segments:
            logging.debug(f"Parsed {len(segments)} timestamps with {strategy.__name__}")
            return segments
    return []


def is_degenerate(segments: List[TimestampSegment]) -> bool:
    """Whether every segment time is 0:00 or empty."""
    return bool(segments) and all(segment.time in DEGENERATE_TIMES for segment in segments)


def redistribute_times(segments: List[TimestampSegment], duration: float) -> List[TimestampSegment]:
    """
    Spread segments evenly across the video, keeping their titles.

    Segment i of n is placed at duration * (i + 1) / (n + 1).
    """
    segment_size = duration / (len(segments) + 1)
    return [
        TimestampSegment(time=format_time(math.floor(segment_size * (i + 1))), title=segment.title)
        for i, segment in enumerate(segments)
    ]


def default_timestamps(duration: float) -> List[TimestampSegment]:
    """Generic chapters at fixed fractions of the video length."""
    return [
        TimestampSegment(time=format_time(duration * fraction), title=title)
        for fraction, title in DEFAULT_CHAPTERS
    ]


def render_transcript(transcript: List[TranscriptEntry]) -> str:
    """Render entries as "m:ss: text" lines."""
    return "\n".join(f"{format_time(entry.offset / 1000)}: {entry.text}" for entry in transcript)


class TimestampGenerator:
    """Class to generate chapter timestamps with a text model."""

    def __init__(self, model):
        """
        Initialize the generator.

        Args:
            model: Any object with a generate(prompt) -> str method
        """
        self.model = model

    def generate(
        self, transcript: List[TranscriptEntry], diagnostics: Optional[DiagnosticLog] = None
    ) -> List[TimestampSegment]:
        """
        Generate timestamps for a transcript. Never raises.

        Args:
            transcript: Transcript entries
            diagnostics: Collects failures swallowed along the way

        Returns:
            List of TimestampSegment
        """
        diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        duration = total_duration_seconds(transcript)

        prompt = timestamp_template.format(transcript=render_transcript(transcript))
        try:
            text = self.model.generate(prompt)
        except Exception as e:
            diagnostics.record("timestamps.model", e)
            return default_timestamps(duration)

        logging.debug(f"Raw timestamp response: {text}")
        segments = parse_timestamps(text)

        if not segments:
            diagnostics.record("timestamps.parse", ValueError("No timestamps found in model response"))
            logging.info("Failed to extract timestamps, creating default set")
            return default_timestamps(duration)

        if is_degenerate(segments):
            logging.info("All timestamps are 0:00, redistributing...")
            segments = redistribute_times(segments, duration)

        return segments
