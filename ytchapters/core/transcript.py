"""
Module for acquiring caption transcripts for YouTube videos.

Captions are requested from YouTube first and, failing that, from a public
transcript lookup service. When both are unavailable a fixed placeholder
transcript is returned so the generators always have input to work with.
"""

import html
import re
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FetchTimeoutError
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import requests
from youtube_transcript_api import YouTubeTranscriptApi

from ytchapters.models.schemas import (
    Transcript,
    TranscriptConfig,
    TranscriptEntry,
    TranscriptSource,
)
from ytchapters.utils.error_handling import DiagnosticLog
from ytchapters.utils.logger import logging


DEFAULT_ENTRY_DURATION_MS = 3000

PLACEHOLDER_SENTENCES = [
    "Welcome to this video.",
    "Today we are going to explore an interesting topic.",
    "First, let's look at the background and why it matters.",
    "Next, we will walk through the main ideas step by step.",
    "Here is an example that shows how this works in practice.",
    "There are a few common mistakes worth keeping in mind.",
    "Let's recap the most important points we covered.",
    "Thanks for watching, and see you in the next video.",
]

_MARKUP_PATTERN = re.compile(r"<[^>]+>")
_ERROR_PATTERN = re.compile(r"<error\b[^>]*>(.*?)</error>", re.DOTALL | re.IGNORECASE)
_TEXT_ELEMENT_PATTERN = re.compile(r"<text\b([^>]*)>(.*?)</text>", re.DOTALL | re.IGNORECASE)
_ATTRIBUTE_PATTERN = re.compile(r"""(\w+)\s*=\s*["']([^"']*)["']""")


def normalize_entries(raw_entries: Iterable[Dict[str, Any]], seconds: bool = False) -> List[TranscriptEntry]:
    """
    Convert raw caption dictionaries into TranscriptEntry objects.

    Missing text becomes an empty string, a missing offset becomes
    index * 3000 ms and a missing or non-positive duration becomes 3000 ms.

    Args:
        raw_entries: Dictionaries with optional text, offset/start and duration keys
        seconds: Whether offsets and durations are given in seconds

    Returns:
        List of TranscriptEntry sorted by offset
    """
    scale = 1000 if seconds else 1
    entries = []

    for index, raw in enumerate(raw_entries):
        text = raw.get("text")
        offset = raw.get("offset", raw.get("start"))
        duration = raw.get("duration")

        offset_ms = int(round(float(offset) * scale)) if offset is not None else index * DEFAULT_ENTRY_DURATION_MS
        duration_ms = int(round(float(duration) * scale)) if duration is not None else DEFAULT_ENTRY_DURATION_MS

        entries.append(TranscriptEntry(
            text="" if text is None else str(text),
            offset=max(offset_ms, 0),
            duration=duration_ms if duration_ms > 0 else DEFAULT_ENTRY_DURATION_MS,
        ))

    return sorted(entries, key=lambda entry: entry.offset)


def parse_line_transcript(body: str, line_duration_ms: int = DEFAULT_ENTRY_DURATION_MS) -> List[TranscriptEntry]:
    """
    Parse a lookup service response into transcript entries.

    Caption markup (<text start=".." dur="..">) is read element by element
    with its own timings. Anything else is treated as plain text, one caption
    per line with a fixed duration and running offsets.

    Args:
        body: Raw response text
        line_duration_ms: Duration assigned to every line

    Returns:
        List of TranscriptEntry

    Raises:
        ValueError: If the service reported an error instead of a transcript
    """
    error = _ERROR_PATTERN.search(body)
    if error:
        message = " ".join(html.unescape(_MARKUP_PATTERN.sub(" ", error.group(1))).split())
        raise ValueError(f"Fallback service returned an error: {message or 'unknown error'}")

    elements = _TEXT_ELEMENT_PATTERN.findall(body)
    if elements:
        raw_entries = []
        for attributes, content in elements:
            attrs = dict(_ATTRIBUTE_PATTERN.findall(attributes))
            raw_entries.append({
                "text": " ".join(html.unescape(_MARKUP_PATTERN.sub(" ", html.unescape(content))).split()),
                "start": attrs.get("start"),
                "duration": attrs.get("dur"),
            })
        return [entry for entry in normalize_entries(raw_entries, seconds=True) if entry.text]

    entries = []
    for line in body.splitlines():
        text = html.unescape(_MARKUP_PATTERN.sub(" ", line))
        text = " ".join(text.split())
        if not text:
            continue
        entries.append(TranscriptEntry(
            text=text,
            offset=len(entries) * line_duration_ms,
            duration=line_duration_ms,
        ))
    return entries


def build_placeholder_transcript(interval_ms: int = 15000) -> List[TranscriptEntry]:
    """Build the fixed placeholder transcript used when every channel fails."""
    return [
        TranscriptEntry(text=sentence, offset=index * interval_ms, duration=interval_ms)
        for index, sentence in enumerate(PLACEHOLDER_SENTENCES)
    ]


class TranscriptAcquirer:
    """Class to handle transcript acquisition with layered fallbacks."""

    def __init__(self, transcript_config: Optional[TranscriptConfig] = None):
        """
        Initialize the acquirer.

        Args:
            transcript_config: Timeout, fallback service and ordering settings
        """
        self.transcript_config = transcript_config or TranscriptConfig()
        # Shared and bounded: fetches abandoned after a timeout cannot pile up
        self._executor = ThreadPoolExecutor(
            max_workers=self.transcript_config.max_fetch_workers,
            thread_name_prefix="caption-fetch",
        )

    def fetch_primary(self, video_id: str) -> List[TranscriptEntry]:
        """
        Fetch captions from YouTube, giving up after the configured timeout.

        Args:
            video_id: YouTube video ID

        Returns:
            List of TranscriptEntry

        Raises:
            TimeoutError: If YouTube did not answer in time
            ValueError: If YouTube returned no captions
        """
        timeout = self.transcript_config.timeout_seconds
        future = self._executor.submit(self._fetch_captions, video_id)

        try:
            raw_entries = future.result(timeout=timeout)
        except FetchTimeoutError:
            # Queued fetches are cancelled, a running one is abandoned
            future.cancel()
            raise TimeoutError(f"Caption fetch timed out after {timeout} seconds")

        entries = normalize_entries(raw_entries, seconds=True)
        if not entries:
            raise ValueError(f"No captions returned for {video_id}")
        return entries

    def _fetch_captions(self, video_id: str) -> List[Dict[str, Any]]:
        ytt_api = YouTubeTranscriptApi()
        transcript = ytt_api.fetch(video_id, languages=self.transcript_config.languages)
        return transcript.to_raw_data()

    def fetch_secondary(self, video_id: str) -> List[TranscriptEntry]:
        """
        Fetch a transcript from the public lookup service.

        Args:
            video_id: YouTube video ID

        Returns:
            List of TranscriptEntry

        Raises:
            requests.RequestException: On transport errors or error statuses
            ValueError: If the response is an error or contains no transcript lines
        """
        url = self.transcript_config.fallback_url_template.format(video_id=video_id)
        logging.debug(f"Requesting fallback transcript: {url}")

        response = requests.get(url, timeout=self.transcript_config.timeout_seconds)
        response.raise_for_status()

        entries = parse_line_transcript(response.text, self.transcript_config.fallback_line_duration_ms)
        if not entries:
            raise ValueError(f"Fallback service returned no transcript lines for {video_id}")
        return entries

    def channels(self) -> List[Tuple[TranscriptSource, Callable[[str], List[TranscriptEntry]]]]:
        """Network channels in the order they are attempted."""
        primary = (TranscriptSource.PRIMARY, self.fetch_primary)
        secondary = (TranscriptSource.SECONDARY, self.fetch_secondary)

        if self.transcript_config.prefer_fallback_first:
            return [secondary, primary]
        return [primary, secondary]

    def acquire_transcript(self, video_id: str, diagnostics: Optional[DiagnosticLog] = None) -> Transcript:
        """
        Acquire a transcript, falling back channel by channel.

        Never raises: if every channel fails the placeholder transcript is
        returned with source SYNTHETIC.

        Args:
            video_id: YouTube video ID
            diagnostics: Collects failures swallowed along the way

        Returns:
            Transcript with non-empty entries
        """
        diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

        for source, fetch in self.channels():
            try:
                entries = fetch(video_id)
            except Exception as e:
                diagnostics.record(f"transcript.{source.value}", e)
                continue

            logging.info(f"Fetched {len(entries)} transcript entries for {video_id} ({source.value})")
            return Transcript(video_id=video_id, source=source, entries=entries)

        logging.warning(f"No transcript available for {video_id}, using placeholder transcript")
        return Transcript(
            video_id=video_id,
            source=TranscriptSource.SYNTHETIC,
            entries=build_placeholder_transcript(self.transcript_config.placeholder_interval_ms),
        )

    def acquire(self, video_id: str, diagnostics: Optional[DiagnosticLog] = None) -> List[TranscriptEntry]:
        """
        Acquire transcript entries for a video. Never raises.

        Args:
            video_id: YouTube video ID
            diagnostics: Collects failures swallowed along the way

        Returns:
            Non-empty list of TranscriptEntry
        """
        return self.acquire_transcript(video_id, diagnostics).entries
