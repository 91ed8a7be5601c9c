"""
Helpers for YouTube video identifiers and deep links.
"""

import re
from typing import Optional
from urllib.parse import urlparse

from ytchapters.utils.helpers import parse_time


# Marker followed by an 11-character identifier that must not run on into
# further identifier characters.
_VIDEO_ID_PATTERN = re.compile(
    r"(?:youtu\.be/|/v/|/e/|/u/\w+/|/embed/|[?&#]v=)([0-9A-Za-z_-]{11})(?![0-9A-Za-z_-])"
)

YOUTUBE_HOSTS = ("youtube.com", "youtu.be", "youtube-nocookie.com")

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL.

    Supports youtu.be short links, /v/, /e/, /u/<name>/ and /embed/ paths and
    the v= query parameter.

    Args:
        url: YouTube URL

    Returns:
        The 11-character video ID, or None if the URL is not recognised
    """
    if not isinstance(url, str):
        return None

    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"

    try:
        host = (urlparse(candidate).hostname or "").lower()
    except ValueError:
        return None
    if not any(host == domain or host.endswith(f".{domain}") for domain in YOUTUBE_HOSTS):
        return None

    match = _VIDEO_ID_PATTERN.search(candidate)
    if match:
        return match.group(1)

    return None


def build_timestamp_url(video_id: str, timestamp: str) -> str:
    """
    Build a watch URL that starts playback at the given timestamp.

    Args:
        video_id: YouTube video ID
        timestamp: Timestamp in m:ss or h:mm:ss format

    Returns:
        Watch URL with a t=<seconds>s parameter
    """
    seconds = parse_time(timestamp)
    return f"{WATCH_URL.format(video_id=video_id)}&t={seconds}s"
