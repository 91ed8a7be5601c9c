"""
Helper utility functions for the YouTube chapter generator application.
"""

import json
import re
from typing import Any, Dict


_TIME_PATTERN = re.compile(r"^\d+(?::\d{1,2}){0,2}$")


def format_time(seconds: float) -> str:
    """
    Format a number of seconds as a timestamp.

    Fractions are truncated. Hours are only shown when non-zero and are not
    padded; minutes and seconds are padded to two digits.

    Args:
        seconds: Time in seconds

    Returns:
        Timestamp string such as "1:15" or "1:01:01"
    """
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_time(timestamp: str) -> int:
    """
    Parse a timestamp produced by format_time back into seconds.

    Accepts "m:ss", "h:mm:ss" and a bare number of seconds.

    Args:
        timestamp: Timestamp string

    Returns:
        Number of seconds

    Raises:
        ValueError: If the string is not a timestamp
    """
    value = (timestamp or "").strip()
    if not _TIME_PATTERN.match(value):
        raise ValueError(f"Invalid timestamp: {timestamp!r}")

    seconds = 0
    for part in value.split(":"):
        seconds = seconds * 60 + int(part)
    return seconds


def save_json(data: Dict[str, Any], filepath: str, pretty: bool = True) -> None:
    """
    Save data to a JSON file.

    Args:
        data: Data to save
        filepath: Path to save the file
        pretty: Whether to format the JSON for readability
    """
    with open(filepath, 'w', encoding='utf-8') as f:
        if pretty:
            json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            json.dump(data, f, ensure_ascii=False)


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
