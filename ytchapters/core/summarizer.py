"""
Module for summarizing transcripts using a text model.
"""

import math
from typing import List, Optional

from ytchapters.core.prompts import summary_template
from ytchapters.models.schemas import TranscriptEntry
from ytchapters.utils.error_handling import DiagnosticLog
from ytchapters.utils.logger import logging


def fallback_summary(transcript: List[TranscriptEntry]) -> str:
    """
    Build a summary from the transcript itself when the model is unavailable.

    Reports the approximate length and word count and quotes the opening and
    closing captions. Short transcripts are quoted in full.

    Args:
        transcript: Transcript entries

    Returns:
        Summary text
    """
    transcript_text = " ".join(entry.text for entry in transcript)
    word_count = len(transcript_text.split())
    length_minutes = math.floor(transcript[-1].offset / 60000) if transcript else 0

    opening = " ".join(entry.text for entry in transcript[:3])
    closing = " ".join(entry.text for entry in transcript[-3:])

    return (
        f"This video is approximately {length_minutes} minutes long and contains "
        f"{word_count} words of transcript.\n\n"
        f"The transcript begins with: \"{opening}...\"\n\n"
        f"And concludes with: \"...{closing}\"\n\n"
        "Unable to generate a complete AI summary. Please try again later or check "
        "the timestamps for key moments in the video."
    )


class TranscriptSummarizer:
    """Class to handle transcript summarization operations."""

    def __init__(self, model):
        """
        Initialize the summarizer.

        Args:
            model: Any object with a generate(prompt) -> str method
        """
        self.model = model

    def summarize(self, transcript: List[TranscriptEntry], diagnostics: Optional[DiagnosticLog] = None) -> str:
        """
        Summarize a transcript. Never raises.

        Args:
            transcript: Transcript entries
            diagnostics: Collects failures swallowed along the way

        Returns:
            Summary text
        """
        diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        transcript_text = " ".join(entry.text for entry in transcript)

        try:
            summary = self.model.generate(summary_template.format(transcript=transcript_text)).strip()
            if not summary:
                raise ValueError("Empty summary returned by model")
            return summary
        except Exception as e:
            diagnostics.record("summary.model", e)
            logging.info("Falling back to transcript-based summary")
            return fallback_summary(transcript)
