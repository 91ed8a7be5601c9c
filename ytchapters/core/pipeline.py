"""
End-to-end pipeline: URL to timestamps and summary.
"""

import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ytchapters.core.llm import build_text_model
from ytchapters.core.summarizer import TranscriptSummarizer
from ytchapters.core.timestamps import TimestampGenerator
from ytchapters.core.transcript import TranscriptAcquirer
from ytchapters.core.video_id import extract_video_id
from ytchapters.models.schemas import GenerationResult, TranscriptSource
from ytchapters.utils.error_handling import (
    DiagnosticLog,
    InvalidVideoUrlError,
    TranscriptNotFoundError,
)
from ytchapters.utils.logger import logging


class VideoInsightPipeline:
    """Acquires a transcript and generates timestamps and a summary for it."""

    def __init__(
        self,
        acquirer: TranscriptAcquirer,
        timestamp_generator: TimestampGenerator,
        summarizer: TranscriptSummarizer,
        allow_placeholder: bool = True,
    ):
        self.acquirer = acquirer
        self.timestamp_generator = timestamp_generator
        self.summarizer = summarizer
        self.allow_placeholder = allow_placeholder

    @classmethod
    def from_config(cls, app_config, model=None, model_name: Optional[str] = None) -> "VideoInsightPipeline":
        """
        Build a pipeline from application configuration.

        Args:
            app_config: Config class from ytchapters.config
            model: Text model to use instead of building a Gemini client
            model_name: Gemini model name overriding the configured default

        Returns:
            VideoInsightPipeline instance
        """
        model = model or build_text_model(app_config, model_name)
        return cls(
            acquirer=TranscriptAcquirer(app_config.transcript_config()),
            timestamp_generator=TimestampGenerator(model),
            summarizer=TranscriptSummarizer(model),
            allow_placeholder=app_config.ALLOW_PLACEHOLDER_TRANSCRIPT,
        )

    def run(self, url: str, diagnostics: Optional[DiagnosticLog] = None) -> GenerationResult:
        """
        Process a YouTube URL.

        Args:
            url: YouTube video URL
            diagnostics: Collects failures swallowed along the way

        Returns:
            GenerationResult with timestamps and summary

        Raises:
            InvalidVideoUrlError: If no video ID can be extracted
            TranscriptNotFoundError: If no real transcript exists and placeholders are disabled
        """
        video_id = extract_video_id(url)
        if not video_id:
            raise InvalidVideoUrlError(f"Invalid YouTube URL: {url}")

        diagnostics = diagnostics if diagnostics is not None else DiagnosticLog(uuid.uuid4().hex[:8])
        logging.info(f"Processing video {video_id}")

        transcript = self.acquirer.acquire_transcript(video_id, diagnostics)
        if transcript.source == TranscriptSource.SYNTHETIC and not self.allow_placeholder:
            raise TranscriptNotFoundError(f"No transcript found for video {video_id}")

        # Generators share only the read-only transcript
        with ThreadPoolExecutor(max_workers=2) as executor:
            timestamps_future = executor.submit(
                self.timestamp_generator.generate, transcript.entries, diagnostics
            )
            summary_future = executor.submit(
                self.summarizer.summarize, transcript.entries, diagnostics
            )
            timestamps = timestamps_future.result()
            summary = summary_future.result()

        if diagnostics.records:
            logging.info(
                f"Finished {video_id} with {len(diagnostics)} recovered failures: {', '.join(diagnostics.layers())}"
            )
        else:
            logging.info(f"Finished {video_id} ({transcript.source.value} transcript)")

        return GenerationResult(timestamps=timestamps, summary=summary)
