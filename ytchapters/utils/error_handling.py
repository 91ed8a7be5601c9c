"""
Centralized error handling for the application.

Most failures in the pipeline are recovered locally: a transcript channel
falls through to the next one and a failed model request is replaced with a
deterministic fallback. Those failures are still recorded here so operators
can see what happened even though callers always get a result.
"""

import traceback
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from ytchapters.utils.logger import logging


class InvalidVideoUrlError(ValueError):
    """Raised when no video identifier can be extracted from a URL."""


class TranscriptNotFoundError(Exception):
    """Raised when no real transcript exists and placeholders are disabled."""


class ModelResponseError(Exception):
    """Raised when the text model returns nothing usable."""


class FailureRecord(BaseModel):
    """A failure that was swallowed by one of the fallback layers."""
    layer: str
    cause: str
    error_type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DiagnosticLog:
    """Per-request collection of swallowed failures."""

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id
        self.records: List[FailureRecord] = []

    def record(self, layer: str, error: BaseException) -> FailureRecord:
        """
        Record a swallowed failure and log it.

        Args:
            layer: Name of the component that recovered from the failure
            error: The exception that was caught

        Returns:
            The stored FailureRecord
        """
        failure = FailureRecord(
            layer=layer,
            cause=str(error) or error.__class__.__name__,
            error_type=error.__class__.__name__,
        )
        self.records.append(failure)

        prefix = f"[{self.request_id}] " if self.request_id else ""
        logging.warning(f"{prefix}{layer} failed ({failure.error_type}): {failure.cause}")
        logging.debug("".join(traceback.format_exception(type(error), error, error.__traceback__)))
        return failure

    def layers(self) -> List[str]:
        return [record.layer for record in self.records]

    def __len__(self) -> int:
        return len(self.records)
