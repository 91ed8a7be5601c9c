"""
Configuration for pytest tests.
"""

import json
import os
import pytest

os.environ.setdefault("GEMINI_API_KEY", "test_api_key")
os.environ.setdefault("ENVIRONMENT", "development")

from ytchapters.models.schemas import Transcript, TranscriptEntry, TranscriptSource


class StubTextModel:
    """Text model returning canned responses, recording every prompt."""

    def __init__(self, timestamps_response=None, summary_response="This is a generated summary."):
        self.timestamps_response = timestamps_response
        self.summary_response = summary_response
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        response = self.timestamps_response if "JSON array" in prompt else self.summary_response
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(scope="session")
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://youtu.be/dQw4w9WgXcQ?si=-InVol0JhtWji-6R"


@pytest.fixture(scope="session")
def test_video_id():
    return "dQw4w9WgXcQ"


@pytest.fixture
def make_transcript():
    """Factory for transcripts of evenly spaced entries."""
    def _make(count=20, duration_ms=5000):
        return [
            TranscriptEntry(text=f"Caption number {i}", offset=i * duration_ms, duration=duration_ms)
            for i in range(count)
        ]
    return _make


@pytest.fixture
def transcript(make_transcript):
    """Twenty 5 second entries: offsets 0 to 95000 ms."""
    return make_transcript(20, 5000)


@pytest.fixture
def model_timestamps():
    return [
        {"time": "0:00", "title": "Why Testing Matters"},
        {"time": "0:25", "title": "Writing the First Fixture"},
        {"time": "0:50", "title": "Mocking External Services"},
        {"time": "1:20", "title": "Running the Suite in CI"},
    ]


@pytest.fixture
def stub_model(model_timestamps):
    return StubTextModel(timestamps_response=json.dumps(model_timestamps))


@pytest.fixture
def primary_transcript(test_video_id, transcript):
    return Transcript(video_id=test_video_id, source=TranscriptSource.PRIMARY, entries=transcript)
