"""
Tests for the timestamp generator module.
"""

import json
import pytest
from unittest.mock import MagicMock

from ytchapters.core.timestamps import (
    PARSE_STRATEGIES,
    TimestampGenerator,
    default_timestamps,
    parse_embedded_json,
    parse_full_json,
    parse_key_pairs,
    parse_timestamps,
    render_transcript,
)
from ytchapters.models.schemas import TranscriptEntry
from ytchapters.utils.error_handling import DiagnosticLog, ModelResponseError
from ytchapters.utils.helpers import format_time, parse_time


@pytest.fixture
def mock_model():
    """Fixture to mock the text model."""
    return MagicMock()


def test_parse_strategies_order():
    assert PARSE_STRATEGIES == [parse_full_json, parse_embedded_json, parse_key_pairs]


def test_parse_full_json(model_timestamps):
    segments = parse_full_json(json.dumps(model_timestamps))

    assert [segment.time for segment in segments] == ["0:00", "0:25", "0:50", "1:20"]
    assert segments[1].title == "Writing the First Fixture"


def test_parse_full_json_rejects_non_arrays():
    assert parse_full_json('{"time": "0:00", "title": "Intro"}') is None
    assert parse_full_json("[]") is None
    assert parse_full_json("Here are your timestamps") is None


def test_parse_embedded_json(model_timestamps):
    text = "Sure! Here are the timestamps:\n```json\n" + json.dumps(model_timestamps, indent=2) + "\n```\nEnjoy."

    assert parse_full_json(text) is None
    segments = parse_embedded_json(text)
    assert len(segments) == 4
    assert segments[-1].title == "Running the Suite in CI"


def test_parse_key_pairs_from_truncated_output():
    text = '[{"time": "0:10", "title": "Setting Up"}, {"time": "1:05", "title": "First Results"}, {"time": "2:'
    text_without_bracket = text.replace("[", "")

    assert parse_full_json(text_without_bracket) is None
    assert parse_embedded_json(text_without_bracket) is None

    segments = parse_key_pairs(text_without_bracket.replace('{"time": "2:', ''))
    assert [(segment.time, segment.title) for segment in segments] == [
        ("0:10", "Setting Up"),
        ("1:05", "First Results"),
    ]


def test_parse_key_pairs_requires_matching_counts():
    assert parse_key_pairs('"time": "0:10", "title": "A", "time": "0:20"') is None
    assert parse_key_pairs("nothing here") is None


def test_parse_timestamps_skips_non_object_items():
    segments = parse_timestamps('[{"time": "0:30", "title": "Real"}, "noise", 42]')
    assert [(segment.time, segment.title) for segment in segments] == [("0:30", "Real")]


def test_parse_timestamps_truncates_long_titles():
    segments = parse_timestamps(json.dumps([{"time": "0:30", "title": "x" * 80}]))
    assert len(segments[0].title) < 60


def test_render_transcript():
    transcript = [
        TranscriptEntry(text="a", offset=0, duration=1000),
        TranscriptEntry(text="b", offset=75000, duration=1000),
        TranscriptEntry(text="c", offset=3661000, duration=1000),
    ]
    assert render_transcript(transcript) == "0:00: a\n1:15: b\n1:01:01: c"


def test_generate_returns_model_timestamps(mock_model, model_timestamps, transcript):
    mock_model.generate.return_value = json.dumps(model_timestamps)

    generator = TimestampGenerator(mock_model)
    segments = generator.generate(transcript)

    assert [segment.model_dump() for segment in segments] == model_timestamps

    prompt = mock_model.generate.call_args[0][0]
    assert "1:35: Caption number 19" in prompt
    assert "5-10 meaningful segments" in prompt


def test_generate_redistributes_zero_times(mock_model, transcript):
    """All-zero times are spread across the video, keeping the titles."""
    titles = ["Opening", "Setup", "Main Demo", "Wrap Up"]
    mock_model.generate.return_value = json.dumps([{"time": "0:00", "title": t} for t in titles])

    segments = TimestampGenerator(mock_model).generate(transcript)

    assert [segment.time for segment in segments] == ["0:19", "0:38", "0:57", "1:16"]
    assert [segment.title for segment in segments] == titles

    seconds = [parse_time(segment.time) for segment in segments]
    assert seconds == sorted(set(seconds))
    assert "0:00" not in [segment.time for segment in segments]


def test_generate_redistributes_empty_times(mock_model, transcript):
    mock_model.generate.return_value = '[{"time": "", "title": "One"}, {"time": "0:00", "title": "Two"}]'

    segments = TimestampGenerator(mock_model).generate(transcript)

    assert [segment.time for segment in segments] == [format_time(95 / 3), format_time(95 * 2 / 3)]


def test_generate_keeps_partially_zero_times(mock_model, transcript):
    mock_model.generate.return_value = '[{"time": "0:00", "title": "One"}, {"time": "0:45", "title": "Two"}]'

    segments = TimestampGenerator(mock_model).generate(transcript)

    assert [segment.time for segment in segments] == ["0:00", "0:45"]


def test_generate_default_on_unparsable_response(mock_model, transcript):
    """Unparsable output produces six chapters at fixed fractions of the video."""
    mock_model.generate.return_value = "I'm sorry, I can't help with that."
    diagnostics = DiagnosticLog()

    segments = TimestampGenerator(mock_model).generate(transcript, diagnostics)

    assert len(segments) == 6
    assert [segment.time for segment in segments] == [
        format_time(95 * fraction) for fraction in (0, 0.2, 0.4, 0.6, 0.8, 0.95)
    ]
    assert segments[0].time == "0:00"
    assert segments[2].time == "0:38"
    assert segments[0].title == "Introduction"
    assert segments[-1].title == "Conclusion"
    assert diagnostics.layers() == ["timestamps.parse"]


def test_generate_default_on_model_failure(mock_model, transcript):
    mock_model.generate.side_effect = ModelResponseError("quota exceeded")
    diagnostics = DiagnosticLog()

    segments = TimestampGenerator(mock_model).generate(transcript, diagnostics)

    assert segments == default_timestamps(95)
    assert diagnostics.layers() == ["timestamps.model"]
    assert diagnostics.records[0].cause == "quota exceeded"


def test_parse_strategies_survive_deep_nesting():
    deeply_nested = "[" * 100000
    embedded = '[{"time": "0:00", "title": ' + "[" * 100000 + "}]"

    assert parse_full_json(deeply_nested) is None
    assert parse_embedded_json(embedded) is None
    assert parse_timestamps(deeply_nested) == []


def test_generate_default_on_deeply_nested_response(mock_model, transcript):
    """Nesting too deep for the JSON decoder still ends in the default chapters."""
    mock_model.generate.return_value = "[" * 100000
    diagnostics = DiagnosticLog()

    segments = TimestampGenerator(mock_model).generate(transcript, diagnostics)

    assert segments == default_timestamps(95)
    assert diagnostics.layers() == ["timestamps.parse"]


def test_generate_handles_empty_transcript(mock_model):
    mock_model.generate.return_value = "no json"

    segments = TimestampGenerator(mock_model).generate([])

    assert len(segments) == 6
    assert all(segment.time == "0:00" for segment in segments)


def test_default_timestamps_titles():
    titles = [segment.title for segment in default_timestamps(600)]
    assert titles == [
        "Introduction",
        "First Key Point",
        "Second Key Point",
        "Third Key Point",
        "Fourth Key Point",
        "Conclusion",
    ]
    assert default_timestamps(600)[-1].time == "9:30"
