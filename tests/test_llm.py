"""
Tests for the Gemini text model client.
"""

import pytest
from unittest.mock import patch, MagicMock

from ytchapters.config import config
from ytchapters.core.llm import GeminiTextModel, UnavailableTextModel, build_text_model
from ytchapters.models.schemas import GenerationConfig
from ytchapters.utils.error_handling import ModelResponseError


@pytest.fixture
def mock_genai_client():
    """Fixture to mock the google-genai client."""
    with patch('ytchapters.core.llm.genai.Client') as mock_client_class:
        mock_client = mock_client_class.return_value
        mock_response = MagicMock()
        mock_response.text = "[{\"time\": \"0:00\", \"title\": \"Intro\"}]"
        mock_client.models.generate_content.return_value = mock_response
        yield mock_client_class


def test_generate(mock_genai_client):
    model = GeminiTextModel("test_api_key", GenerationConfig(model="gemini-test", temperature=0.0))

    text = model.generate("List the chapters")

    assert text == "[{\"time\": \"0:00\", \"title\": \"Intro\"}]"
    mock_genai_client.assert_called_once_with(api_key="test_api_key")

    kwargs = mock_genai_client.return_value.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["contents"] == "List the chapters"
    assert kwargs["config"].temperature == 0.0


@pytest.mark.parametrize("text", [None, "", "   "])
def test_generate_empty_response(mock_genai_client, text):
    mock_genai_client.return_value.models.generate_content.return_value.text = text

    with pytest.raises(ModelResponseError):
        GeminiTextModel("test_api_key").generate("Summarize")


def test_missing_api_key(mock_genai_client):
    with pytest.raises(ValueError):
        GeminiTextModel(None)

    mock_genai_client.assert_not_called()


def test_build_text_model(mock_genai_client):
    model = build_text_model(config, "gemini-other")

    assert isinstance(model, GeminiTextModel)
    assert model.generation_config.model == "gemini-other"


def test_build_text_model_without_api_key(mock_genai_client, monkeypatch):
    monkeypatch.setattr(config, "GEMINI_API_KEY", None)

    model = build_text_model(config)

    assert isinstance(model, UnavailableTextModel)
    with pytest.raises(ModelResponseError, match="GEMINI_API_KEY"):
        model.generate("Summarize")
    mock_genai_client.assert_not_called()
