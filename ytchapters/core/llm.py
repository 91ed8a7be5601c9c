"""
Gemini text model client shared by the timestamp and summary generators.
"""

from typing import Optional

from google import genai
from google.genai import types

from ytchapters.models.schemas import GenerationConfig
from ytchapters.utils.error_handling import ModelResponseError
from ytchapters.utils.logger import logging


class GeminiTextModel:
    """Single-prompt, single-response wrapper around the Gemini API."""

    def __init__(self, api_key: str, generation_config: Optional[GenerationConfig] = None):
        """
        Initialize the model client.

        Args:
            api_key: Gemini API key
            generation_config: Model name and sampling settings
        """
        if not api_key:
            raise ValueError("Gemini API key is required. Set it in .env file or pass directly.")

        self.generation_config = generation_config or GenerationConfig()
        self.client = genai.Client(api_key=api_key)

    def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the raw response text.

        Args:
            prompt: Natural-language prompt

        Returns:
            Response text

        Raises:
            ModelResponseError: If the model returned no text
        """
        logging.debug(f"Sending {len(prompt)} character prompt to {self.generation_config.model}")

        response = self.client.models.generate_content(
            model=self.generation_config.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=self.generation_config.temperature,
                max_output_tokens=self.generation_config.max_output_tokens,
            ),
        )

        text = response.text
        if not text or not text.strip():
            raise ModelResponseError(f"Empty response from {self.generation_config.model}")

        return text


class UnavailableTextModel:
    """Stand-in used when no API key is configured; every request fails."""

    def __init__(self, reason: str = "GEMINI_API_KEY is not set"):
        self.reason = reason

    def generate(self, prompt: str) -> str:
        raise ModelResponseError(self.reason)


def build_text_model(app_config, model: Optional[str] = None):
    """
    Create the process-wide model client from application configuration.

    Without an API key the generators still run and fall back to their
    default timestamps and summary.

    Args:
        app_config: Config class from ytchapters.config
        model: Optional model name overriding the configured default

    Returns:
        GeminiTextModel, or UnavailableTextModel when no API key is configured
    """
    if not app_config.GEMINI_API_KEY:
        logging.warning("GEMINI_API_KEY is not set, serving fallback timestamps and summaries")
        return UnavailableTextModel()

    return GeminiTextModel(
        api_key=app_config.GEMINI_API_KEY,
        generation_config=app_config.generation_config(model),
    )
