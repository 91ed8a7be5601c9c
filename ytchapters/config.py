"""
Configuration settings for the YouTube chapter generator application.
"""

import os
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

from ytchapters.models.schemas import GenerationConfig, TranscriptConfig


# Ensure environment variables are loaded
load_dotenv()


def _env_flag(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Read a boolean environment variable, returning default when unset."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Chapter & Summary Generator"
    APP_VERSION = "0.2.0"
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

    # Data directories
    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    DATA_DIR = BASE_DIR / "data"
    SUMMARIES_DIR = DATA_DIR / "summaries"

    # API keys
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

    # Default model
    DEFAULT_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    MODEL_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.2"))

    # Transcript acquisition
    TRANSCRIPT_TIMEOUT_SECONDS = float(os.getenv("TRANSCRIPT_TIMEOUT_SECONDS", "15"))
    TRANSCRIPT_FALLBACK_URL = os.getenv(
        "TRANSCRIPT_FALLBACK_URL",
        "https://youtubetranscript.com/?server_vid2={video_id}",
    )
    TRANSCRIPT_LANGUAGES = [
        lang.strip() for lang in os.getenv("TRANSCRIPT_LANGUAGES", "en,en-US").split(",") if lang.strip()
    ]
    ALLOW_PLACEHOLDER_TRANSCRIPT = _env_flag("ALLOW_PLACEHOLDER_TRANSCRIPT", True)
    TRANSCRIPT_FETCH_WORKERS = int(os.getenv("TRANSCRIPT_FETCH_WORKERS", "4"))

    PORT = int(os.getenv("PORT", "3002"))

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.SUMMARIES_DIR.mkdir(parents=True, exist_ok=True)

        # Validate required environment variables
        if not cls.GEMINI_API_KEY:
            print("WARNING: GEMINI_API_KEY environment variable not set.")
            print("Please set it in the .env file or environment variables.")

    @classmethod
    def prefer_fallback_transcript(cls) -> bool:
        """Whether the lookup service is tried before the captions API."""
        override = _env_flag("PREFER_FALLBACK_TRANSCRIPT")
        if override is not None:
            return override
        return cls.ENVIRONMENT == "production"

    @classmethod
    def transcript_config(cls) -> TranscriptConfig:
        """Build the transcript acquisition settings."""
        return TranscriptConfig(
            timeout_seconds=cls.TRANSCRIPT_TIMEOUT_SECONDS,
            fallback_url_template=cls.TRANSCRIPT_FALLBACK_URL,
            prefer_fallback_first=cls.prefer_fallback_transcript(),
            languages=cls.TRANSCRIPT_LANGUAGES,
            max_fetch_workers=cls.TRANSCRIPT_FETCH_WORKERS,
        )

    @classmethod
    def generation_config(cls, model: Optional[str] = None) -> GenerationConfig:
        """Build the text generation settings."""
        return GenerationConfig(
            model=model or cls.DEFAULT_MODEL,
            temperature=cls.MODEL_TEMPERATURE,
        )


class DevelopmentConfig(Config):
    """Development configuration."""

    ENVIRONMENT = "development"
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class ProductionConfig(Config):
    """Production configuration."""

    ENVIRONMENT = "production"
    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
