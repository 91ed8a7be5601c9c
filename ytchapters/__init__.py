"""
YouTube Chapter & Summary Generator.

Fetches the caption transcript of a YouTube video and asks a Gemini model
for topic timestamps and a prose summary, degrading gracefully whenever the
captions or the model misbehave.
"""

from ytchapters.config import config

__version__ = config.APP_VERSION
