"""
Core functionality for the YouTube chapter generator.

This package contains modules for resolving video identifiers, acquiring
caption transcripts, and generating timestamps and summaries with Gemini.
"""
