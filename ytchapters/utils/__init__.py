"""
Shared utilities: logging, time formatting and failure diagnostics.
"""
