"""Validate environment variables against type, range, pattern and command checks."""

__version__ = "0.1.0"