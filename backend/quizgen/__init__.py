"""Quiz question generation and results API."""

__version__ = "0.1.0"
