# backend/quizgen/core/errors.py

from typing import Optional


class ConfigError(RuntimeError):
    """Startup configuration is missing or invalid."""


class QuizError(Exception):
    """Base error carrying a client-safe message and an HTTP status."""

    status_code = 500
    default_message = "Algo salió mal!"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(QuizError):
    """Required input (topic, name) is missing or malformed."""

    status_code = 400
    default_message = "Solicitud no válida."


class UpstreamError(QuizError):
    """The OpenAI API call failed (auth, quota, network, unusable response)."""


class PersistenceError(QuizError):
    """MongoDB is unavailable or the write failed."""
