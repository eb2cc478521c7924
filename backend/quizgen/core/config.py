# backend/quizgen/core/config.py

import logging

from pydantic import AliasChoices, Field, field_validator
from pydantic import ValidationError as SchemaValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

logger = logging.getLogger("quiz.config")

DEFAULT_MONGODB_URI = "mongodb://localhost:27017/chat-gpt-app"
DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"


class Settings(BaseSettings):
    """Config from env (OPENAI_API_KEY, MONGODB_URI, PORT, ...). main() loads .env first."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    openai_api_key: str
    mongodb_uri: str = DEFAULT_MONGODB_URI
    port: int = 5000
    openai_model: str = DEFAULT_OPENAI_MODEL
    log_level: str = "INFO"
    # Status returned by /api/quiz-result when the name is missing.
    # 500 keeps the historical behaviour, 400 reports it as a client error.
    missing_name_status: int = Field(
        500,
        validation_alias=AliasChoices("missing_name_status", "QUIZ_RESULT_MISSING_NAME_STATUS"),
    )

    @field_validator("openai_api_key")
    @classmethod
    def _key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("missing_name_status")
    @classmethod
    def _known_status(cls, v: int) -> int:
        if v not in (400, 500):
            raise ValueError("must be 400 or 500")
        return v


def load_settings(**overrides) -> Settings:
    """Build Settings from the environment; keyword overrides win over env values."""
    try:
        settings = Settings(**overrides)
    except SchemaValidationError as e:
        if any(err["loc"][:1] == ("openai_api_key",) for err in e.errors()):
            raise ConfigError("Falta la variable OPENAI_API_KEY") from e
        raise ConfigError(f"Configuración no válida: {e}") from e

    logger.debug(
        f"Settings loaded: port={settings.port} model={settings.openai_model} "
        f"missing_name_status={settings.missing_name_status}"
    )
    return settings
