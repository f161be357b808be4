"""Base configuration with pydantic-settings.

Services subclass :class:`BaseSettings` and add their own fields:

    from shared.config import BaseSettings, redis_url_field

    class Settings(BaseSettings):
        redis_url: str | None = redis_url_field(required=False)

Values come from the environment first, then ``.env``; names are
case-insensitive and unknown keys are ignored.
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BaseSettings(PydanticBaseSettings):
    """Settings every service has: identity and logging."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = Field(
        default="unknown",
        description="Service name bound to every log event",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="json for log shipping, console for development",
    )
    log_level: str = Field(default="INFO", description="One of LOG_LEVELS")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {LOG_LEVELS}")
        return level

    def logging_options(self, **overrides: Any) -> dict[str, Any]:
        """Keyword arguments for ``shared.logging.setup_logging``."""
        options = {
            "service_name": self.service_name,
            "log_format": self.log_format,
            "log_level": self.log_level,
        }
        options.update(overrides)
        return options


def redis_url_field(required: bool = True):
    """Redis URL field definition."""
    if required:
        return Field(
            ...,
            description="Redis connection URL",
            examples=["redis://redis:6379/0"],
        )
    return Field(
        default=None,
        description="Redis connection URL (required when STORE_BACKEND=redis)",
    )
