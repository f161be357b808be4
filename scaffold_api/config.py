"""Scaffold API configuration.

Optional: STORE_BACKEND (memory | redis), REDIS_URL (required for redis),
generation delay and rate limit tuning, FRONTEND_URL for CORS.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator

from shared.config import BaseSettings, redis_url_field


class Settings(BaseSettings):
    """Scaffold API settings."""

    service_name: str = Field(default="scaffold-api")

    # Storage
    store_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="Project store backend",
    )
    redis_url: str | None = redis_url_field(required=False)

    # HTTP
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=3001, ge=1, le=65535)
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Origin allowed by CORS",
    )

    # Simulated generation time
    generation_delay_enabled: bool = True
    generation_base_delay: float = Field(default=5.0, ge=0)
    generation_delay_per_point: float = Field(default=0.5, ge=0)
    generation_max_delay: float = Field(default=15.0, ge=0)
    generation_progress_steps: int = Field(default=5, ge=1)

    # Rate limiting, per client address
    rate_limit_enabled: bool = True
    rate_limit_requests: int = Field(default=100, ge=1)
    rate_limit_window_seconds: int = Field(default=15 * 60, ge=1)
    generate_rate_limit_requests: int = Field(default=10, ge=1)
    generate_rate_limit_window_seconds: int = Field(default=60 * 60, ge=1)

    @model_validator(mode="after")
    def require_redis_url(self) -> "Settings":
        if self.store_backend == "redis" and not self.redis_url:
            raise ValueError("REDIS_URL is required when STORE_BACKEND=redis")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Validates env vars on first call.
    Raises ValidationError if STORE_BACKEND=redis without REDIS_URL.
    """
    return Settings()
