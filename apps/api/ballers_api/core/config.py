"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT_TOKEN_SECRET = "local_secret"


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    environment: Literal["development", "test", "production"] = "development"
    token_secret: str = DEVELOPMENT_TOKEN_SECRET
    token_ttl_days: int = 30
    activation_token_ttl_hours: int = 24
    reset_password_token_ttl_hours: int = 1
    default_page_limit: int = 10
    host: str = "http://localhost:3000"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="BALLERS_", extra="ignore")

    @model_validator(mode="after")
    def _require_secret_in_production(self) -> "Settings":
        if self.environment == "production" and self.token_secret == DEVELOPMENT_TOKEN_SECRET:
            raise ValueError("BALLERS_TOKEN_SECRET must be set in production")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
