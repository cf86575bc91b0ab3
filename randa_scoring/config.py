"""Application configuration with validation."""
from typing import List, Literal
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "RANDA 70:30 Scoring Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Streamlit host
    FASTAPI_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL of the scoring API, linked from the form UI"
    )

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run with debug enabled."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @model_validator(mode="after")
    def validate_api_prefix(self):
        if not self.API_V1_PREFIX.startswith("/") or self.API_V1_PREFIX.endswith("/"):
            raise ValueError("API_V1_PREFIX must start with '/' and not end with '/'")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
