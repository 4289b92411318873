"""
Configuration module for unifetch endpoints and environment overrides.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """
    Application settings using Pydantic for validation
    and environment variable support.
    """

    # Root of the JSON collection endpoints
    api_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL the fetchers append their endpoint segment to",
    )

    request_timeout: float = Field(
        default=10.0, description="Request timeout in seconds"
    )

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "UNIFETCH_",
        "case_sensitive": False,
    }

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"api_url must start with http:// or https://: {v}")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}: {v}")
        return level

    def endpoint_url(self, base_url: str) -> str:
        """Join an endpoint path segment onto the API root."""
        return f"{self.api_url}/{base_url.strip('/')}"


settings = Settings()
