"""Client settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://api.shopsavvy.com/v1"
DEFAULT_TIMEOUT_MS = 30000


class Settings(BaseSettings):
    # Credentials
    # Format: ss_live_<alphanumeric> or ss_test_<alphanumeric>
    api_key: str = ""

    # Endpoint
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS  # Per-request timeout in milliseconds

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty = stdout only

    model_config = {
        "env_prefix": "SHOPSAVVY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
