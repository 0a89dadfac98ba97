"""API key validation and request header construction.

Keys are checked once when a client is built; requests never
re-validate them.
"""

import re

from shopsavvy.client.errors import ConfigurationError

API_KEY_PATTERN = re.compile(r"ss_(live|test)_[A-Za-z0-9]+")


def validate_api_key(api_key: str | None) -> str:
    """Return the key unchanged, or raise ConfigurationError."""
    if not api_key or not isinstance(api_key, str):
        raise ConfigurationError("API key is required. Get one at https://shopsavvy.com/data")

    if not API_KEY_PATTERN.fullmatch(api_key):
        raise ConfigurationError(
            "Invalid API key format. API keys should start with ss_live_ or ss_test_"
        )

    return api_key


def build_headers(api_key: str, user_agent: str, extra: dict[str, str] | None = None) -> dict:
    """Standard request headers; caller-supplied `extra` entries win."""
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "User-Agent": user_agent,
    }
    if extra:
        headers.update(extra)
    return headers
