"""Exceptions raised by the API client.

Transport failures (DNS, connection reset) and malformed JSON are not
wrapped: they reach the caller as the original httpx / json exceptions.
"""


class ShopSavvyError(Exception):
    """Base class for errors raised by this library."""


class ConfigurationError(ShopSavvyError, ValueError):
    """Missing or malformed client configuration."""


class APITimeoutError(ShopSavvyError, TimeoutError):
    """The request did not complete within the configured timeout."""

    def __init__(self, timeout_ms: int):
        super().__init__(f"Request timeout after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class APIError(ShopSavvyError):
    """The API answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        reason_phrase: str = "",
        body: object | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.body = body
