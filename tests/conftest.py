"""Shared fixtures for the ShopSavvy client test suite."""

import json
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlsplit

import pytest

from shopsavvy.client.api import ShopSavvyDataAPI
from shopsavvy.client.models import ClientConfig
from shopsavvy.client.transport import HTTPTransport, TransportResponse
from shopsavvy.config.settings import get_settings

TEST_API_KEY = "ss_test_abc123"


def make_response(status_code: int = 200, body=None, reason_phrase: str = "OK") -> TransportResponse:
    """Build a TransportResponse with a JSON-encoded body (or raw bytes)."""
    if isinstance(body, bytes):
        content = body
    else:
        content = json.dumps(body if body is not None else {}).encode("utf-8")
    return TransportResponse(status_code=status_code, reason_phrase=reason_phrase, content=content)


def sent_request(transport: AsyncMock) -> dict:
    """Decode the last call made on a fake transport."""
    method, url, headers, content = transport.send.call_args.args
    parts = urlsplit(url)
    return {
        "method": method,
        "url": url,
        "path": parts.path,
        "query": parse_qs(parts.query, keep_blank_values=True),
        "headers": headers,
        "body": json.loads(content) if content is not None else None,
    }


@pytest.fixture
def api_key() -> str:
    return TEST_API_KEY


@pytest.fixture
def fake_transport() -> AsyncMock:
    """Transport that answers every request with an empty success envelope."""
    transport = AsyncMock(spec=HTTPTransport)
    transport.send.return_value = make_response(200, {"success": True, "data": None})
    return transport


@pytest.fixture
def client(api_key, fake_transport) -> ShopSavvyDataAPI:
    return ShopSavvyDataAPI(
        ClientConfig(api_key=api_key, base_url="https://api.test/v1"),
        transport=fake_transport,
    )


@pytest.fixture
def product_payload() -> dict:
    return {
        "product_id": "123",
        "name": "Test Product",
        "brand": "Acme",
        "barcode": "012345678901",
        "identifiers": {"upc": "012345678901", "asin": "B08N5WRWNW"},
    }


@pytest.fixture
def offer_payload() -> dict:
    return {
        "offer_id": "off-1",
        "retailer": "Best Buy",
        "price": 199.99,
        "currency": "USD",
        "availability": "in_stock",
        "condition": "new",
        "url": "https://example.com/p/1",
        "shipping": 4.99,
        "last_updated": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(SHOPSAVVY_API_KEY="ss_test_x", SHOPSAVVY_TIMEOUT_MS=500)
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()
