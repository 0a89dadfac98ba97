"""Client construction helpers."""

from shopsavvy.client.api import ShopSavvyDataAPI
from shopsavvy.client.models import ClientConfig
from shopsavvy.client.transport import HTTPTransport
from shopsavvy.config.settings import get_settings

_client: ShopSavvyDataAPI | None = None


def create_client(
    api_key: str,
    base_url: str | None = None,
    timeout: int | None = None,
    transport: HTTPTransport | None = None,
) -> ShopSavvyDataAPI:
    """Build a client from keyword arguments.

    Example:
        api = create_client("ss_live_your_api_key_here")
        product = await api.get_product_details("012345678901")
    """
    config = ClientConfig(api_key=api_key, base_url=base_url, timeout=timeout)
    return ShopSavvyDataAPI(config, transport=transport)


def get_client() -> ShopSavvyDataAPI:
    """Process-wide client configured from SHOPSAVVY_* environment settings."""
    global _client
    if _client is not None:
        return _client

    settings = get_settings()
    _client = create_client(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout_ms,
    )
    return _client


async def close_client() -> None:
    """Close and forget the process-wide client."""
    global _client
    if _client is not None:
        await _client.close()
    _client = None
