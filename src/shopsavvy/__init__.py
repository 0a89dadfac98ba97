"""Python SDK for the ShopSavvy Data API.

Product lookup, current offers, price history, monitoring schedules
and usage reporting.
"""

from shopsavvy.client.api import USER_AGENT, ShopSavvyDataAPI
from shopsavvy.client.errors import (
    APIError,
    APITimeoutError,
    ConfigurationError,
    ShopSavvyError,
)
from shopsavvy.client.factory import close_client, create_client, get_client
from shopsavvy.client.models import (
    APIResponse,
    BatchRemovalResult,
    BatchScheduleResult,
    ClientConfig,
    Offer,
    OfferWithHistory,
    PriceHistoryEntry,
    ProductDetails,
    RemovalResult,
    ScheduledProduct,
    ScheduleResult,
    UsageInfo,
)
from shopsavvy.client.transport import HTTPTransport, HTTPXTransport, TransportResponse
from shopsavvy.logging.audit import setup_logging
from shopsavvy.version import VERSION

__all__ = [
    "APIError",
    "APIResponse",
    "APITimeoutError",
    "BatchRemovalResult",
    "BatchScheduleResult",
    "ClientConfig",
    "ConfigurationError",
    "HTTPTransport",
    "HTTPXTransport",
    "Offer",
    "OfferWithHistory",
    "PriceHistoryEntry",
    "ProductDetails",
    "RemovalResult",
    "ScheduleResult",
    "ScheduledProduct",
    "ShopSavvyDataAPI",
    "ShopSavvyError",
    "TransportResponse",
    "USER_AGENT",
    "UsageInfo",
    "VERSION",
    "close_client",
    "create_client",
    "get_client",
    "setup_logging",
]
