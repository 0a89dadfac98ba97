"""ShopSavvy Data API client.

Every public method encodes its arguments and hands off to `_request`,
which owns headers, the per-call timeout and error normalization.
"""

import asyncio
import json
from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import urlencode

from shopsavvy.client.auth import build_headers, validate_api_key
from shopsavvy.client.errors import APIError, APITimeoutError
from shopsavvy.client.models import (
    APIResponse,
    BatchRemovalResult,
    BatchScheduleResult,
    ClientConfig,
    Frequency,
    Offer,
    OfferWithHistory,
    OutputFormat,
    ProductDetails,
    RemovalResult,
    ScheduledProduct,
    ScheduleResult,
    UsageInfo,
    record,
    record_list,
    record_list_map,
)
from shopsavvy.client.transport import HTTPTransport, HTTPXTransport
from shopsavvy.logging.audit import (
    RequestTimer,
    generate_request_id,
    get_logger,
    request_id_var,
)
from shopsavvy.version import VERSION

USER_AGENT = f"ShopSavvy-Python-SDK/{VERSION}"


def _with_query(path: str, params: dict[str, Any]) -> str:
    """Append params to path, skipping any whose value is None."""
    present = {key: value for key, value in params.items() if value is not None}
    return f"{path}?{urlencode(present)}"


def _without_none(body: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in body.items() if value is not None}


class ShopSavvyDataAPI:
    """Async client for the ShopSavvy Data API.

    Usage:
        async with ShopSavvyDataAPI(ClientConfig(api_key="ss_live_...")) as api:
            product = await api.get_product_details("012345678901")
            print(product.data.name)
    """

    def __init__(self, config: ClientConfig, transport: HTTPTransport | None = None):
        self._api_key = validate_api_key(config.api_key)
        self._base_url = config.base_url
        self._timeout = config.timeout

        self._owns_transport = transport is None
        self._transport = transport or HTTPXTransport(timeout=self._timeout / 1000)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> int:
        """Per-request timeout in milliseconds."""
        return self._timeout

    async def __aenter__(self) -> "ShopSavvyDataAPI":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()

    async def _request(
        self,
        endpoint: str,
        parse: Callable[[Any], Any] | None = None,
        *,
        method: str = "GET",
        body: dict | None = None,
        headers: dict[str, str] | None = None,
    ) -> APIResponse:
        """Send one request and return the decoded envelope.

        Raises:
            APITimeoutError: no response within the configured timeout.
            APIError: non-2xx status.
        Anything else raised by the transport or the JSON decoder
        propagates unchanged.
        """
        url = f"{self._base_url}{endpoint}"
        request_headers = build_headers(self._api_key, USER_AGENT, headers)
        content = json.dumps(body).encode("utf-8") if body is not None else None

        logger = get_logger()
        token = request_id_var.set(generate_request_id())
        try:
            logger.debug(
                "Sending request",
                extra={"audit_data": {"method": method, "path": endpoint}},
            )

            try:
                with RequestTimer() as timer:
                    async with asyncio.timeout(self._timeout / 1000):
                        response = await self._transport.send(
                            method, url, request_headers, content
                        )
            except TimeoutError as exc:
                logger.warning(
                    "Request timed out",
                    extra={"audit_data": {
                        "method": method,
                        "path": endpoint,
                        "timeout_ms": self._timeout,
                    }},
                )
                raise APITimeoutError(self._timeout) from exc

            if not response.is_success:
                try:
                    error_body = json.loads(response.content)
                except ValueError:
                    error_body = None

                error = error_body.get("error") if isinstance(error_body, dict) else None
                message = (
                    str(error) if error
                    else f"HTTP {response.status_code}: {response.reason_phrase}"
                )
                logger.warning(
                    "API error",
                    extra={"audit_data": {
                        "method": method,
                        "path": endpoint,
                        "status_code": response.status_code,
                        "error": message,
                        "latency_ms": timer.elapsed_ms,
                    }},
                )
                raise APIError(
                    message,
                    status_code=response.status_code,
                    reason_phrase=response.reason_phrase,
                    body=error_body,
                )

            payload = json.loads(response.content)
            envelope = APIResponse.from_dict(payload, parse)
            logger.debug(
                "Request completed",
                extra={"audit_data": {
                    "method": method,
                    "path": endpoint,
                    "status_code": response.status_code,
                    "latency_ms": timer.elapsed_ms,
                    "credits_used": envelope.credits_used,
                    "credits_remaining": envelope.credits_remaining,
                }},
            )
            return envelope
        finally:
            request_id_var.reset(token)

    # --- Product lookup ---

    async def get_product_details(
        self, identifier: str, *, format: OutputFormat | None = None
    ) -> APIResponse[ProductDetails]:
        """Look up product details by identifier.

        Args:
            identifier: Barcode, ASIN, URL, model number or ShopSavvy product ID.
            format: "json" or "csv"; omitted means the server default.
        """
        path = _with_query("/products/details", {"identifier": identifier, "format": format})
        return await self._request(path, record(ProductDetails))

    async def get_product_details_batch(
        self, identifiers: Sequence[str], *, format: OutputFormat | None = None
    ) -> APIResponse[list[ProductDetails]]:
        """Look up details for several products in one request."""
        path = _with_query(
            "/products/details",
            {"identifiers": ",".join(identifiers), "format": format},
        )
        return await self._request(path, record_list(ProductDetails))

    # --- Offers and pricing ---

    async def get_current_offers(
        self,
        identifier: str,
        *,
        retailer: str | None = None,
        format: OutputFormat | None = None,
    ) -> APIResponse[list[Offer]]:
        """Current offers for a product, optionally limited to one retailer."""
        path = _with_query(
            "/products/offers",
            {"identifier": identifier, "retailer": retailer, "format": format},
        )
        return await self._request(path, record_list(Offer))

    async def get_current_offers_batch(
        self,
        identifiers: Sequence[str],
        *,
        retailer: str | None = None,
        format: OutputFormat | None = None,
    ) -> APIResponse[dict[str, list[Offer]]]:
        path = _with_query(
            "/products/offers",
            {"identifiers": ",".join(identifiers), "retailer": retailer, "format": format},
        )
        return await self._request(path, record_list_map(Offer))

    async def get_price_history(
        self,
        identifier: str,
        start_date: str,
        end_date: str,
        *,
        retailer: str | None = None,
        format: OutputFormat | None = None,
    ) -> APIResponse[list[OfferWithHistory]]:
        """Offers with their price history between two dates.

        Dates are YYYY-MM-DD strings and are sent as given; the server
        rejects malformed ones.
        """
        path = _with_query(
            "/products/history",
            {
                "identifier": identifier,
                "start_date": start_date,
                "end_date": end_date,
                "retailer": retailer,
                "format": format,
            },
        )
        return await self._request(path, record_list(OfferWithHistory))

    # --- Monitoring schedule ---

    async def schedule_product_monitoring(
        self, identifier: str, frequency: Frequency, *, retailer: str | None = None
    ) -> APIResponse[ScheduleResult]:
        """Ask the server to refresh a product's offers hourly, daily or weekly."""
        body = _without_none(
            {"identifier": identifier, "frequency": frequency, "retailer": retailer}
        )
        return await self._request(
            "/products/schedule", record(ScheduleResult), method="POST", body=body
        )

    async def schedule_product_monitoring_batch(
        self,
        identifiers: Sequence[str],
        frequency: Frequency,
        *,
        retailer: str | None = None,
    ) -> APIResponse[list[BatchScheduleResult]]:
        body = _without_none(
            {"identifiers": ",".join(identifiers), "frequency": frequency, "retailer": retailer}
        )
        return await self._request(
            "/products/schedule", record_list(BatchScheduleResult), method="POST", body=body
        )

    async def get_scheduled_products(self) -> APIResponse[list[ScheduledProduct]]:
        return await self._request("/products/scheduled", record_list(ScheduledProduct))

    async def remove_product_from_schedule(self, identifier: str) -> APIResponse[RemovalResult]:
        return await self._request(
            "/products/schedule",
            record(RemovalResult),
            method="DELETE",
            body={"identifier": identifier},
        )

    async def remove_products_from_schedule(
        self, identifiers: Sequence[str]
    ) -> APIResponse[list[BatchRemovalResult]]:
        return await self._request(
            "/products/schedule",
            record_list(BatchRemovalResult),
            method="DELETE",
            body={"identifiers": ",".join(identifiers)},
        )

    # --- Account ---

    async def get_usage(self) -> APIResponse[UsageInfo]:
        """Credit usage for the current billing period."""
        return await self._request("/usage", record(UsageInfo))
