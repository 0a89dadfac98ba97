"""Tests for shopsavvy/client/transport.py — httpx-backed transport."""

import json

import httpx
import pytest

from shopsavvy.client.api import ShopSavvyDataAPI
from shopsavvy.client.errors import APIError
from shopsavvy.client.models import ClientConfig
from shopsavvy.client.transport import HTTPXTransport, TransportResponse


class TestTransportResponse:

    @pytest.mark.parametrize("status,ok", [(200, True), (204, True), (299, True), (301, False), (404, False)])
    def test_is_success(self, status, ok):
        assert TransportResponse(status, "", b"").is_success is ok


class TestHTTPXTransport:

    async def test_send_returns_status_and_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.content
            return httpx.Response(201, json={"ok": True})

        transport = HTTPXTransport(transport=httpx.MockTransport(handler))
        response = await transport.send(
            "POST",
            "https://api.test/v1/products/schedule",
            {"Authorization": "Bearer ss_test_x"},
            b'{"identifier": "1"}',
        )

        assert response.status_code == 201
        assert response.reason_phrase == "Created"
        assert json.loads(response.content) == {"ok": True}
        assert seen == {
            "method": "POST",
            "url": "https://api.test/v1/products/schedule",
            "auth": "Bearer ss_test_x",
            "body": b'{"identifier": "1"}',
        }
        await transport.close()

    async def test_httpx_timeout_becomes_timeout_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("Timed out", request=request)

        transport = HTTPXTransport(transport=httpx.MockTransport(handler))
        with pytest.raises(TimeoutError):
            await transport.send("GET", "https://api.test/v1/usage", {})

    async def test_connect_error_propagates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        transport = HTTPXTransport(transport=httpx.MockTransport(handler))
        with pytest.raises(httpx.ConnectError):
            await transport.send("GET", "https://api.test/v1/usage", {})

    async def test_client_recreated_after_close(self):
        transport = HTTPXTransport(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        first = await transport._get_client()
        await transport.close()
        assert transport._client is None
        second = await transport._get_client()
        assert second is not first
        await transport.close()

    async def test_close_when_no_client(self):
        """Closing without a client should not raise."""
        await HTTPXTransport().close()


class TestClientOverHTTPX:

    async def test_not_found_round_trip(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/products/details"
            assert request.url.params["identifier"] == "012345678901"
            return httpx.Response(404, json={"error": "Product not found"})

        api = ShopSavvyDataAPI(
            ClientConfig(api_key="ss_test_abc123"),
            transport=HTTPXTransport(transport=httpx.MockTransport(handler)),
        )
        with pytest.raises(APIError) as exc_info:
            await api.get_product_details("012345678901")
        assert str(exc_info.value) == "Product not found"

    async def test_status_text_from_httpx(self):
        api = ShopSavvyDataAPI(
            ClientConfig(api_key="ss_test_abc123"),
            transport=HTTPXTransport(
                transport=httpx.MockTransport(lambda r: httpx.Response(503, json={}))
            ),
        )
        with pytest.raises(APIError, match="HTTP 503: Service Unavailable"):
            await api.get_usage()
