"""HTTP transport abstraction.

The client only needs one capability: send a request and hand back the
status line and raw body. Anything implementing HTTPTransport can be
injected, which keeps the client testable without a network.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx


@dataclass
class TransportResponse:
    status_code: int
    reason_phrase: str
    content: bytes

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class HTTPTransport(ABC):
    """Base class for transports used by ShopSavvyDataAPI."""

    @abstractmethod
    async def send(
        self, method: str, url: str, headers: dict, content: bytes | None = None
    ) -> TransportResponse:
        """Issue one HTTP request.

        Args:
            method: HTTP verb.
            url: Absolute URL including any query string.
            headers: Complete header mapping to send.
            content: Encoded request body, or None.

        Returns:
            TransportResponse with status and undecoded body.
        """
        ...

    async def close(self) -> None:
        """Cleanup resources. Override if the transport holds connections."""
        pass


class HTTPXTransport(HTTPTransport):
    """Transport backed by a lazily created httpx.AsyncClient."""

    def __init__(
        self, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None
    ):
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    async def send(
        self, method: str, url: str, headers: dict, content: bytes | None = None
    ) -> TransportResponse:
        client = await self._get_client()
        try:
            response = await client.request(method, url, headers=headers, content=content)
        except httpx.TimeoutException as e:
            # Surface as the builtin so the client reports it like its own timer
            raise TimeoutError(str(e)) from e
        return TransportResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            content=response.content,
        )

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
