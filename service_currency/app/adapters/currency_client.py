"""
Currency API client for the currency service.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import httpx

from shared.logging import get_logger


@dataclass(frozen=True)
class UpstreamBody:
    """Decoded body of a response the currency API delivered."""

    data: Any

    @property
    def success(self) -> bool:
        """True only when the payload carries ``"success": true``."""
        return isinstance(self.data, dict) and self.data.get("success") is True


@dataclass(frozen=True)
class UpstreamFailure:
    """The currency API could not be reached or its response was unusable."""

    detail: str


UpstreamResult = Union[UpstreamBody, UpstreamFailure]


class CurrencyApiClient:
    """Client for the external currency exchange rate API.

    Requests forward the caller's query parameters unchanged and authenticate
    with the ``apikey`` header. Transport problems are returned as
    :class:`UpstreamFailure` rather than raised.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.logger = get_logger("currency.api_client")
        self._owns_client = http_client is None
        if http_client is None:
            # Moved or http->https upstream URLs must keep serving rates
            http_client = httpx.AsyncClient(
                timeout=timeout,
                transport=transport,
                follow_redirects=True,
            )
        self._client = http_client

    async def fetch(self, params: Mapping[str, str]) -> UpstreamResult:
        """Fetch rates for ``params`` from the currency API."""
        try:
            response = await self._client.get(
                self.api_url,
                params=dict(params),
                headers={"apikey": self.api_key},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            return UpstreamFailure(detail=f"{type(exc).__name__}: {exc}")
        except ValueError as exc:
            return UpstreamFailure(detail=f"Invalid JSON from currency API: {exc}")

        self.logger.debug("Currency API response received", url=self.api_url, params=dict(params))
        return UpstreamBody(data=data)

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
