"""
Currency resource: cache-or-fetch orchestration for ``GET /api/currency``.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TYPE_CHECKING

from shared.config import DEFAULT_CACHE_KEY_PREFIX, DEFAULT_CACHE_TTL_SECONDS
from shared.errors import UpstreamUnavailableError
from shared.logging import get_logger

from service_currency.app.adapters.currency_client import CurrencyApiClient, UpstreamFailure
from service_currency.app.caching.cache_key import normalize
from service_currency.app.caching.response_cache import ResponseCache

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


@dataclass(frozen=True)
class ResourceResponse:
    """Outcome of a currency request: HTTP status, JSON body and where it came from."""

    status_code: int
    body: Any
    source: str


class CurrencyLayerResource:
    """Proxies currency queries to the upstream API behind a response cache.

    Only payloads flagged ``"success": true`` are cached. Upstream-reported
    errors are relayed unchanged so callers see the upstream message, and
    transport failures become a fixed 502 error body.
    """

    def __init__(
        self,
        client: CurrencyApiClient,
        cache: ResponseCache,
        *,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        key_prefix: str = DEFAULT_CACHE_KEY_PREFIX,
        clock: Callable[[], float] = time.time,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.client = client
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix
        self.clock = clock
        self.metrics = metrics
        self.logger = get_logger("currency.resource")

    async def get(self, params: Mapping[str, str]) -> ResourceResponse:
        cid = normalize(params, self.key_prefix)

        cached = await self.cache.get(cid)
        if cached is not None:
            self._count("cache_lookups_total", result="hit")
            return ResourceResponse(status_code=200, body=cached, source="cache")
        self._count("cache_lookups_total", result="miss")

        result = await self.client.fetch(params)
        if isinstance(result, UpstreamFailure):
            self.logger.error("Currency API request failed", cid=cid, error=result.detail)
            self._count("upstream_requests_total", outcome="failure")
            error = UpstreamUnavailableError()
            return ResourceResponse(
                status_code=error.code,
                body=error.to_response().model_dump(),
                source="error",
            )

        if result.success:
            await self.cache.set(cid, result.data, self.clock() + self.ttl_seconds)
            self._count("upstream_requests_total", outcome="success")
            return ResourceResponse(status_code=200, body=result.data, source="upstream")

        self._count("upstream_requests_total", outcome="passthrough")
        return ResourceResponse(status_code=200, body=result.data, source="passthrough")

    def _count(self, metric_name: str, **labels) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, **labels)
