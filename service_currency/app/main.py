"""
Currency API proxy service for the Currency Layer Access service.
"""

from typing import Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig

from service_currency.app.adapters.currency_client import CurrencyApiClient
from service_currency.app.caching.response_cache import ResponseCache, create_cache_store
from service_currency.app.domain.currency_resource import CurrencyLayerResource


class CurrencyLayerService(BaseService):
    """Currency proxy service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None):
        super().__init__("currency", 8000, config=config)

        if not self.config.api_key:
            self.logger.warning("Currency API key is not configured", api_url=self.config.api_url)

        self.api_client = CurrencyApiClient(
            self.config.api_url,
            self.config.api_key,
            timeout=self.config.upstream_timeout_seconds,
        )
        self.cache = ResponseCache(
            create_cache_store(self.config.cache_backend, self.config.redis_url)
        )
        self.resource = CurrencyLayerResource(
            self.api_client,
            self.cache,
            ttl_seconds=self.config.cache_ttl_seconds,
            key_prefix=self.config.cache_key_prefix,
            metrics=self.metrics,
        )

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.api_client.close()
            await self.cache.close()

        self._setup_currency_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.currency_service = self

    def _setup_currency_routes(self):
        """Set up the proxied currency route."""

        @self.app.get("/api/currency")
        async def get_currency(request: Request):
            """Serve currency rates from cache or the upstream currency API."""
            params = dict(request.query_params)
            result = await self.resource.get(params)
            self.logger.debug(
                "Currency request served",
                source=result.source,
                status_code=result.status_code,
            )
            return JSONResponse(status_code=result.status_code, content=result.body)

    async def _check_dependencies(self) -> Dict[str, str]:
        """Report cache store reachability."""
        cache_ok = await self.cache.ping()
        return {"cache": "ok" if cache_ok else "error"}


def create_app(config: Optional[ServiceConfig] = None):
    """Create FastAPI application."""
    service = CurrencyLayerService(config)
    return service.app


if __name__ == "__main__":
    service = CurrencyLayerService()
    service.run()
