"""
Unit tests for the currency service application.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from service_currency.app.adapters.currency_client import UpstreamBody, UpstreamFailure
from service_currency.app.caching.response_cache import MemoryCacheStore
from service_currency.app.main import CurrencyLayerService, create_app
from shared.config import get_config


SUCCESS_BODY = {"success": True, "source": "USD", "quotes": {"USDEUR": 0.92, "USDGBP": 0.79}}


@pytest.fixture
def config():
    return get_config(
        "currency",
        8000,
        cache_backend="memory",
        api_url="http://currencylayer.test/currency_data/live",
        api_key="test-key",
    )


@pytest.fixture
def client(config):
    app = create_app(config)
    return TestClient(app)


@pytest.fixture
def service(client):
    return client.app.state.currency_service


class TestCurrencyLayerService:
    """Test cases for CurrencyLayerService."""

    def test_wiring_from_config(self, service):
        """Test that configuration reaches the adapter and cache."""
        assert service.api_client.api_url == "http://currencylayer.test/currency_data/live"
        assert service.api_client.api_key == "test-key"
        assert isinstance(service.cache.store, MemoryCacheStore)
        assert service.resource.ttl_seconds == 86400
        assert service.resource.key_prefix == "route:/api/currency:"

    def test_currency_success_then_cached(self, client, service):
        """Test a fresh response followed by a cache hit for a reordered query."""
        service.api_client.fetch = AsyncMock(return_value=UpstreamBody(data=SUCCESS_BODY))

        first = client.get("/api/currency?source=USD&currencies=GBP,EUR")
        second = client.get("/api/currency?currencies=EUR,GBP&source=USD")

        assert first.status_code == 200
        assert first.json() == SUCCESS_BODY
        assert second.status_code == 200
        assert second.json() == SUCCESS_BODY
        service.api_client.fetch.assert_awaited_once_with({"source": "USD", "currencies": "GBP,EUR"})

    def test_currency_logical_failure_passthrough(self, client, service):
        """Test that upstream-reported errors are relayed with status 200."""
        body = {"success": False, "error": {"code": 101, "info": "invalid key"}}
        service.api_client.fetch = AsyncMock(return_value=UpstreamBody(data=body))

        first = client.get("/api/currency?source=USD")
        second = client.get("/api/currency?source=USD")

        assert first.status_code == 200
        assert first.json() == body
        assert second.json() == body
        assert service.api_client.fetch.await_count == 2

    def test_currency_transport_failure(self, client, service):
        """Test the fixed 502 body when the currency API is unreachable."""
        service.api_client.fetch = AsyncMock(return_value=UpstreamFailure(detail="ConnectError"))

        response = client.get("/api/currency?source=USD")

        assert response.status_code == 502
        assert response.json() == {"error": {"message": "Currency API is not available", "code": 502}}
        assert len(service.cache.store) == 0

    def test_request_id_echoed(self, client, service):
        """Test that the correlation id is returned to the caller."""
        service.api_client.fetch = AsyncMock(return_value=UpstreamBody(data=SUCCESS_BODY))

        response = client.get("/api/currency", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_health_endpoint(self, client):
        """Test health endpoint with a reachable cache."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "currency"
        assert data["status"] == "ok"
        assert data["dependencies"] == {"cache": "ok"}

    def test_health_reports_cache_failure(self, client, service):
        """Test that an unreachable cache store marks the service unhealthy."""
        service.cache.store.ping = AsyncMock(side_effect=ConnectionError("redis down"))

        response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "error"
        assert data["dependencies"] == {"cache": "error"}

    def test_metrics_endpoint(self, client, service):
        """Test Prometheus exposition of proxy counters."""
        service.api_client.fetch = AsyncMock(return_value=UpstreamBody(data=SUCCESS_BODY))
        client.get("/api/currency?source=USD")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert 'cache_lookups_total{result="miss"} 1.0' in response.text
        assert 'upstream_requests_total{outcome="success"} 1.0' in response.text

    def test_unexpected_error_uses_error_shape(self, config):
        """Test that unhandled exceptions render the standard error body."""
        service = CurrencyLayerService(config)
        service.resource.get = AsyncMock(side_effect=RuntimeError("boom"))
        client = TestClient(service.app, raise_server_exceptions=False)

        response = client.get("/api/currency?source=USD")

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Internal server error", "code": 500}}


class TestServiceConfig:
    """Test cases for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test default cache policy values."""
        monkeypatch.delenv("CURRENCY_CACHE_TTL_SECONDS", raising=False)
        monkeypatch.delenv("CURRENCY_CACHE_KEY_PREFIX", raising=False)
        config = get_config("currency", 8000)

        assert config.cache_ttl_seconds == 86400
        assert config.cache_key_prefix == "route:/api/currency:"

    def test_environment_overrides(self, monkeypatch):
        """Test that CURRENCY_* variables configure the service."""
        monkeypatch.setenv("CURRENCY_API_URL", "http://upstream.test/live")
        monkeypatch.setenv("CURRENCY_API_KEY", "env-key")
        monkeypatch.setenv("CURRENCY_CACHE_BACKEND", "memory")

        config = get_config("currency", 8000)

        assert config.api_url == "http://upstream.test/live"
        assert config.api_key == "env-key"
        assert config.cache_backend == "memory"

    def test_config_is_immutable(self, config):
        """Test that configuration cannot change after load."""
        with pytest.raises(ValidationError):
            config.api_key = "other"
