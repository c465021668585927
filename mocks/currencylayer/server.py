"""
Mock currencylayer server providing the ``currency_data/live`` endpoint.
"""

import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Header, Query

from shared.logging import get_logger


# Units of each currency per 1 USD
USD_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 151.2,
    "CHF": 0.90,
    "CAD": 1.36,
    "AUD": 1.52,
}


class MockCurrencyLayerServer:
    """Mock currencylayer server implementation."""

    def __init__(self, api_key: str = "test-key", port: int = 8090):
        self.api_key = api_key
        self.port = port
        self.logger = get_logger("mock.currencylayer")
        self.app = FastAPI(title="Mock currencylayer", version="1.0.0")
        self.request_count = 0
        self._setup_routes()

    def _setup_routes(self):
        """Set up mock currencylayer routes."""

        @self.app.get("/currency_data/live")
        async def live(
            source: str = Query("USD"),
            currencies: Optional[str] = Query(None),
            apikey: Optional[str] = Header(None),
        ):
            """Live quotes for ``source`` against ``currencies`` (all when omitted)."""
            self.request_count += 1

            if apikey != self.api_key:
                return self._error(101, "invalid_access_key", "You have not supplied a valid API Access Key.")

            source = source.upper()
            if source not in USD_RATES:
                return self._error(201, "invalid_source_currency", "You have supplied an invalid Source Currency.")

            if currencies:
                requested = [code.strip().upper() for code in currencies.split(",") if code.strip()]
            else:
                requested = sorted(USD_RATES)

            if any(code not in USD_RATES for code in requested):
                return self._error(202, "invalid_currency_codes", "You have provided one or more invalid Currency Codes.")

            quotes = {
                f"{source}{code}": round(USD_RATES[code] / USD_RATES[source], 6)
                for code in requested
            }
            self.logger.info("Mock quotes served", source=source, currencies=requested)
            return {
                "success": True,
                "timestamp": int(time.time()),
                "source": source,
                "quotes": quotes,
            }

    def _error(self, code: int, error_type: str, info: str) -> Dict[str, Any]:
        """currencylayer reports request errors with HTTP 200 and ``success: false``."""
        return {
            "success": False,
            "error": {"code": code, "type": error_type, "info": info},
        }


def create_app():
    """Create mock currencylayer application."""
    server = MockCurrencyLayerServer()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8090)
