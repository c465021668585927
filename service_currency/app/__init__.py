"""
Currency proxy service package.

The service fronts the external currency exchange rate API:
- Caching: order-insensitive cache keys, 24 hour TTL, success-only writes
- Error mapping: transport failures become a fixed 502 error body

Structure:
- app.main: FastAPI app, routes and wiring.
- app.adapters: HTTP client for the currency API.
- app.caching: Cache key normalization and response cache stores.
- app.domain: Cache-or-fetch request orchestration.
"""
