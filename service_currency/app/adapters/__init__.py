"""
Adapters package for the currency service.

Contains the HTTP client wrapper for the external currency API. The
adapter encapsulates the base URL, the ``apikey`` header and the mapping
of transport errors to an explicit failure result.
"""

from .currency_client import CurrencyApiClient, UpstreamBody, UpstreamFailure, UpstreamResult

__all__ = [
    "CurrencyApiClient",
    "UpstreamBody",
    "UpstreamFailure",
    "UpstreamResult",
]
