"""
Domain helpers for the currency service.
"""

from .currency_resource import CurrencyLayerResource, ResourceResponse

__all__ = ["CurrencyLayerResource", "ResourceResponse"]
