"""
Cache key normalization for proxied currency requests.

Both ``?source=USD&currencies=GBP,EUR`` and ``?currencies=EUR,GBP&source=USD``
must resolve to the same cache entry, so keys are sorted and so are the
members of every comma-separated value.
"""

from typing import Mapping

from shared.config import DEFAULT_CACHE_KEY_PREFIX


VALUE_SEPARATOR = ","


def normalize_fragment(key: str, value: str) -> str:
    """Build the ``key=<sorted values>:`` fragment for a single parameter."""
    members = sorted(value.split(VALUE_SEPARATOR))
    return f"{key}={VALUE_SEPARATOR.join(members)}:"


def normalize(params: Mapping[str, str], prefix: str = DEFAULT_CACHE_KEY_PREFIX) -> str:
    """Generate an order-insensitive cache key for a query parameter set.

    >>> normalize({"source": "USD", "currencies": "GBP,EUR"})
    'route:/api/currency:currencies=EUR,GBP:source=USD:'
    """
    return prefix + "".join(
        normalize_fragment(key, str(params[key])) for key in sorted(params)
    )
