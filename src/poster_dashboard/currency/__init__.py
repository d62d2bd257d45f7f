from __future__ import annotations

"""Factory helpers for exchange-rate providers."""

import os
from typing import Any

from .base import REFERENCE_RATES, RateProvider, RateTable, StaticRateProvider
from .cache import CachedRateProvider
from .converter import CURRENCY_SYMBOLS, Conversion, SupportedCurrency, convert, parse_currency
from .exchangerate_host_client import ExchangeRateHostClient

__all__ = [
    "get_rate_provider",
    "RateProvider",
    "RateTable",
    "StaticRateProvider",
    "CachedRateProvider",
    "ExchangeRateHostClient",
    "REFERENCE_RATES",
    "CURRENCY_SYMBOLS",
    "Conversion",
    "SupportedCurrency",
    "convert",
    "parse_currency",
]


def get_rate_provider(
    name: str | None = None,
    cache_ttl: float = 0,
    **kwargs: Any,
) -> RateProvider:
    """Return a rate provider for `name`, wrapped in a TTL cache when `cache_ttl` > 0."""

    name = (name or os.getenv("RATES_PROVIDER", "exchangerate_host")).lower()

    if name in {"exchangerate_host", "exchangerate.host"}:
        provider: RateProvider = ExchangeRateHostClient(**kwargs)
    elif name == "static":
        provider = StaticRateProvider(kwargs.get("rates"))
    else:
        raise ValueError(f"Unknown rates provider: {name}")

    if cache_ttl and cache_ttl > 0:
        return CachedRateProvider(provider, ttl=cache_ttl)
    return provider
