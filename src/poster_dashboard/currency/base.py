from __future__ import annotations

"""Common interface for exchange-rate sources.

A provider returns a full table `{source: {target: rate}}` over the
supported currencies. Implementations raise `RateServiceUnavailable` for any
failure; callers never receive a guessed rate.
"""

from abc import ABC, abstractmethod
from typing import Dict

from ..errors import RateServiceUnavailable
from .converter import SupportedCurrency

RateTable = Dict[SupportedCurrency, Dict[SupportedCurrency, float]]


class RateProvider(ABC):
    """Abstract base class for exchange-rate sources."""

    @abstractmethod
    def get_rates(self) -> RateTable:  # noqa: D401
        """Return the rate table for every supported currency pair."""
        ...

    def get_rate(self, source: SupportedCurrency, target: SupportedCurrency) -> float:
        if source is target:
            return 1.0
        try:
            return self.get_rates()[source][target]
        except KeyError as exc:
            raise RateServiceUnavailable(f"No rate for {source.value}->{target.value}") from exc


class StaticRateProvider(RateProvider):
    """Fixed rate table, selected explicitly for offline development."""

    def __init__(self, rates: RateTable | None = None):
        self.rates = rates or REFERENCE_RATES

    def get_rates(self) -> RateTable:
        return {src: dict(row) for src, row in self.rates.items()}


GBP, EUR, USD, DKK = (
    SupportedCurrency.GBP,
    SupportedCurrency.EUR,
    SupportedCurrency.USD,
    SupportedCurrency.DKK,
)

# Approximate market rates, May 2024
REFERENCE_RATES: RateTable = {
    GBP: {GBP: 1.0, EUR: 1.17, USD: 1.28, DKK: 8.72},
    EUR: {GBP: 0.85, EUR: 1.0, USD: 1.09, DKK: 7.46},
    USD: {GBP: 0.78, EUR: 0.92, USD: 1.0, DKK: 6.84},
    DKK: {GBP: 0.11, EUR: 0.13, USD: 0.15, DKK: 1.0},
}
