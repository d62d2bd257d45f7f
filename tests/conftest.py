import os

# The app builds its provider at import time; keep tests offline
os.environ["RATES_PROVIDER"] = "static"
os.environ["RATES_CACHE_TTL"] = "0"
os.environ["DEFAULT_CURRENCY"] = "GBP"

import pytest

from poster_dashboard.communication.event_bus import EventBus
from poster_dashboard.currency.base import RateProvider, StaticRateProvider
from poster_dashboard.dashboard import CurrencyPreference
from poster_dashboard.errors import RateServiceUnavailable


class SpyProvider(RateProvider):
    """Static rates that record every lookup and can be switched off."""

    def __init__(self):
        self.inner = StaticRateProvider()
        self.calls = []
        self.fail = False

    def get_rates(self):
        self.calls.append("table")
        if self.fail:
            raise RateServiceUnavailable("rates offline")
        return self.inner.get_rates()

    def get_rate(self, source, target):
        self.calls.append((source.value, target.value))
        if self.fail:
            raise RateServiceUnavailable("rates offline")
        return self.inner.get_rate(source, target)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def provider():
    return SpyProvider()


@pytest.fixture
def preference(bus, provider):
    return CurrencyPreference(bus, provider)
