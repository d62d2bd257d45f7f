from __future__ import annotations

import logging
from typing import Any

from ..communication.event_bus import EventBus
from ..communication.events import CurrencyChanged
from ..currency.base import RateProvider
from ..currency.converter import Conversion, SupportedCurrency, convert, parse_currency
from ..utils.formatter import format_currency

logger = logging.getLogger(__name__)


class CurrencyPreference:
    """The user's display currency.

    Changing it publishes `CurrencyChanged` so every mounted region can
    re-convert its own figures without a shared parent refresh.
    """

    def __init__(
        self,
        bus: EventBus,
        rate_provider: RateProvider,
        currency: SupportedCurrency = SupportedCurrency.GBP,
    ):
        self.bus = bus
        self.rate_provider = rate_provider
        self._currency = parse_currency(currency)
        self.version = 0

    @property
    def currency(self) -> SupportedCurrency:
        return self._currency

    def set_currency(self, value: Any) -> bool:
        """Switch the display currency; returns False when nothing changed.

        The new currency is committed before `CurrencyChanged` is published,
        so a handler exception leaves the switch in place and propagates.
        """
        new = parse_currency(value)
        if new is self._currency:
            return False

        previous = self._currency
        self._currency = new
        self.version += 1
        logger.info("Display currency %s -> %s", previous.value, new.value)
        self.bus.publish(CurrencyChanged(currency=new, previous=previous))
        return True

    def convert(self, amount: Any, source: Any = SupportedCurrency.GBP) -> Conversion:
        return convert(amount, source, self._currency, self.rate_provider)

    def format(self, amount: float) -> str:
        return format_currency(amount, self._currency)

    def to_dict(self):
        return {
            "currency": self._currency.value,
            "symbol": self._currency.symbol,
            "version": self.version,
        }
