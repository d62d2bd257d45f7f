from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..communication.event_bus import EventBus, Subscription
from ..communication.events import AppEvents, CurrencyChanged
from ..currency.converter import SupportedCurrency, convert, parse_currency, validate_amount
from ..errors import CurrencyError
from ..utils.formatter import format_currency
from .preference import CurrencyPreference

logger = logging.getLogger(__name__)


class CurrencyDisplay:
    """A dashboard region showing one amount in the preferred currency.

    Regions are mounted independently and listen for `currency_changed`
    themselves. When a conversion fails the region keeps its last value
    (with the currency it was computed in) and reports the error.
    """

    def __init__(
        self,
        name: str,
        amount: Any,
        preference: CurrencyPreference,
        bus: EventBus,
        source_currency: Any = SupportedCurrency.GBP,
    ):
        self.name = name
        self.amount = validate_amount(amount)
        self.source_currency = parse_currency(source_currency)
        self.preference = preference
        self.bus = bus

        self.converted: Optional[float] = None
        self.value_currency: Optional[SupportedCurrency] = None
        self.error: Optional[str] = None
        self._unsubscribe: Optional[Subscription] = None

    # ------------------------------------------------------------------
    def mount(self) -> "CurrencyDisplay":
        if self._unsubscribe is None:
            self._unsubscribe = self.bus.subscribe(AppEvents.CURRENCY_CHANGED.value, self._on_currency_changed)
        self.refresh()
        return self

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def _on_currency_changed(self, event: Any) -> None:
        # typed publish passes CurrencyChanged, a bare emit passes the code
        currency = event.currency if isinstance(event, CurrencyChanged) else event
        self.refresh(currency)

    # ------------------------------------------------------------------
    def refresh(self, currency: Any = None) -> bool:
        """Re-convert for `currency` (default: the current preference)."""
        target = parse_currency(currency) if currency is not None else self.preference.currency
        if target is self.source_currency:
            self.converted, self.value_currency, self.error = self.amount, target, None
            return True

        try:
            conversion = convert(self.amount, self.source_currency, target, self.preference.rate_provider)
        except CurrencyError as exc:
            self.error = str(exc)
            logger.warning("Display %r kept last value after failed %s conversion: %s", self.name, target.value, exc)
            return False

        self.converted, self.value_currency, self.error = conversion.converted, target, None
        return True

    def render(self) -> Dict[str, Any]:
        current = self.preference.currency
        formatted = None
        if self.converted is not None and self.value_currency is not None:
            formatted = format_currency(self.converted, self.value_currency)
        return {
            "name": self.name,
            "amount": self.amount,
            "source_currency": self.source_currency.value,
            "formatted_source": format_currency(self.amount, self.source_currency),
            "currency": self.value_currency.value if self.value_currency else None,
            "converted": self.converted,
            "formatted": formatted,
            "approximate": self.value_currency is not None and self.value_currency is not self.source_currency,
            "stale": self.value_currency is not current or self.error is not None,
            "error": self.error,
        }
