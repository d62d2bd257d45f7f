from __future__ import annotations

"""Currency conversion facade.

Validates the request, asks a `RateProvider` for the rate and returns the
converted amount together with the effective rate. Lookup failures surface
as `RateServiceUnavailable`; there is no retry and no fallback rate.
"""

import enum
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from ..errors import InvalidConversionInput, RateServiceUnavailable

if TYPE_CHECKING:
    from .base import RateProvider

logger = logging.getLogger(__name__)


class SupportedCurrency(str, enum.Enum):
    GBP = "GBP"
    EUR = "EUR"
    USD = "USD"
    DKK = "DKK"

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS[self]


CURRENCY_SYMBOLS = {
    SupportedCurrency.GBP: "£",
    SupportedCurrency.EUR: "€",
    SupportedCurrency.USD: "$",
    SupportedCurrency.DKK: "kr",
}


def parse_currency(value: Any) -> SupportedCurrency:
    if isinstance(value, SupportedCurrency):
        return value
    if isinstance(value, str):
        try:
            return SupportedCurrency(value.strip().upper())
        except ValueError:
            pass
    raise InvalidConversionInput(f"Unsupported currency: {value!r}")


def validate_amount(amount: Any) -> float:
    # bool is an int subclass but never a meaningful amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidConversionInput(f"Invalid amount: {amount!r}")
    if not math.isfinite(amount):
        raise InvalidConversionInput(f"Amount must be finite, got {amount!r}")
    return float(amount)


@dataclass(frozen=True)
class Conversion:
    amount: float
    source: SupportedCurrency
    target: SupportedCurrency
    converted: float
    rate: Optional[float]

    def to_dict(self):
        return {
            "original": {"amount": self.amount, "currency": self.source.value},
            "converted": {"amount": self.converted, "currency": self.target.value},
            "rate": self.rate,
        }


def convert(amount: Any, source: Any, target: Any, provider: "RateProvider") -> Conversion:
    """Convert `amount` from `source` into `target` using `provider`.

    A zero amount converts to zero with an undefined (None) rate. Identical
    currencies convert at 1.0. Neither case touches the provider.
    """
    value = validate_amount(amount)
    src = parse_currency(source)
    dst = parse_currency(target)

    if value == 0:
        return Conversion(value, src, dst, 0.0, None)
    if src is dst:
        return Conversion(value, src, dst, value, 1.0)

    try:
        rate = provider.get_rate(src, dst)
    except RateServiceUnavailable:
        raise
    except Exception as exc:
        logger.error("Rate lookup %s->%s failed: %s", src.value, dst.value, exc)
        raise RateServiceUnavailable(f"Rate lookup {src.value}->{dst.value} failed") from exc

    if isinstance(rate, bool) or not isinstance(rate, (int, float)) or not math.isfinite(rate) or rate <= 0:
        raise RateServiceUnavailable(f"Unusable rate {rate!r} for {src.value}->{dst.value}")

    converted = value * rate
    if not math.isfinite(converted):
        raise InvalidConversionInput(f"Amount {value!r} overflows when converted to {dst.value}")
    return Conversion(value, src, dst, converted, converted / value)
