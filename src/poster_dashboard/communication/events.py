from __future__ import annotations

"""Well-known topics and their payload types."""

import enum
from dataclasses import dataclass
from typing import ClassVar, Optional

from ..currency.converter import SupportedCurrency


class AppEvents(str, enum.Enum):
    CURRENCY_CHANGED = "currency_changed"


@dataclass(frozen=True)
class Event:
    topic: ClassVar[str]


@dataclass(frozen=True)
class CurrencyChanged(Event):
    topic: ClassVar[str] = AppEvents.CURRENCY_CHANGED.value

    currency: SupportedCurrency
    previous: Optional[SupportedCurrency] = None
