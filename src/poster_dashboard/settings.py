from __future__ import annotations

import os
from dataclasses import asdict, dataclass

from .currency.converter import SupportedCurrency, parse_currency


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Settings:
    """Service configuration, read from the environment at start-up."""

    rates_provider: str = "exchangerate_host"
    rates_base_url: str = "https://api.exchangerate.host"
    rates_access_key: str | None = None
    rates_timeout: float = 10.0
    rates_cache_ttl: float = 3600.0  # 0 disables caching
    default_currency: SupportedCurrency = SupportedCurrency.GBP
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        try:
            currency = parse_currency(os.getenv("DEFAULT_CURRENCY", "GBP"))
        except ValueError:
            raise ValueError(f"DEFAULT_CURRENCY is not supported: {os.getenv('DEFAULT_CURRENCY')!r}") from None
        return cls(
            rates_provider=os.getenv("RATES_PROVIDER", cls.rates_provider),
            rates_base_url=os.getenv("RATES_BASE_URL", cls.rates_base_url),
            rates_access_key=os.getenv("RATES_ACCESS_KEY") or None,
            rates_timeout=_float_env("RATES_TIMEOUT", cls.rates_timeout),
            rates_cache_ttl=_float_env("RATES_CACHE_TTL", cls.rates_cache_ttl),
            default_currency=currency,
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )

    def provider_kwargs(self):
        if self.rates_provider.lower() == "static":
            return {}
        return {
            "base_url": self.rates_base_url,
            "access_key": self.rates_access_key,
            "timeout": self.rates_timeout,
        }

    def to_dict(self):
        data = asdict(self)
        data["default_currency"] = self.default_currency.value
        data.pop("rates_access_key")
        return data
