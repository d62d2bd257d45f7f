from __future__ import annotations

import logging
import math
from typing import Dict

import requests

from ..errors import RateServiceUnavailable
from .base import RateProvider, RateTable
from .converter import SupportedCurrency

logger = logging.getLogger(__name__)


class ExchangeRateHostClient(RateProvider):
    """Tiny wrapper around the exchangerate.host `latest` endpoint.

    One request per base currency: `GET {base_url}/latest?base=GBP` answers
    with `{"base": "GBP", "rates": {"EUR": 1.17, ...}}`. Any endpoint that
    speaks the same shape can be used by passing a different `base_url`.
    """

    def __init__(
        self,
        base_url: str = "https://api.exchangerate.host",
        access_key: str | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_key = access_key
        self.timeout = timeout

    # ------------------------------------------------------------------
    def _fetch_row(self, base: SupportedCurrency) -> Dict[SupportedCurrency, float]:
        url = f"{self.base_url}/latest"
        params = {"base": base.value}
        if self.access_key:
            params["access_key"] = self.access_key
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            rates = resp.json()["rates"]
        except requests.RequestException as exc:
            if getattr(exc, "response", None) is not None:
                logger.error("Rates request for %s failed %s: %s", base.value, exc.response.status_code, exc.response.text)
            else:
                logger.error("Rates request for %s failed: %s", base.value, exc)
            raise RateServiceUnavailable(f"Exchange rate service unreachable for {base.value}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Malformed rates payload for %s: %s", base.value, exc)
            raise RateServiceUnavailable(f"Malformed exchange rate payload for {base.value}") from exc

        row: Dict[SupportedCurrency, float] = {}
        for target in SupportedCurrency:
            if target is base:
                row[target] = 1.0
                continue
            rate = rates.get(target.value) if isinstance(rates, dict) else None
            if not isinstance(rate, (int, float)) or isinstance(rate, bool) or not math.isfinite(rate) or rate <= 0:
                raise RateServiceUnavailable(f"Exchange rate service returned no {base.value}->{target.value} rate")
            row[target] = float(rate)
        return row

    # ------------------------------------------------------------------
    def get_rates(self) -> RateTable:
        return {base: self._fetch_row(base) for base in SupportedCurrency}

    def get_rate(self, source: SupportedCurrency, target: SupportedCurrency) -> float:
        if source is target:
            return 1.0
        return self._fetch_row(source)[target]
