from __future__ import annotations

import logging
import threading
import time

from .base import RateProvider, RateTable

logger = logging.getLogger(__name__)


class CachedRateProvider(RateProvider):
    """Keeps the last rate table for `ttl` seconds.

    A failed refresh propagates; stale tables are not served past their TTL.
    """

    def __init__(self, provider: RateProvider, ttl: float, clock=time.time):
        self.provider = provider
        self.ttl = ttl
        self.clock = clock
        self._table: RateTable | None = None
        self._fetched_at = 0.0
        # one refresh at a time; concurrent callers wait for its result
        self._lock = threading.Lock()

    def _fresh(self, now: float) -> bool:
        return self._table is not None and now - self._fetched_at < self.ttl

    def get_rates(self) -> RateTable:
        with self._lock:
            now = self.clock()
            if not self._fresh(now):
                logger.debug("Refreshing exchange rates from %s", type(self.provider).__name__)
                self._table = self.provider.get_rates()
                self._fetched_at = self.clock()
            return self._table

    def invalidate(self) -> None:
        with self._lock:
            self._table = None
