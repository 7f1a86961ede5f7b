"""Process-wide request quota for the Brave Search API."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable

from .errors import RateLimitExceeded

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 1.0


@dataclass
class QuotaState:
    """Counters for the current one-second window and the month so far."""

    second_count: int = 0
    month_count: int = 0
    window_start: float = 0.0


class RateLimiter:
    """Counts outbound calls against a per-second and a per-month ceiling.

    `check_and_consume` must be called once per network request. It never
    waits: when a ceiling is reached the call fails immediately and the
    counters are left untouched.
    """

    def __init__(
        self,
        *,
        per_second: int = 1,
        per_month: int = 15000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.per_second = per_second
        self.per_month = per_month
        self._clock = clock
        self._lock = threading.Lock()
        self._state = QuotaState(window_start=clock())

    def check_and_consume(self) -> None:
        """Take one unit of quota or raise `RateLimitExceeded`."""

        with self._lock:
            now = self._clock()
            state = self._state
            if now - state.window_start > WINDOW_SECONDS:
                state.second_count = 0
                state.window_start = now

            if state.second_count >= self.per_second or state.month_count >= self.per_month:
                logger.debug(
                    "Quota exhausted: %d/%d this second, %d/%d this month",
                    state.second_count,
                    self.per_second,
                    state.month_count,
                    self.per_month,
                )
                raise RateLimitExceeded()

            state.second_count += 1
            state.month_count += 1

    def snapshot(self) -> QuotaState:
        """Return a copy of the current counters."""

        with self._lock:
            return replace(self._state)
