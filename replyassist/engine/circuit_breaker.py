"""Quota circuit breaker for the remote reranker.

Unlike a failure-count breaker this one trips on a single quota-exhaustion
signal and closes by itself once ``open_until`` has passed; there is no
half-open probing and no explicit reset.
"""

import math
import time
from typing import Callable

from replyassist.config import RERANK_CIRCUIT_TTL_SEC
from replyassist.core.logging import get_logger

_log = get_logger("engine.circuit_breaker")


class QuotaCircuitBreaker:

    def __init__(
        self,
        cooldown_sec: float = RERANK_CIRCUIT_TTL_SEC,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cooldown_sec = cooldown_sec
        self._clock = clock
        self._open_until = 0.0

    def is_open(self) -> bool:
        return self._clock() < self._open_until

    def trip(self, reason: str = "") -> None:
        """Block remote calls for ``cooldown_sec`` from now."""
        self._open_until = self._clock() + self.cooldown_sec
        _log.warning("circuit breaker opened", cooldown_s=self.cooldown_sec, reason=reason[:80])

    def remaining_cooldown(self) -> int:
        """Seconds until remote calls are allowed again, 0 when closed."""
        return max(0, math.ceil(self._open_until - self._clock()))

    @property
    def state(self) -> str:
        return "open" if self.is_open() else "closed"
