"""In-memory sliding-window rate limiting keyed by source address.

Counters live in this process only; with several instances each enforces its
own budget, which is acceptable for best-effort throttling of auth endpoints.
"""
import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Request

from quotewatch.config import RateLimit
from quotewatch.errors import TooManyAttemptsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    retry_after: int = 0


class SlidingWindowRateLimiter:
    """Allow at most `limit.count` hits per key within any `limit.window_seconds` span.

    Keys whose hits have all aged out are dropped: on their next hit, and by a
    full sweep at most once per window so idle addresses do not accumulate.
    """

    def __init__(
        self,
        limit: RateLimit,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        """Number of keys currently tracked."""
        with self._lock:
            return len(self._hits)

    def hit(self, key: str) -> RateLimitResult:
        """Record an attempt for `key` and report whether it is within budget."""
        now = self._clock()
        window = self.limit.window_seconds
        cutoff = now - window
        with self._lock:
            if now - self._last_sweep >= window:
                self._sweep(cutoff)
                self._last_sweep = now
            hits = self._hits.get(key)
            if hits is not None:
                _prune(hits, cutoff)
                if len(hits) >= self.limit.count:
                    retry_after = math.ceil(hits[0] + window - now)
                    return RateLimitResult(allowed=False, remaining=0, retry_after=retry_after)
            else:
                hits = self._hits[key] = deque()
            hits.append(now)
            return RateLimitResult(allowed=True, remaining=self.limit.count - len(hits))

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)

    def _sweep(self, cutoff: float) -> None:
        for key in list(self._hits):
            hits = self._hits[key]
            _prune(hits, cutoff)
            if not hits:
                del self._hits[key]
        logger.debug("Rate limiter sweep: %s keys tracked", len(self._hits))


def _prune(hits: deque[float], cutoff: float) -> None:
    while hits and hits[0] <= cutoff:
        hits.popleft()


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limited(limiter_name: str, message: str) -> Callable[[Request], None]:
    """Build a dependency that charges the named app-level limiter for this request."""

    def dependency(request: Request) -> None:
        limiter: SlidingWindowRateLimiter = getattr(request.app.state, limiter_name)
        address = client_address(request)
        result = limiter.hit(address)
        if not result.allowed:
            logger.warning(
                "Rate limit %s exceeded for %s (retry in %ss)",
                limiter_name,
                address,
                result.retry_after,
            )
            raise TooManyAttemptsError(message, retry_after=result.retry_after)

    return dependency
