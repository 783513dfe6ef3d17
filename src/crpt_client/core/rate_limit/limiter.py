"""Interval-refill token bucket with blocking acquisition."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from crpt_client.contracts.errors import Cancelled, ConfigurationError
from crpt_client.core.logging import get_logger

if TYPE_CHECKING:
    from types import TracebackType

    from crpt_client.core.rate_limit.cancellation import CancellationToken


@dataclass(frozen=True)
class Quota:
    """Immutable bucket configuration.

    Attributes:
        capacity: Maximum tokens held, and tokens granted per period
        refill_period: Period length in seconds
    """

    capacity: int
    refill_period: float

    def __post_init__(self) -> None:
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise ConfigurationError(
                f"capacity must be an integer, got {type(self.capacity).__name__}"
            )
        if self.capacity <= 0:
            raise ConfigurationError(f"capacity must be positive, got {self.capacity}")
        if self.refill_period <= 0:
            raise ConfigurationError(
                f"refill_period must be positive, got {self.refill_period}"
            )

    @classmethod
    def create(cls, capacity: int, refill_period: float | timedelta) -> Quota:
        """Build a quota, accepting the period as seconds or a timedelta."""
        if isinstance(refill_period, timedelta):
            seconds = refill_period.total_seconds()
        elif isinstance(refill_period, bool) or not isinstance(refill_period, int | float):
            raise ConfigurationError(
                f"refill_period must be seconds or a timedelta, "
                f"got {type(refill_period).__name__}"
            )
        else:
            seconds = float(refill_period)
        return cls(capacity=capacity, refill_period=seconds)


class RateLimiter:
    """Token bucket that blocks callers until the next refill.

    The bucket starts full. At every period boundary (counted from
    construction) it is topped back up to capacity; tokens are not
    trickled in between. A caller that finds the bucket empty waits on
    a condition variable until the next boundary, then re-checks: when
    many callers wake together only `capacity` of them win, the rest
    wait again.

    Example:
        limiter = RateLimiter(capacity=4, refill_period=3.0)

        # Blocking acquire (waits if needed)
        limiter.acquire()
        call_registry()

        # Non-blocking check
        if limiter.try_acquire():
            call_registry()

        # Cancellable wait
        token = CancellationToken.after(10.0)
        limiter.acquire(token)  # raises Cancelled after 10s without a token
    """

    def __init__(
        self,
        capacity: int,
        refill_period: float | timedelta,
        *,
        name: str = "crpt",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize rate limiter.

        Args:
            capacity: Maximum requests per refill period
            refill_period: Period length, in seconds or as a timedelta
            name: Identifier used in log events
            clock: Monotonic time source in seconds

        Raises:
            ConfigurationError: If capacity or refill_period is not positive
        """
        self.name = name
        self._quota = Quota.create(capacity, refill_period)
        self._clock = clock
        # Guards _tokens, _last_refill and _closed
        self._condition = threading.Condition(threading.Lock())
        self._tokens = self._quota.capacity
        self._last_refill = clock()
        self._closed = False
        self._logger = get_logger(__name__, limiter=name)

    @property
    def quota(self) -> Quota:
        return self._quota

    @property
    def available_tokens(self) -> int:
        """Tokens currently in the bucket, after any due refill."""
        with self._condition:
            self._refill(self._clock())
            return self._tokens

    def acquire(self, cancel: CancellationToken | None = None) -> None:
        """Take one token, blocking until one is available.

        Args:
            cancel: Optional token; cancelling it aborts the wait

        Raises:
            Cancelled: If `cancel` fired or the limiter was closed before
                a token was granted. No token is consumed in that case.
        """
        unregister = cancel.register(self._wake) if cancel is not None else None
        waited = False
        try:
            with self._condition:
                while True:
                    if self._closed:
                        raise Cancelled(f"Rate limiter '{self.name}' is closed")
                    if cancel is not None and cancel.cancelled:
                        raise Cancelled()

                    now = self._clock()
                    self._refill(now)
                    if self._tokens > 0:
                        self._tokens -= 1
                        remaining = self._tokens
                        break

                    delay = self._last_refill + self._quota.refill_period - now
                    if not waited:
                        self._logger.debug(
                            "rate limit reached, waiting for refill",
                            wait_ms=round(delay * 1000),
                        )
                        waited = True
                    self._condition.wait(timeout=max(delay, 0.0))
        except Cancelled:
            self._logger.info("rate limit wait cancelled")
            raise
        finally:
            if unregister is not None:
                unregister()

        self._logger.debug("rate limit token granted", remaining=remaining)

    def try_acquire(self) -> bool:
        """Take one token if available, without blocking.

        Returns:
            True if a token was taken, False if the bucket is empty or closed
        """
        with self._condition:
            if self._closed:
                return False
            self._refill(self._clock())
            if self._tokens == 0:
                return False
            self._tokens -= 1
            return True

    def close(self) -> None:
        """Close the limiter; current and future waiters raise Cancelled."""
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def _refill(self, now: float) -> None:
        # Caller holds self._condition
        period = self._quota.refill_period
        if now < self._last_refill + period:
            return
        elapsed_periods = max(1, int((now - self._last_refill) // period))
        self._last_refill += elapsed_periods * period
        if self._tokens < self._quota.capacity:
            self._tokens = self._quota.capacity
            self._condition.notify_all()

    def _wake(self) -> None:
        with self._condition:
            self._condition.notify_all()

    def __enter__(self) -> RateLimiter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
