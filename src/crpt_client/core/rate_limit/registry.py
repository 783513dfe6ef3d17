"""Limiter construction from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from crpt_client.contracts.errors import Cancelled
from crpt_client.core.rate_limit.limiter import RateLimiter

if TYPE_CHECKING:
    from crpt_client.core.config import RateLimitSettings
    from crpt_client.core.rate_limit.cancellation import CancellationToken


class Limiter(Protocol):
    """What the submitter needs from a limiter."""

    def acquire(self, cancel: CancellationToken | None = None) -> None: ...

    def try_acquire(self) -> bool: ...


class NoOpLimiter:
    """No-op limiter when rate limiting is disabled."""

    def acquire(self, cancel: CancellationToken | None = None) -> None:
        """Return at once unless `cancel` has already fired."""
        if cancel is not None and cancel.cancelled:
            raise Cancelled()

    def try_acquire(self) -> bool:
        """No-op try_acquire (always succeeds)."""
        return True

    def close(self) -> None:
        pass


def build_limiter(settings: RateLimitSettings, name: str = "crpt") -> RateLimiter | NoOpLimiter:
    """Create the limiter described by `settings`.

    Returns:
        RateLimiter (or NoOpLimiter if disabled)
    """
    if not settings.enabled:
        return NoOpLimiter()
    return RateLimiter(
        capacity=settings.capacity,
        refill_period=settings.refill_period,
        name=name,
    )
