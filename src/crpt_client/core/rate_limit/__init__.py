"""Rate limiting for registry calls.

An in-process token bucket refilled to capacity once per period.
"""

from crpt_client.core.rate_limit.cancellation import CancellationToken
from crpt_client.core.rate_limit.limiter import Quota, RateLimiter
from crpt_client.core.rate_limit.registry import Limiter, NoOpLimiter, build_limiter

__all__ = [
    "CancellationToken",
    "Limiter",
    "NoOpLimiter",
    "Quota",
    "RateLimiter",
    "build_limiter",
]
