"""Core infrastructure: Configuration, Logging, Rate limiting."""

from crpt_client.core.config import (
    ClientSettings,
    LoggingSettings,
    RateLimitSettings,
    TransportSettings,
    load_settings,
)
from crpt_client.core.logging import (
    configure_logging,
    get_logger,
)
from crpt_client.core.rate_limit import (
    CancellationToken,
    NoOpLimiter,
    Quota,
    RateLimiter,
    build_limiter,
)

__all__ = [
    "CancellationToken",
    "ClientSettings",
    "LoggingSettings",
    "NoOpLimiter",
    "Quota",
    "RateLimitSettings",
    "RateLimiter",
    "TransportSettings",
    "build_limiter",
    "configure_logging",
    "get_logger",
    "load_settings",
]
