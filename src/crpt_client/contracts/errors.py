# src/crpt_client/contracts/errors.py
"""Error taxonomy for the registry client.

Every error surfaces to the immediate caller. Nothing here is retried
internally:

- ConfigurationError: invalid quota or settings, raised at construction
- Cancelled: a wait for a rate-limit token was aborted, no token consumed
- SerializationError: the document could not be encoded, no token consumed
- TransportError: the request failed after a token was granted, the
  token is NOT refunded (rate limiting counts attempts, not successes)
"""


class CrptClientError(Exception):
    """Base class for all client errors."""


class ConfigurationError(CrptClientError, ValueError):
    """Raised when a limiter or client is constructed with invalid values."""


class Cancelled(CrptClientError):
    """Raised when a caller's wait for a token is cancelled.

    The bucket is left untouched: a cancelled caller never holds a token,
    so the next caller can still obtain it.
    """

    def __init__(self, message: str = "Wait for rate-limit token was cancelled") -> None:
        self.message = message
        super().__init__(message)


class SerializationError(CrptClientError):
    """Raised when a document cannot be turned into a request payload."""

    def __init__(self, message: str, *, errors: list[dict[str, object]] | None = None) -> None:
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class TransportError(CrptClientError):
    """Raised when the transport collaborator fails to deliver a request.

    Attributes:
        url: Target URL of the failed request
        reason: Short description of the failure
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")
