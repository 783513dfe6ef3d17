# src/crpt_client/clients/http.py
"""HTTP transport for registry requests.

Wraps one long-lived httpx.Client, which pools connections and is safe
to share between threads.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING

import httpx

from crpt_client.contracts.errors import TransportError
from crpt_client.contracts.submission import SubmissionRequest, SubmissionResult
from crpt_client.core.logging import get_logger

if TYPE_CHECKING:
    from types import TracebackType

# Header names whose values never reach the logs
_SENSITIVE_HEADERS = frozenset({"signature", "authorization", "x-api-key"})


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy headers, masking credential-bearing values."""
    return {
        name: ("***" if name.lower() in _SENSITIVE_HEADERS else value)
        for name, value in headers.items()
    }


class HTTPTransport:
    """Sends SubmissionRequests over HTTP.

    Example:
        with HTTPTransport(timeout=30.0) as transport:
            result = transport.send(request)
            print(result.status_code, result.body)
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            timeout: Request timeout in seconds (ignored if `client` is given)
            client: Pre-configured client; the transport will not close it
        """
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._logger = get_logger(__name__)

    def send(self, request: SubmissionRequest) -> SubmissionResult:
        """Deliver `request` and return the raw response.

        Raises:
            TransportError: If no response was received
        """
        self._logger.debug(
            "sending request",
            method=request.method,
            url=request.url,
            headers=redact_headers(request.headers),
        )
        start = time.perf_counter()
        try:
            response = self._client.request(
                request.method,
                request.url,
                content=request.body.encode("utf-8"),
                headers=dict(request.headers),
            )
        except httpx.HTTPError as e:
            self._logger.warning(
                "request failed",
                url=request.url,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise TransportError(request.url, f"{type(e).__name__}: {e}") from e

        latency_ms = (time.perf_counter() - start) * 1000
        self._logger.debug(
            "response received",
            url=request.url,
            status_code=response.status_code,
            latency_ms=round(latency_ms, 1),
            body=response.text,
        )
        return SubmissionResult(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HTTPTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
