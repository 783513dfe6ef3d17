# src/crpt_client/clients/submitter.py
"""Rate-limited document submission.

Order of operations for each submit():
1. Serialize the document (fails before any token is spent)
2. Build the request with the caller's signature
3. Acquire a token from the limiter (may block)
4. Send exactly once through the transport

A token spent on a request that then fails is not refunded: the limit
counts attempts, not successes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from crpt_client.contracts.documents import Document, serialize_document
from crpt_client.contracts.errors import SerializationError, TransportError
from crpt_client.contracts.submission import SubmissionRequest, SubmissionResult, Transport
from crpt_client.core.config import CREATE_DOCUMENTS_PATH, DEFAULT_BASE_URL
from crpt_client.core.logging import get_logger

if TYPE_CHECKING:
    from crpt_client.core.rate_limit.cancellation import CancellationToken
    from crpt_client.core.rate_limit.registry import Limiter

CREATE_DOCUMENTS_URL = DEFAULT_BASE_URL + CREATE_DOCUMENTS_PATH


class DocumentSubmitter:
    """Submits documents to the registry under a shared rate limit.

    One submitter may be used from many threads; the limiter and the
    transport carry their own synchronization.

    Example:
        limiter = RateLimiter(capacity=4, refill_period=3.0)
        with HTTPTransport() as transport:
            submitter = DocumentSubmitter(transport, limiter)
            result = submitter.submit(document, signature)
    """

    def __init__(
        self,
        transport: Transport,
        limiter: Limiter,
        *,
        url: str = CREATE_DOCUMENTS_URL,
    ) -> None:
        self._transport = transport
        self._limiter = limiter
        self._url = url
        self._logger = get_logger(__name__)

    @property
    def url(self) -> str:
        return self._url

    def build_request(
        self, document: Document | Mapping[str, Any], credential: str
    ) -> SubmissionRequest:
        """Serialize `document` and attach the signature header.

        Raises:
            SerializationError: If the document is invalid or the credential is empty
        """
        if not credential or not credential.strip():
            raise SerializationError("Signature credential must not be empty")
        body = serialize_document(document)
        return SubmissionRequest(
            url=self._url,
            headers={
                "Content-Type": "application/json",
                "Signature": credential,
            },
            body=body,
        )

    def submit(
        self,
        document: Document | Mapping[str, Any],
        credential: str,
        *,
        cancel: CancellationToken | None = None,
    ) -> SubmissionResult:
        """Submit one document, waiting for rate-limit capacity first.

        Args:
            document: Document model or document-shaped mapping
            credential: Signature header value supplied by the caller
            cancel: Optional token that aborts the rate-limit wait

        Returns:
            The transport's raw result; non-2xx statuses are not raised

        Raises:
            SerializationError: Document could not be encoded (no token spent)
            Cancelled: Wait was cancelled (no token spent)
            TransportError: Request failed after the token was spent
        """
        request = self.build_request(document, credential)

        self._limiter.acquire(cancel)

        try:
            result = self._transport.send(request)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(request.url, f"{type(e).__name__}: {e}") from e

        self._logger.debug(
            "document submitted",
            url=request.url,
            status_code=result.status_code,
        )
        return result
