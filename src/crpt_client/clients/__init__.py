"""Clients that deliver documents to the registry.

Example:
    from crpt_client.clients import DocumentSubmitter, HTTPTransport
    from crpt_client.core.rate_limit import RateLimiter

    submitter = DocumentSubmitter(HTTPTransport(), RateLimiter(4, 3.0))
    result = submitter.submit(document, signature)
"""

from crpt_client.clients.http import HTTPTransport, redact_headers
from crpt_client.clients.submitter import CREATE_DOCUMENTS_URL, DocumentSubmitter

__all__ = [
    "CREATE_DOCUMENTS_URL",
    "DocumentSubmitter",
    "HTTPTransport",
    "redact_headers",
]
