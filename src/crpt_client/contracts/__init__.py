"""Shared contracts for cross-boundary data types.

Import pattern:
    from crpt_client.contracts import Document, SubmissionResult, TransportError
"""

from crpt_client.contracts.documents import (
    Description,
    Document,
    Product,
    serialize_document,
)
from crpt_client.contracts.errors import (
    Cancelled,
    ConfigurationError,
    CrptClientError,
    SerializationError,
    TransportError,
)
from crpt_client.contracts.submission import (
    SubmissionRequest,
    SubmissionResult,
    Transport,
)

__all__ = [
    "Cancelled",
    "ConfigurationError",
    "CrptClientError",
    "Description",
    "Document",
    "Product",
    "SerializationError",
    "SubmissionRequest",
    "SubmissionResult",
    "Transport",
    "TransportError",
    "serialize_document",
]
