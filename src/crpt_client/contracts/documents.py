# src/crpt_client/contracts/documents.py
"""Document shape accepted by the registry's create-documents endpoint.

Field names are the registry's wire names (a mix of snake_case and
camelCase), so models serialize without aliasing. Unknown fields are
rejected so that typos fail before a rate-limit token is spent.
"""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ValidationError

from crpt_client.contracts.errors import SerializationError


class _RegistryModel(BaseModel):
    model_config = {"extra": "forbid"}


class Description(_RegistryModel):
    """Document description block."""

    participantInn: str | None = None


class Product(_RegistryModel):
    """A single product line introduced by the document."""

    certificate_document: str | None = None
    certificate_document_date: str | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    tnved_code: str | None = None
    uit_code: str | None = None
    uitu_code: str | None = None


class Document(_RegistryModel):
    """Goods introduction document.

    Example:
        document = Document(
            doc_id="123456789",
            doc_type="LP_INTRODUCE_GOODS",
            owner_inn="1234567890",
            products=[Product(uit_code="UIT")],
        )
        payload = document.to_json()
    """

    description: Description | None = None
    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: str | None = None
    importRequest: bool = False
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    production_type: str | None = None
    products: list[Product] | None = None
    reg_date: str | None = None
    reg_number: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Validate a plain mapping into a Document.

        Raises:
            SerializationError: If the mapping does not describe a valid document.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise SerializationError(
                f"Invalid document: {e.error_count()} validation error(s)",
                errors=[
                    {"loc": ".".join(str(x) for x in err["loc"]), "msg": err["msg"]}
                    for err in e.errors()
                ],
            ) from e

    def to_json(self) -> str:
        """Encode the document as the JSON request body (unset fields omitted)."""
        return self.model_dump_json(exclude_none=True)


def serialize_document(document: Document | Mapping[str, Any]) -> str:
    """Turn a Document or a document-shaped mapping into a JSON payload.

    Raises:
        SerializationError: If the value is not document-shaped.
    """
    if isinstance(document, Document):
        return document.to_json()
    if isinstance(document, Mapping):
        return Document.from_mapping(document).to_json()
    raise SerializationError(
        f"Cannot serialize {type(document).__name__} as a document"
    )
