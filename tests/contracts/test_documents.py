"""Tests for document models and serialization."""

import json
from typing import Any

import pytest

from crpt_client.contracts import (
    Description,
    Document,
    Product,
    SerializationError,
    serialize_document,
)


class TestDocument:
    """Document validation and JSON shape."""

    def test_wire_field_names_preserved(self, sample_document: dict[str, Any]) -> None:
        """Mixed-case registry names come out exactly as they went in."""
        payload = json.loads(Document.from_mapping(sample_document).to_json())

        assert payload == sample_document

    def test_unset_fields_omitted(self) -> None:
        payload = json.loads(Document(doc_id="1").to_json())

        assert payload == {"doc_id": "1", "importRequest": False}

    def test_nested_models(self) -> None:
        document = Document(
            description=Description(participantInn="P"),
            products=[Product(uit_code="UIT"), Product(tnved_code="TN")],
        )

        payload = json.loads(document.to_json())

        assert payload["description"] == {"participantInn": "P"}
        assert payload["products"] == [{"uit_code": "UIT"}, {"tnved_code": "TN"}]

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            Document.from_mapping({"doc_id": "1", "docId": "typo"})

        assert exc_info.value.errors[0]["loc"] == "docId"

    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            Document.from_mapping({"products": "not-a-list"})

        assert exc_info.value.errors
        assert exc_info.value.__cause__ is not None


class TestSerializeDocument:
    def test_model_serialized(self) -> None:
        assert json.loads(serialize_document(Document(doc_type="LP_INTRODUCE_GOODS")))["doc_type"] == (
            "LP_INTRODUCE_GOODS"
        )

    def test_mapping_validated_then_serialized(self, sample_document: dict[str, Any]) -> None:
        assert json.loads(serialize_document(sample_document))["doc_id"] == "123456789"

    @pytest.mark.parametrize("value", [None, 42, "doc", ["doc_id"]])
    def test_non_document_rejected(self, value: Any) -> None:
        with pytest.raises(SerializationError, match="Cannot serialize"):
            serialize_document(value)
