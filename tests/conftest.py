# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/
"""

import logging
import os
import threading
from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from crpt_client.contracts import SubmissionRequest, SubmissionResult

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Timing varies on shared runners
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Helpers
# =============================================================================


class FakeClock:
    """Manually advanced clock for deterministic refill tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTransport:
    """Transport double that records requests and returns a canned result."""

    def __init__(
        self,
        result: SubmissionResult | None = None,
        error: Exception | None = None,
    ) -> None:
        self.result = result or SubmissionResult(status_code=200, body='{"value": "ok"}')
        self.error = error
        self.requests: list[SubmissionRequest] = []
        self._lock = threading.Lock()

    def send(self, request: SubmissionRequest) -> SubmissionResult:
        with self._lock:
            self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Document matching the registry's goods introduction example."""
    return {
        "description": {"participantInn": "ParticipantINN"},
        "doc_id": "123456789",
        "doc_status": "NEW",
        "doc_type": "LP_INTRODUCE_GOODS",
        "importRequest": True,
        "owner_inn": "1234567890",
        "participant_inn": "0987654321",
        "producer_inn": "1122334455",
        "production_date": "2024-06-25",
        "production_type": "TYPE",
        "products": [
            {
                "certificate_document": "CERT_DOC",
                "certificate_document_date": "2024-06-25",
                "certificate_document_number": "CERT_NUM",
                "owner_inn": "1234567890",
                "producer_inn": "1122334455",
                "production_date": "2023-01-01",
                "tnved_code": "TNVED",
                "uit_code": "UIT",
                "uitu_code": "UITU",
            }
        ],
    }


@pytest.fixture
def transport() -> RecordingTransport:
    """Transport double returning 200; set `.error` or `.result` to change it."""
    return RecordingTransport()


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo configure_logging() so captured streams do not leak between tests."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
