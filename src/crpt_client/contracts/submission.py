# src/crpt_client/contracts/submission.py
"""Request and result types exchanged with the transport collaborator.

The rate limiter never inspects these; they pass straight through the
submitter to whatever Transport is injected.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SubmissionRequest:
    """A fully built outbound request."""

    url: str
    headers: Mapping[str, str]
    body: str
    method: str = "POST"


@dataclass(frozen=True)
class SubmissionResult:
    """Raw outcome of a delivered request.

    Non-2xx statuses are still results, not errors: interpreting the
    registry's answer is left to the caller.
    """

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Sends one request and returns its result.

    Implementations must be safe to call from several threads at once
    and must raise TransportError when the request cannot be delivered.
    """

    def send(self, request: SubmissionRequest) -> SubmissionResult: ...
