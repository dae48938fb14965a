"""
Transport Interface

Abstract interface for upload transports.
Follows Dependency Inversion Principle - the submission orchestrator
depends on this abstraction, not on a concrete HTTP client.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from submission.constants import TransportErrorKind
from submission.models.media_file import UploadRequest
from submission.utils.progress_utils import ProgressTracker


@dataclass
class TransportOutcome:
    """
    What came back from one upload attempt.

    Transports never raise for network or HTTP failures; they report them
    here and leave interpretation to the error classifier.

    Attributes:
        ok: True for a 2xx response
        status_code: HTTP status (None if no response was received)
        payload: Parsed JSON body, or {"raw": text} for non-JSON bodies
        error_kind: Failure kind (None on success)
        error_message: Low-level error description for logs
        elapsed_ms: Time from request start to outcome
    """

    ok: bool
    status_code: Optional[int] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    error_kind: Optional[TransportErrorKind] = None
    error_message: Optional[str] = None
    elapsed_ms: int = 0

    @property
    def detail(self) -> Optional[str]:
        """Server-provided "detail" text, if the body carried one"""
        detail = self.payload.get("detail") if isinstance(self.payload, dict) else None
        if detail is None or detail == "":
            return None
        return detail if isinstance(detail, str) else str(detail)


class TransportInterface(ABC):
    """
    Abstract base class for upload transports.

    Any transport (HTTP, in-process mock, ...) must implement these methods.
    """

    @abstractmethod
    def upload(
        self,
        endpoint: str,
        request: UploadRequest,
        timeout_ms: int,
        progress: ProgressTracker,
        cancel_event: Optional[threading.Event] = None,
    ) -> TransportOutcome:
        """
        Upload a file and wait for the analysis response.

        Must:
        - Report body bytes sent to progress.update()
        - Abort and return TIMEOUT once timeout_ms has elapsed, counting
          the whole request/response cycle
        - Abort and return ABORTED promptly when cancel_event is set
        - Not retry

        Args:
            endpoint: Path relative to the service base URL
            request: File, kind and analysis mode
            timeout_ms: Hard deadline for the full cycle
            progress: Tracker receiving byte counts
            cancel_event: Set by the caller to abandon the upload

        Returns:
            TransportOutcome describing the response or failure

        Example:
            outcome = transport.upload(
                "/image/analyze", request, 120000, tracker,
            )
            if outcome.ok:
                print(outcome.payload)
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the transport can send requests.

        Returns:
            True if configured and not closed
        """

    def close(self) -> None:
        """Release transport resources (connection pools, ...)"""


class SubmissionError(Exception):
    """
    Base exception for the submission module.

    Only raised for misuse (e.g. running a submission twice) and for
    validation failures inside the orchestrator. Upload failures are
    reported as values, never raised to the caller.
    """
