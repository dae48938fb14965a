"""
Mock Transport Implementation

Simulated transport for testing without an analysis service.
Follows the same contract as HttpTransport: progress, deadline and
cancellation all behave as they would over the network.
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

from submission.constants import MediaKind, TransportErrorKind
from submission.interfaces.transport_interface import (
    TransportInterface,
    TransportOutcome,
)
from submission.models.media_file import UploadRequest
from submission.utils.progress_utils import ProgressTracker

MOCK_VIDEO_OUTPUT = (
    "Summary:\n\n"
    "A short clip analyzed by the mock transport.\n\n"
    "Timeline:\n\n"
    "00:00 - Clip starts\n00:05 - Clip ends"
)

MOCK_IMAGE_PAYLOAD = {
    "description": "A sample image analyzed by the mock transport",
    "technical_details": {"format": "mock"},
    "objects": [],
    "text": [],
}


class MockTransport(TransportInterface):
    """
    Mock upload transport for testing.

    Useful for:
    - Unit tests of the orchestrator
    - Development without a running analysis service
    - Scripting failures (status codes, timeouts, network errors)
    """

    def __init__(
        self,
        payload: Optional[Dict[str, Any]] = None,
        status_code: int = 200,
        chunks: int = 4,
        delay_seconds: float = 0.0,
        fail_with: Optional[TransportErrorKind] = None,
    ):
        """
        Initialize mock transport.

        Args:
            payload: Response body (default: canned body per media kind)
            status_code: HTTP status to report
            chunks: Number of progress steps while "sending" the body
            delay_seconds: Simulated server processing time after upload
            fail_with: Force NETWORK_FAILURE (or any other kind) instead
                of a response

        Example:
            # Fast mock for unit tests
            transport = MockTransport()

            # Rate limited server
            transport = MockTransport(status_code=429, payload={"detail": "slow down"})

            # Analysis slower than the deadline
            transport = MockTransport(delay_seconds=5.0)
        """
        self.logger = logging.getLogger(__name__)
        self.payload = payload
        self.status_code = status_code
        self.chunks = max(chunks, 1)
        self.delay_seconds = delay_seconds
        self.fail_with = fail_with

        # Track uploads for testing
        self.upload_history: List[Dict[str, Any]] = []

        self.logger.info(
            f"Mock Transport initialized "
            f"(status: {status_code}, delay: {delay_seconds}s)",
        )

    def upload(
        self,
        endpoint: str,
        request: UploadRequest,
        timeout_ms: int,
        progress: ProgressTracker,
        cancel_event: Optional[threading.Event] = None,
    ) -> TransportOutcome:
        """Simulate an upload followed by server-side processing"""
        cancel_event = cancel_event or threading.Event()
        start_time = time.monotonic()
        deadline = start_time + timeout_ms / 1000

        self.upload_history.append(
            {
                "endpoint": endpoint,
                "file_name": request.file.name,
                "file_size": request.file.size,
                "kind": request.kind,
                "fields": request.form_fields(),
                "timeout_ms": timeout_ms,
                "timestamp": time.time(),
            },
        )
        self.logger.info(f"[MOCK] Starting upload: {request.file.name} -> {endpoint}")

        def failed(kind: TransportErrorKind, message: str) -> TransportOutcome:
            self.logger.warning(f"[MOCK] {message}")
            return TransportOutcome(
                ok=False,
                error_kind=kind,
                error_message=message,
                elapsed_ms=int((time.monotonic() - start_time) * 1000),
            )

        # "Send" the body in equal steps
        total = request.file.size
        progress.set_total(total)
        for step in range(self.chunks + 1):
            if cancel_event.is_set():
                return failed(TransportErrorKind.ABORTED, "Upload cancelled")
            progress.update(total * step // self.chunks)

        if self.fail_with is not None:
            return failed(self.fail_with, f"Simulated {self.fail_with.value}")

        # Server processing, bounded by the deadline
        wait_seconds = max(0.0, min(self.delay_seconds, deadline - time.monotonic()))
        if cancel_event.wait(wait_seconds):
            return failed(TransportErrorKind.ABORTED, "Upload cancelled")
        if start_time + self.delay_seconds > deadline:
            return failed(
                TransportErrorKind.TIMEOUT,
                f"Upload timed out after {timeout_ms} ms",
            )

        payload = self.payload
        if payload is None and not 200 <= self.status_code < 300:
            payload = {}
        elif payload is None:
            payload = (
                dict(MOCK_IMAGE_PAYLOAD)
                if request.kind == MediaKind.IMAGE
                else {"output": MOCK_VIDEO_OUTPUT}
            )

        elapsed = int((time.monotonic() - start_time) * 1000)
        if 200 <= self.status_code < 300:
            self.logger.info(f"[MOCK] ✅ Upload successful ({elapsed} ms)")
            return TransportOutcome(
                ok=True,
                status_code=self.status_code,
                payload=payload,
                elapsed_ms=elapsed,
            )

        self.logger.warning(f"[MOCK] Server returned HTTP {self.status_code}")
        return TransportOutcome(
            ok=False,
            status_code=self.status_code,
            payload=payload,
            error_kind=TransportErrorKind.HTTP_STATUS,
            error_message=f"HTTP {self.status_code}",
            elapsed_ms=elapsed,
        )

    def is_available(self) -> bool:
        """Mock transport is always available"""
        return True

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def get_upload_history(self) -> List[Dict[str, Any]]:
        return self.upload_history.copy()

    def get_last_upload(self) -> Optional[Dict[str, Any]]:
        return self.upload_history[-1] if self.upload_history else None

    def clear_history(self) -> None:
        self.upload_history.clear()
        self.logger.debug("[MOCK] Upload history cleared")
