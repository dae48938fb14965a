"""
Submission

One user action: one file, one request, one result.

State machine:
    IDLE -> VALIDATING -> FAILED                      (file rejected)
                       -> UPLOADING -> SUCCEEDED | FAILED

SUCCEEDED and FAILED are terminal. A finished submission is never reused;
the caller creates a new one for the next file.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from config.settings import IMAGE_ANALYZE_ENDPOINT, VIDEO_ANALYZE_ENDPOINT
from submission.constants import ErrorCategory, MediaKind, SubmissionState
from submission.interfaces.transport_interface import (
    SubmissionError,
    TransportInterface,
    TransportOutcome,
)
from submission.models.media_file import UploadRequest, constraint_for
from submission.models.results import (
    AnalysisResult,
    ClassifiedError,
    ImageResult,
    SubmissionResult,
    VideoResult,
)
from submission.utils.error_classifier import (
    MESSAGE_CANCELLED,
    ErrorContext,
    classify_error,
    failure_prefix,
)
from submission.utils.progress_utils import ProgressCallback, ProgressTracker
from submission.utils.timeout_utils import timeout_for
from submission.utils.validation_utils import ValidationError, validate_media_file


class Submission:
    """
    Orchestrates a single submission.

    Sequencing: validate -> pick deadline -> upload -> normalize or classify.
    Every failure comes back as a SubmissionResult carrying a
    ClassifiedError; nothing is raised to the caller except misuse.

    Usage:
        submission = Submission(request, transport, on_progress=print)
        result = submission.run()

        # From another thread (e.g. the UI's cancel button)
        submission.cancel()
    """

    def __init__(
        self,
        request: UploadRequest,
        transport: TransportInterface,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.request = request
        self.transport = transport
        self.on_progress = on_progress

        self.state = SubmissionState.IDLE
        self.timeout_ms: Optional[int] = None
        self.result: Optional[SubmissionResult] = None

        self._lock = threading.RLock()
        self._cancel_event = threading.Event()
        self._resources: List[Callable[[], None]] = []
        self._tracker: Optional[ProgressTracker] = None
        self._start_time = time.time()

    @property
    def endpoint(self) -> str:
        if self.request.kind == MediaKind.IMAGE:
            return IMAGE_ANALYZE_ENDPOINT
        return VIDEO_ANALYZE_ENDPOINT

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def add_resource(self, release: Callable[[], None]) -> None:
        """
        Register a handle to release when the submission ends.

        Preview files, thumbnails and similar caller-held resources go
        here; they are released on success, failure and cancel.
        """
        with self._lock:
            if self.state.is_terminal:
                self._release(release)
                return
            self._resources.append(release)

    def transition_to(self, new_state: SubmissionState, reason: str = "") -> None:
        """Move to a new state with logging"""
        with self._lock:
            if self.state.is_terminal:
                raise SubmissionError(
                    f"Submission already {self.state.value}, cannot move to {new_state.value}",
                )
            old_state = self.state
            self.state = new_state

        log_msg = f"Submission {self.request.file.name}: {old_state.value} -> {new_state.value}"
        if reason:
            log_msg += f" ({reason})"
        self.logger.debug(log_msg)

    def run(self) -> SubmissionResult:
        """
        Execute the submission.

        Returns:
            SubmissionResult with the analysis or a classified error
            (the CANCELLED result if cancel() came first)

        Raises:
            SubmissionError: If the submission was already run
        """
        with self._lock:
            if self.is_cancelled and self.result is not None:
                return self.result
            if self.state != SubmissionState.IDLE:
                raise SubmissionError(
                    f"Submission cannot run from state {self.state.value}",
                )
            self._start_time = time.time()
            self.transition_to(SubmissionState.VALIDATING)

        media_file = self.request.file
        try:
            validate_media_file(media_file, constraint_for(self.request.kind))
        except ValidationError as e:
            self.logger.warning(f"File rejected: {e}")
            return self._fail(
                ClassifiedError(
                    category=ErrorCategory.VALIDATION,
                    message=str(e),
                    retriable=False,
                ),
                reason=e.kind.value,
            )

        self.timeout_ms = timeout_for(self.request.kind, media_file.size)

        with self._lock:
            if self.is_cancelled:
                return self._fail(self._cancelled_error(), reason="cancelled")
            self._tracker = ProgressTracker(
                total_bytes=media_file.size,
                on_progress=self.on_progress,
                label=media_file.name,
            )
            self.transition_to(
                SubmissionState.UPLOADING,
                f"deadline {self.timeout_ms} ms",
            )

        self.logger.info(
            f"Submitting {self.request.kind.value}: {media_file.name} "
            f"({media_file.size_mb:.1f} MB)",
        )

        try:
            outcome = self.transport.upload(
                self.endpoint,
                self.request,
                self.timeout_ms,
                self._tracker,
                self._cancel_event,
            )
        except Exception as e:
            self.logger.error(f"Unexpected transport error: {e}", exc_info=True)
            outcome = TransportOutcome(ok=False, error_message=str(e))
        finally:
            self._tracker.close()

        if outcome.ok and not self.is_cancelled:
            return self._succeed(self._normalize(outcome))

        if self.is_cancelled:
            return self._fail(self._cancelled_error(), reason="cancelled")

        error = classify_error(
            outcome,
            ErrorContext(
                kind=self.request.kind,
                file_size_mb=media_file.size_mb,
                timeout_ms=self.timeout_ms,
            ),
        )
        return self._fail(error, reason=outcome.error_message or error.category.value)

    def cancel(self) -> bool:
        """
        Abandon the submission.

        Safe to call from any thread. Stops progress delivery and releases
        registered resources immediately; the transport aborts the request
        on its side. The remote analysis may still run to completion.

        Returns:
            True if the submission was still active
        """
        with self._lock:
            if self.state.is_terminal:
                return False

            self._cancel_event.set()
            if self._tracker:
                self._tracker.close()
            self._release_all()
            self.logger.info(f"Submission cancelled: {self.request.file.name}")

            if self.state == SubmissionState.IDLE:
                self._fail(self._cancelled_error(), reason="cancelled before start")
            return True

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _normalize(self, outcome: TransportOutcome) -> AnalysisResult:
        if self.request.kind == MediaKind.IMAGE:
            return ImageResult.from_payload(outcome.payload)
        return VideoResult.from_payload(outcome.payload)

    def _cancelled_error(self) -> ClassifiedError:
        return ClassifiedError(
            category=ErrorCategory.CANCELLED,
            message=failure_prefix(self.request.kind) + MESSAGE_CANCELLED,
            retriable=True,
        )

    def _succeed(self, analysis: AnalysisResult) -> SubmissionResult:
        with self._lock:
            self._finish_terminal(SubmissionState.SUCCEEDED, "analysis complete")
            self.result = SubmissionResult(
                success=True,
                result=analysis,
                state=self.state,
                duration=time.time() - self._start_time,
                file_size=self.request.file.size,
            )

        self.logger.info(
            f"✅ Analysis complete: {self.request.file.name} "
            f"({self.result.duration:.1f}s)",
        )
        return self.result

    def _fail(self, error: ClassifiedError, reason: str = "") -> SubmissionResult:
        with self._lock:
            if self.result is not None:
                # Already failed (cancel() before run) - keep the first error
                return self.result
            self._finish_terminal(SubmissionState.FAILED, reason)
            self.result = SubmissionResult(
                success=False,
                error=error,
                state=self.state,
                duration=time.time() - self._start_time,
                file_size=self.request.file.size,
            )

        self.logger.error(
            f"❌ Analysis failed: {self.request.file.name} "
            f"({error.category.value}): {error.message}",
        )
        return self.result

    def _finish_terminal(self, state: SubmissionState, reason: str) -> None:
        if self._tracker:
            self._tracker.close()
        self._release_all()
        self.transition_to(state, reason)

    def _release_all(self) -> None:
        resources, self._resources = self._resources, []
        for release in resources:
            self._release(release)

    def _release(self, release: Callable[[], None]) -> None:
        try:
            release()
        except Exception as e:
            self.logger.error(f"Error releasing submission resource: {e}")
