"""
Error Classifier

Maps a failed TransportOutcome to the single ClassifiedError the user
sees. Pure: no I/O, no logging side effects beyond debug output.

Rules are evaluated in order, first match wins:

    1. HTTP 429              -> RATE_LIMITED
    2. deadline exceeded     -> TIMEOUT
    3. HTTP 413              -> PAYLOAD_TOO_LARGE
    4. cancelled by caller   -> CANCELLED
    5. body has "detail"     -> SERVER_DETAIL
    6. anything else         -> UNKNOWN (including no response at all)
"""

import logging
from dataclasses import dataclass

from config.settings import LARGE_VIDEO_THRESHOLD_MB, SERVER_MAX_UPLOAD_LABEL
from submission.constants import ErrorCategory, MediaKind, TransportErrorKind
from submission.interfaces.transport_interface import TransportOutcome
from submission.models.results import ClassifiedError
from submission.utils.format_utils import format_minutes

logger = logging.getLogger(__name__)

MESSAGE_RATE_LIMITED = (
    "The service is currently experiencing high demand. "
    "Please wait a few minutes and try again."
)
MESSAGE_TIMEOUT = "Analysis is taking longer than expected ({minutes} minutes). "
HINT_USE_OVERVIEW = "For large videos, try using the overview analysis type for faster processing."
HINT_SHORTER_VIDEO = "Please try again or use a shorter video."
HINT_TRY_AGAIN = "Please try again."
MESSAGE_PAYLOAD_TOO_LARGE = f"File size exceeds {SERVER_MAX_UPLOAD_LABEL} limit."
MESSAGE_CANCELLED = "The upload was cancelled."
MESSAGE_UNKNOWN_VIDEO = (
    "Please try again or use the overview analysis type for faster processing."
)


@dataclass(frozen=True)
class ErrorContext:
    """What the classifier needs to know about the submission"""

    kind: MediaKind
    file_size_mb: float
    timeout_ms: int


def failure_prefix(kind: MediaKind) -> str:
    """Generic phrase every error message starts with"""
    return f"Failed to analyze {kind.value}. "


def classify_error(outcome: TransportOutcome, context: ErrorContext) -> ClassifiedError:
    """
    Turn a failed transport outcome into a user-facing error.

    Args:
        outcome: Captured transport result (ok is expected to be False)
        context: Media kind, file size and the deadline that was used

    Returns:
        ClassifiedError with category, message and retry hint

    Example:
        error = classify_error(
            TransportOutcome(ok=False, status_code=429),
            ErrorContext(MediaKind.VIDEO, 50.0, 1800000),
        )
        error.category  # ErrorCategory.RATE_LIMITED
    """
    prefix = failure_prefix(context.kind)
    status = outcome.status_code

    if status == 429:
        return ClassifiedError(
            category=ErrorCategory.RATE_LIMITED,
            message=prefix + MESSAGE_RATE_LIMITED,
            retriable=True,
        )

    if outcome.error_kind == TransportErrorKind.TIMEOUT:
        message = prefix + MESSAGE_TIMEOUT.format(
            minutes=format_minutes(context.timeout_ms),
        )
        if context.kind == MediaKind.IMAGE:
            message += HINT_TRY_AGAIN
        elif context.file_size_mb > LARGE_VIDEO_THRESHOLD_MB:
            message += HINT_USE_OVERVIEW
        else:
            message += HINT_SHORTER_VIDEO
        return ClassifiedError(
            category=ErrorCategory.TIMEOUT,
            message=message,
            retriable=True,
        )

    if status == 413:
        return ClassifiedError(
            category=ErrorCategory.PAYLOAD_TOO_LARGE,
            message=prefix + MESSAGE_PAYLOAD_TOO_LARGE,
            retriable=False,
        )

    if outcome.error_kind == TransportErrorKind.ABORTED:
        return ClassifiedError(
            category=ErrorCategory.CANCELLED,
            message=prefix + MESSAGE_CANCELLED,
            retriable=True,
        )

    detail = outcome.detail
    if detail:
        return ClassifiedError(
            category=ErrorCategory.SERVER_DETAIL,
            message=prefix + detail,
            retriable=status is None or status >= 500,
        )

    logger.debug(f"Unclassified failure: status={status} kind={outcome.error_kind}")
    return ClassifiedError(
        category=ErrorCategory.UNKNOWN,
        message=prefix
        + (MESSAGE_UNKNOWN_VIDEO if context.kind == MediaKind.VIDEO else HINT_TRY_AGAIN),
        retriable=True,
    )
