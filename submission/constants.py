"""
Submission Enums

Type definitions for the submission module.
Configuration values live in config/settings.py; this module only holds
the Enum types that define the vocabulary of a submission.
"""

from enum import Enum

# =============================================================================
# MEDIA
# =============================================================================


class MediaKind(Enum):
    """Kind of media being submitted"""

    IMAGE = "image"
    VIDEO = "video"


class AnalysisMode(Enum):
    """Video analysis modes (sent as the analysis_type form field)"""

    DETAILED = "detailed"
    OVERVIEW = "overview"
    INTERACTION_TRACKING = "interaction_tracking"


# =============================================================================
# SUBMISSION LIFECYCLE
# =============================================================================


class SubmissionState(Enum):
    """Submission state machine states"""

    IDLE = "idle"  # Created, not started
    VALIDATING = "validating"  # Checking type and size
    UPLOADING = "uploading"  # Request in flight
    SUCCEEDED = "succeeded"  # Terminal
    FAILED = "failed"  # Terminal

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionState.SUCCEEDED, SubmissionState.FAILED)


# =============================================================================
# ERRORS
# =============================================================================


class ValidationErrorKind(Enum):
    """Reasons a file is rejected before upload"""

    INVALID_TYPE = "invalid_type"
    TOO_LARGE = "too_large"


class TransportErrorKind(Enum):
    """How a transport attempt failed"""

    TIMEOUT = "timeout"  # Deadline exceeded, request aborted
    ABORTED = "aborted"  # Cancelled by the caller
    NETWORK_FAILURE = "network_failure"  # No HTTP response (DNS, refused, TLS)
    HTTP_STATUS = "http_status"  # Server answered with a non-2xx status


class ErrorCategory(Enum):
    """User-facing error categories"""

    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    SERVER_DETAIL = "server_detail"
    UNKNOWN = "unknown"
    VALIDATION = "validation"
    CANCELLED = "cancelled"
