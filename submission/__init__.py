"""
Submission Module

Upload-and-analyze pipeline for images and videos.

Public API:
    - SubmissionController: Entry points (submit_image / submit_video)
    - Submission: One in-flight submission (run / cancel)
    - MediaFile: File to submit
    - SubmissionResult, ImageResult, VideoResult, ClassifiedError: Results
    - AnalysisMode, ErrorCategory, SubmissionState: Enums
    - create_transport: Factory function

Usage:
    from submission import MediaFile, SubmissionController

    controller = SubmissionController()
    result = controller.submit_video(
        MediaFile.from_path("/path/to/video.mp4"),
        on_progress=lambda percent: print(f"{percent}%"),
        analysis_mode="overview",
    )
"""

from submission.constants import (
    AnalysisMode,
    ErrorCategory,
    MediaKind,
    SubmissionState,
    TransportErrorKind,
    ValidationErrorKind,
)
from submission.controllers.submission import Submission
from submission.controllers.submission_controller import SubmissionController
from submission.factory import TransportFactory, create_transport
from submission.interfaces.transport_interface import (
    SubmissionError,
    TransportInterface,
    TransportOutcome,
)
from submission.models.media_file import (
    IMAGE_CONSTRAINT,
    VIDEO_CONSTRAINT,
    MediaConstraint,
    MediaFile,
    ProgressEvent,
    UploadRequest,
)
from submission.models.results import (
    ClassifiedError,
    ImageResult,
    SubmissionResult,
    VideoResult,
)
from submission.utils.format_utils import format_size
from submission.utils.validation_utils import ValidationError

# Public API
__all__ = [
    "IMAGE_CONSTRAINT",
    "VIDEO_CONSTRAINT",
    "AnalysisMode",
    "ClassifiedError",
    "ErrorCategory",
    "ImageResult",
    "MediaConstraint",
    "MediaFile",
    "MediaKind",
    "ProgressEvent",
    "Submission",
    "SubmissionController",
    "SubmissionError",
    "SubmissionResult",
    "SubmissionState",
    "TransportErrorKind",
    "TransportFactory",
    "TransportInterface",
    "TransportOutcome",
    "UploadRequest",
    "ValidationError",
    "ValidationErrorKind",
    "VideoResult",
    "create_transport",
    "format_size",
]
