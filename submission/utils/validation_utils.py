"""
Validation Utilities

Pre-upload checks of a media file against its MediaConstraint.
No I/O: only the name/size/type metadata is inspected.
"""

import logging
from typing import Optional, Sequence

from submission.constants import ValidationErrorKind
from submission.interfaces.transport_interface import SubmissionError
from submission.models.media_file import MediaConstraint, MediaFile
from submission.utils.format_utils import format_size

logger = logging.getLogger(__name__)


class ValidationError(SubmissionError):
    """
    Raised when a file is rejected before upload.

    Attributes:
        kind: INVALID_TYPE or TOO_LARGE
    """

    def __init__(self, message: str, kind: ValidationErrorKind):
        super().__init__(message)
        self.kind = kind


def is_valid_file_type(
    media_file: Optional[MediaFile],
    accepted_types: Optional[Sequence[str]],
) -> bool:
    """Check the file's mime type against a list of accepted types"""
    if not media_file or not accepted_types:
        return False
    return media_file.mime_type in accepted_types


def is_file_too_large(media_file: Optional[MediaFile], max_size: int) -> bool:
    """Check the file's size against a ceiling (missing file is never too large)"""
    if not media_file:
        return False
    return media_file.size > max_size


def validate_media_file(media_file: MediaFile, constraint: MediaConstraint) -> None:
    """
    Validate a file before any network activity.

    Checks, in order:
    1. Mime type is accepted
    2. Size is within the ceiling

    Args:
        media_file: File to check
        constraint: Constraint for the file's media kind

    Raises:
        ValidationError: If the file is rejected

    Example:
        try:
            validate_media_file(media, IMAGE_CONSTRAINT)
        except ValidationError as e:
            print(e)  # "Invalid file type. Please upload: jpeg, png, gif"
    """
    if not is_valid_file_type(media_file, constraint.accepted_mime_types):
        raise ValidationError(
            f"Invalid file type. Please upload: {', '.join(constraint.subtypes)}",
            kind=ValidationErrorKind.INVALID_TYPE,
        )

    if is_file_too_large(media_file, constraint.max_size_bytes):
        raise ValidationError(
            f"File too large. Maximum size is {format_size(constraint.max_size_bytes)}",
            kind=ValidationErrorKind.TOO_LARGE,
        )

    logger.debug(
        f"File validated: {media_file.name} "
        f"({format_size(media_file.size)}, {media_file.mime_type})",
    )
