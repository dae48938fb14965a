"""
Media File Models

Data classes describing what gets submitted: the file itself, the
constraints it must satisfy, and the per-submission upload request.
"""

import io
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple, Union

from config.settings import (
    FORM_FIELD_ANALYSIS_TYPE,
    IMAGE_EXTENSIONS,
    IMAGE_MAX_SIZE_BYTES,
    IMAGE_MIME_TYPES,
    MIME_TYPES_BY_EXTENSION,
    VIDEO_EXTENSIONS,
    VIDEO_MAX_SIZE_BYTES,
    VIDEO_MIME_TYPES,
)
from submission.constants import AnalysisMode, MediaKind


@dataclass(frozen=True)
class MediaConstraint:
    """
    Accepted types and size ceiling for one media kind.

    Attributes:
        accepted_mime_types: Full mime types, e.g. "image/png" (declaration
            order is kept so error messages list them predictably)
        max_size_bytes: Largest accepted file size
        extensions: File extensions (without dot) for file pickers
    """

    accepted_mime_types: Tuple[str, ...]
    max_size_bytes: int
    extensions: Tuple[str, ...] = ()

    def accepts_type(self, mime_type: Optional[str]) -> bool:
        return mime_type in self.accepted_mime_types

    @property
    def subtypes(self) -> List[str]:
        """Mime subtypes, e.g. ["jpeg", "png", "gif"]"""
        return [mime.split("/", 1)[-1] for mime in self.accepted_mime_types]


IMAGE_CONSTRAINT = MediaConstraint(
    accepted_mime_types=tuple(IMAGE_MIME_TYPES),
    max_size_bytes=IMAGE_MAX_SIZE_BYTES,
    extensions=IMAGE_EXTENSIONS,
)

VIDEO_CONSTRAINT = MediaConstraint(
    accepted_mime_types=tuple(VIDEO_MIME_TYPES),
    max_size_bytes=VIDEO_MAX_SIZE_BYTES,
    extensions=VIDEO_EXTENSIONS,
)


def constraint_for(kind: MediaKind) -> MediaConstraint:
    """Get the constraint that applies to a media kind"""
    return IMAGE_CONSTRAINT if kind == MediaKind.IMAGE else VIDEO_CONSTRAINT


@dataclass
class MediaFile:
    """
    A user-selected file, either on disk or in memory.

    Exactly one of path/data is set. The bytes are only read when the
    transport opens the file.
    """

    name: str
    size: int
    mime_type: str

    # Backing storage
    path: Optional[Path] = None
    data: Optional[bytes] = None

    def __post_init__(self):
        """Ensure path is a Path object"""
        if self.path is not None and not isinstance(self.path, Path):
            self.path = Path(self.path)

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        mime_type: Optional[str] = None,
    ) -> "MediaFile":
        """
        Describe a file on disk.

        Args:
            path: Path to the file
            mime_type: Override the type guessed from the extension

        Example:
            media = MediaFile.from_path("/videos/session.mp4")
            media.mime_type  # "video/mp4"
        """
        path = Path(path)
        guessed = MIME_TYPES_BY_EXTENSION.get(path.suffix.lower().lstrip("."))
        if guessed is None:
            guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            size=path.stat().st_size,
            mime_type=mime_type or guessed or "application/octet-stream",
            path=path,
        )

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: str) -> "MediaFile":
        """Describe an in-memory file (drag-and-drop buffers, tests)"""
        return cls(name=name, size=len(data), mime_type=mime_type, data=data)

    @property
    def size_mb(self) -> float:
        return self.size / (1024 * 1024)

    def open(self) -> BinaryIO:
        """Open the file contents for reading. Caller closes the handle."""
        if self.data is not None:
            return io.BytesIO(self.data)
        if self.path is None:
            raise ValueError(f"Media file has no content: {self.name}")
        return self.path.open("rb")


@dataclass(frozen=True)
class UploadRequest:
    """
    One submission's worth of upload parameters.

    analysis_mode is only sent for video submissions.
    """

    file: MediaFile
    kind: MediaKind
    analysis_mode: Optional[AnalysisMode] = None

    def form_fields(self) -> dict:
        """Non-file multipart fields for this request"""
        if self.kind == MediaKind.VIDEO and self.analysis_mode is not None:
            return {FORM_FIELD_ANALYSIS_TYPE: self.analysis_mode.value}
        return {}


@dataclass(frozen=True)
class ProgressEvent:
    """Upload progress, 0..100"""

    percent_complete: int
