"""
Result Models

What a submission hands back to its caller: an analysis result on
success, a classified error on failure, wrapped in SubmissionResult.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from submission.constants import ErrorCategory, SubmissionState

DEFAULT_IMAGE_DESCRIPTION = "No description available"

# Lines the video narrative uses as section headers
VIDEO_SECTION_HEADERS = ("timeline:", "summary:")


@dataclass
class ImageResult:
    """Normalized image analysis"""

    description: str = DEFAULT_IMAGE_DESCRIPTION
    technical_details: Dict[str, Any] = field(default_factory=dict)
    objects: List[Any] = field(default_factory=list)
    text: List[Any] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "ImageResult":
        """
        Build from the server's JSON body.

        Every field is optional on the wire; missing or null fields get
        their defaults instead of failing.
        """
        payload = payload or {}
        return cls(
            description=payload.get("description") or DEFAULT_IMAGE_DESCRIPTION,
            technical_details=payload.get("technical_details") or {},
            objects=payload.get("objects") or [],
            text=payload.get("text") or [],
        )


@dataclass
class VideoSection:
    """One blank-line separated block of the video narrative"""

    text: str
    is_header: bool = False


@dataclass
class VideoResult:
    """Raw video analysis narrative"""

    output: str = ""

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "VideoResult":
        payload = payload or {}
        return cls(output=payload.get("output") or "")

    def sections(self) -> List[VideoSection]:
        """
        Split the narrative into sections.

        Sections are separated by blank lines. A section consisting only
        of "Timeline:" or "Summary:" (any case) is marked as a header.

        Example:
            VideoResult("Summary:\\n\\nA person walks in.").sections()
            # [VideoSection("Summary:", True), VideoSection("A person walks in.")]
        """
        sections = []
        for block in self.output.split("\n\n"):
            if not block.strip():
                continue
            is_header = block.strip().lower() in VIDEO_SECTION_HEADERS
            sections.append(VideoSection(text=block, is_header=is_header))
        return sections


AnalysisResult = Union[ImageResult, VideoResult]


@dataclass(frozen=True)
class ClassifiedError:
    """
    Final, user-facing error.

    Attributes:
        category: What went wrong
        message: Text to show the user as-is
        retriable: Hint that offering a retry makes sense
    """

    category: ErrorCategory
    message: str
    retriable: bool = False


@dataclass
class SubmissionResult:
    """
    Result of one submission.

    Attributes:
        success: True if analysis completed
        result: ImageResult or VideoResult (if successful)
        error: Classified error (if failed)
        state: Terminal state of the submission
        duration: Seconds from start to terminal state
        file_size: Size of the submitted file in bytes
    """

    success: bool
    result: Optional[AnalysisResult] = None
    error: Optional[ClassifiedError] = None
    state: SubmissionState = SubmissionState.SUCCEEDED
    duration: float = 0.0
    file_size: int = 0

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None
