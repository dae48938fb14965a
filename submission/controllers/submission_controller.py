"""
Submission Controller

High-level entry points for the presentation layer.
One call per media kind; each call gets its own Submission, so an image
and a video submission can run side by side without sharing state.
"""

import logging
from typing import Any, Dict, Optional, Union

from submission.constants import AnalysisMode, MediaKind
from submission.controllers.submission import Submission
from submission.factory import create_transport
from submission.interfaces.transport_interface import TransportInterface
from submission.models.media_file import MediaFile, UploadRequest
from submission.models.results import SubmissionResult
from submission.utils.progress_utils import ProgressCallback


class SubmissionController:
    """
    Media submission controller.

    This class:
    - Provides submit_image / submit_video for the UI
    - Builds the UploadRequest for each media kind
    - Hands out Submission objects when the caller needs to cancel

    Usage:
        controller = SubmissionController()

        result = controller.submit_image(
            MediaFile.from_path("/photos/cat.png"),
            on_progress=lambda percent: print(f"{percent}%"),
        )

        if result.success:
            print(result.result.description)
        else:
            print(result.error.message)
    """

    def __init__(self, transport: Optional[TransportInterface] = None):
        """
        Initialize submission controller.

        Args:
            transport: TransportInterface implementation, or None to auto-create

        Example:
            # Normal usage - configured from .env
            controller = SubmissionController()

            # Custom transport (testing)
            controller = SubmissionController(transport=MockTransport())
        """
        self.logger = logging.getLogger(__name__)

        self.transport = transport or create_transport()

        if not self.transport.is_available():
            self.logger.warning(
                "Transport initialized but not available. "
                "Check ANALYSIS_API_BASE_URL.",
            )

        self.logger.info("Submission Controller initialized")

    # =========================================================================
    # IMAGE
    # =========================================================================

    def prepare_image(
        self,
        media_file: MediaFile,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Submission:
        """Create an image submission without running it"""
        request = UploadRequest(file=media_file, kind=MediaKind.IMAGE)
        return Submission(request, self.transport, on_progress=on_progress)

    def submit_image(
        self,
        media_file: MediaFile,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SubmissionResult:
        """
        Analyze an image.

        Args:
            media_file: Image to submit (jpeg, png, gif up to 20 MB)
            on_progress: Called with upload percent (0-100)

        Returns:
            SubmissionResult with an ImageResult or a ClassifiedError
        """
        return self.prepare_image(media_file, on_progress).run()

    # =========================================================================
    # VIDEO
    # =========================================================================

    def prepare_video(
        self,
        media_file: MediaFile,
        on_progress: Optional[ProgressCallback] = None,
        analysis_mode: Union[AnalysisMode, str] = AnalysisMode.DETAILED,
    ) -> Submission:
        """Create a video submission without running it"""
        request = UploadRequest(
            file=media_file,
            kind=MediaKind.VIDEO,
            analysis_mode=AnalysisMode(analysis_mode),
        )
        return Submission(request, self.transport, on_progress=on_progress)

    def submit_video(
        self,
        media_file: MediaFile,
        on_progress: Optional[ProgressCallback] = None,
        analysis_mode: Union[AnalysisMode, str] = AnalysisMode.DETAILED,
    ) -> SubmissionResult:
        """
        Analyze a video.

        Args:
            media_file: Video to submit (mp4, quicktime, webm, avi up to 5 GB)
            on_progress: Called with upload percent (0-100)
            analysis_mode: detailed, overview or interaction_tracking

        Returns:
            SubmissionResult with a VideoResult or a ClassifiedError

        Example:
            result = controller.submit_video(
                MediaFile.from_path("/videos/session.mp4"),
                analysis_mode=AnalysisMode.OVERVIEW,
            )
        """
        return self.prepare_video(media_file, on_progress, analysis_mode).run()

    # =========================================================================
    # STATUS
    # =========================================================================

    def is_ready(self) -> bool:
        return self.transport.is_available()

    def get_status(self) -> Dict[str, Any]:
        """
        Get current controller status.

        Returns:
            Dictionary with status information
        """
        return {
            "ready": self.is_ready(),
            "transport_type": type(self.transport).__name__,
        }

    def cleanup(self) -> None:
        """Release the transport"""
        self.transport.close()
        self.logger.info("Submission Controller cleanup")
