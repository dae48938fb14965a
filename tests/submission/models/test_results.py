"""
Model Tests

To run:
    pytest tests/submission/models/test_results.py -v
"""

import mimetypes

import pytest

from submission import (
    IMAGE_CONSTRAINT,
    VIDEO_CONSTRAINT,
    AnalysisMode,
    ErrorCategory,
    ImageResult,
    MediaFile,
    MediaKind,
    SubmissionResult,
    SubmissionState,
    UploadRequest,
    VideoResult,
)
from submission.models.results import ClassifiedError, VideoSection

# =============================================================================
# MEDIA FILE
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("photo.jpg", "image/jpeg"),
        ("photo.png", "image/png"),
        ("clip.mp4", "video/mp4"),
        ("clip.mov", "video/quicktime"),
        ("clip.webm", "video/webm"),
        ("clip.avi", "video/avi"),
        ("CLIP.MOV", "video/quicktime"),
    ],
)
def test_from_path_guesses_type(tmp_path, name, expected):
    path = tmp_path / name
    path.write_bytes(b"0" * 10)

    media = MediaFile.from_path(path)

    assert media.mime_type == expected
    assert media.size == 10
    assert media.name == name


@pytest.mark.unit
def test_import_leaves_mimetypes_registry_alone():
    assert mimetypes.guess_type("clip.avi")[0] != "video/avi"


@pytest.mark.unit
def test_from_path_unknown_extension(tmp_path):
    path = tmp_path / "notes.zzz"
    path.write_bytes(b"hello")

    assert MediaFile.from_path(path).mime_type == "application/octet-stream"


@pytest.mark.unit
def test_from_path_type_override(tmp_path):
    path = tmp_path / "upload"
    path.write_bytes(b"GIF89a")

    assert MediaFile.from_path(path, mime_type="image/gif").mime_type == "image/gif"


@pytest.mark.unit
def test_open_reads_contents(video_file_on_disk):
    media = MediaFile.from_path(str(video_file_on_disk))

    with media.open() as fh:
        assert len(fh.read()) == media.size


@pytest.mark.unit
def test_open_without_content_raises():
    with pytest.raises(ValueError):
        MediaFile(name="ghost.png", size=1, mime_type="image/png").open()


@pytest.mark.unit
def test_size_mb():
    media = MediaFile.from_bytes("a.png", b"0" * (3 * 1024 * 1024), "image/png")

    assert media.size_mb == 3.0


@pytest.mark.unit
def test_constraints():
    assert IMAGE_CONSTRAINT.accepts_type("image/png")
    assert not IMAGE_CONSTRAINT.accepts_type("image/webp")
    assert not IMAGE_CONSTRAINT.accepts_type(None)
    assert VIDEO_CONSTRAINT.accepts_type("video/quicktime")
    assert IMAGE_CONSTRAINT.subtypes == ["jpeg", "png", "gif"]


@pytest.mark.unit
def test_form_fields_only_for_video(small_png_file, mp4_file):
    image = UploadRequest(file=small_png_file, kind=MediaKind.IMAGE, analysis_mode=AnalysisMode.OVERVIEW)
    video = UploadRequest(file=mp4_file, kind=MediaKind.VIDEO, analysis_mode=AnalysisMode.OVERVIEW)

    assert image.form_fields() == {}
    assert video.form_fields() == {"analysis_type": "overview"}


# =============================================================================
# RESULTS
# =============================================================================


@pytest.mark.unit
def test_image_result_full_payload():
    payload = {
        "description": "A red car",
        "technical_details": {"width": 640},
        "objects": ["car"],
        "text": ["STOP"],
        "extra": "ignored",
    }

    assert ImageResult.from_payload(payload) == ImageResult(
        "A red car", {"width": 640}, ["car"], ["STOP"],
    )


@pytest.mark.unit
@pytest.mark.parametrize("payload", [None, {}, {"description": None, "text": None}])
def test_image_result_defaults(payload):
    result = ImageResult.from_payload(payload)

    assert result.description == "No description available"
    assert result.technical_details == {}
    assert result.objects == []
    assert result.text == []


@pytest.mark.unit
def test_video_result_missing_output():
    assert VideoResult.from_payload({"detail": "x"}).output == ""


@pytest.mark.unit
def test_video_sections():
    result = VideoResult("Summary:\n\nA person walks in.\n\n\n\nTIMELINE:\n\n00:01 enters\n00:04 sits")

    assert result.sections() == [
        VideoSection("Summary:", True),
        VideoSection("A person walks in."),
        VideoSection("TIMELINE:", True),
        VideoSection("00:01 enters\n00:04 sits"),
    ]


@pytest.mark.unit
def test_video_sections_empty():
    assert VideoResult("").sections() == []


@pytest.mark.unit
def test_submission_result_error_message():
    error = ClassifiedError(ErrorCategory.UNKNOWN, "Failed to analyze image. Please try again.", True)
    failed = SubmissionResult(success=False, error=error, state=SubmissionState.FAILED)

    assert failed.error_message == "Failed to analyze image. Please try again."
    assert SubmissionResult(success=True).error_message is None
