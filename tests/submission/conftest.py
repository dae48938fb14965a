"""
Submission Test Configuration and Fixtures

Shared fixtures for submission module tests.

To run:
    pytest tests/submission/
"""

import json
import threading

import httpx
import pytest

from submission import MediaFile, SubmissionController
from submission.implementations.http_transport import HttpTransport
from submission.implementations.mock_transport import MockTransport

BASE_URL = "http://analysis.test/api"


# =============================================================================
# MEDIA FIXTURES
# =============================================================================


@pytest.fixture
def png_file():
    """A 10 MB in-memory PNG"""
    return MediaFile.from_bytes("cat.png", b"\x89PNG" + b"0" * (10 * 1024 * 1024 - 4), "image/png")


@pytest.fixture
def small_png_file():
    """A tiny in-memory PNG (fast multipart encoding)"""
    return MediaFile.from_bytes("dot.png", b"\x89PNG" + b"0" * 2048, "image/png")


@pytest.fixture
def mp4_file():
    """A small in-memory MP4"""
    return MediaFile.from_bytes("clip.mp4", b"0" * (256 * 1024), "video/mp4")


@pytest.fixture
def video_file_on_disk(tmp_path):
    """
    A small .mp4 on disk.

    Usage:
        def test_from_disk(video_file_on_disk):
            media = MediaFile.from_path(video_file_on_disk)
    """
    path = tmp_path / "session.mp4"
    path.write_bytes(b"0" * (128 * 1024))
    return path


# =============================================================================
# TRANSPORT FIXTURES
# =============================================================================


@pytest.fixture
def mock_transport():
    """MockTransport with default canned responses"""
    transport = MockTransport()
    yield transport
    transport.close()


@pytest.fixture
def controller(mock_transport):
    """SubmissionController backed by MockTransport"""
    controller = SubmissionController(transport=mock_transport)
    yield controller
    controller.cleanup()


class RecordingHandler:
    """
    httpx.MockTransport handler that reads the request body (driving
    progress) and answers with a fixed response.

    Attributes:
        requests: Every request seen, with its body already read
    """

    def __init__(self, status_code=200, json_body=None, text=None, delay=0.0, error=None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.delay = delay
        self.error = error
        self.requests = []
        self.release = threading.Event()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)

        if self.error is not None:
            raise self.error
        if self.delay:
            # Wait for the test to release us, or for the delay to pass
            self.release.wait(self.delay)

        if self.text is not None:
            return httpx.Response(
                self.status_code,
                text=self.text,
                headers={"content-type": "text/html"},
            )
        return httpx.Response(
            self.status_code,
            content=json.dumps(self.json_body or {}).encode(),
            headers={"content-type": "application/json"},
        )


@pytest.fixture
def make_http_transport():
    """
    Build an HttpTransport answering through a RecordingHandler.

    Usage:
        def test_upload(make_http_transport):
            transport, handler = make_http_transport(json_body={"output": "ok"})
    """
    handlers = []

    def _make(**handler_kwargs):
        handler = RecordingHandler(**handler_kwargs)
        handlers.append(handler)
        transport = HttpTransport(
            base_url=BASE_URL,
            http_transport=httpx.MockTransport(handler),
        )
        return transport, handler

    yield _make

    # Unblock any handler still waiting so worker threads exit
    for handler in handlers:
        handler.release.set()


# =============================================================================
# HELPER FIXTURES
# =============================================================================


@pytest.fixture
def progress_recorder():
    """
    Collects percent values passed to on_progress.

    Usage:
        def test_progress(controller, png_file, progress_recorder):
            controller.submit_image(png_file, on_progress=progress_recorder)
            assert progress_recorder.values[-1] == 100
    """

    class ProgressRecorder:
        def __init__(self):
            self.values = []
            self._lock = threading.Lock()

        def __call__(self, percent):
            with self._lock:
                self.values.append(percent)

        def was_called(self) -> bool:
            return len(self.values) > 0

        def is_monotonic(self) -> bool:
            return all(a <= b for a, b in zip(self.values, self.values[1:]))

        def in_bounds(self) -> bool:
            return all(0 <= v <= 100 for v in self.values)

    return ProgressRecorder()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Full integration tests")
    config.addinivalue_line("markers", "slow: Slow tests (use sparingly)")
