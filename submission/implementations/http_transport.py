"""
HTTP Transport Implementation

Concrete implementation of TransportInterface using httpx.
Sends the file as multipart/form-data, relays body progress, and
enforces the submission deadline over the whole request/response cycle.
"""

import logging
import threading
import time
from typing import Any, Dict, Iterator, Optional

import httpx

from config.settings import (
    ANALYSIS_API_BASE_URL,
    FORM_FIELD_FILE,
    HTTP_CONNECT_TIMEOUT_SECONDS,
)
from submission.constants import TransportErrorKind
from submission.interfaces.transport_interface import (
    TransportInterface,
    TransportOutcome,
)
from submission.models.media_file import UploadRequest
from submission.utils.progress_utils import ProgressTracker

# How often the waiting thread checks for cancellation (seconds)
CANCEL_POLL_INTERVAL = 0.05

# Non-JSON error bodies are kept for logs, truncated to this length
MAX_RAW_BODY_CHARS = 20_000


class UploadInterrupted(Exception):
    """Raised inside the body stream to stop sending after abort"""


def _is_json_response(resp: httpx.Response) -> bool:
    ct = (resp.headers.get("content-type") or "").lower()
    return "application/json" in ct or ct.endswith("+json")


def _cap_text(s: str, *, max_chars: int) -> str:
    if len(s) <= max_chars:
        return s
    return s[:max_chars] + f"...(truncated, {len(s)} chars)"


def parse_response_payload(resp: httpx.Response) -> Dict[str, Any]:
    """Parse a response body into a dict, whatever the server sent"""
    if _is_json_response(resp):
        try:
            parsed = resp.json()
            return parsed if isinstance(parsed, dict) else {"data": parsed}
        except ValueError:
            return {"raw": _cap_text(resp.text, max_chars=MAX_RAW_BODY_CHARS)}
    if not resp.content:
        return {}
    return {
        "raw": _cap_text(resp.text, max_chars=MAX_RAW_BODY_CHARS),
        "content_type": resp.headers.get("content-type"),
    }


class ProgressStream(httpx.SyncByteStream):
    """
    Request body wrapper that counts bytes as httpx pulls them.

    Each chunk handed to the network layer is one progress update.
    Setting abort_event stops the upload at the next chunk.
    """

    def __init__(
        self,
        stream: Any,
        progress: ProgressTracker,
        abort_event: threading.Event,
    ):
        self._stream = stream
        self._progress = progress
        self._abort_event = abort_event

    def __iter__(self) -> Iterator[bytes]:
        bytes_sent = 0
        self._progress.update(0)
        for chunk in self._stream:
            if self._abort_event.is_set():
                raise UploadInterrupted("Upload aborted")
            bytes_sent += len(chunk)
            self._progress.update(bytes_sent)
            yield chunk

    def close(self) -> None:
        close = getattr(self._stream, "close", None)
        if close:
            close()


class HttpTransport(TransportInterface):
    """
    Multipart upload over HTTP.

    Features:
    - One httpx.Client per upload, so aborting one submission never
      disturbs another running concurrently
    - Hard deadline: the request runs on a worker thread and is torn down
      when the deadline passes or the caller cancels
    - No retries
    """

    def __init__(
        self,
        base_url: str = ANALYSIS_API_BASE_URL,
        connect_timeout: float = HTTP_CONNECT_TIMEOUT_SECONDS,
        http_transport: Optional[httpx.BaseTransport] = None,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize HTTP transport.

        Args:
            base_url: Analysis service base URL
            connect_timeout: Connection setup timeout in seconds
            http_transport: httpx transport override (httpx.MockTransport in tests)
            default_headers: Headers added to every request

        Example:
            transport = HttpTransport("https://analysis.example.com/api")
        """
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url.rstrip("/")
        self.connect_timeout = connect_timeout
        self._http_transport = http_transport
        self._default_headers = dict(default_headers or {})
        self._closed = False

        self.logger.info(f"HTTP Transport initialized ({self.base_url})")

    def _create_client(self, timeout_seconds: float) -> httpx.Client:
        timeout = httpx.Timeout(
            timeout_seconds,
            connect=min(self.connect_timeout, timeout_seconds),
        )
        return httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=self._default_headers,
            transport=self._http_transport,
        )

    def upload(
        self,
        endpoint: str,
        request: UploadRequest,
        timeout_ms: int,
        progress: ProgressTracker,
        cancel_event: Optional[threading.Event] = None,
    ) -> TransportOutcome:
        """
        POST the file to endpoint and wait for the response.

        Returns:
            TransportOutcome (never raises for network/HTTP failures)
        """
        cancel_event = cancel_event or threading.Event()
        start_time = time.monotonic()
        deadline = start_time + timeout_ms / 1000

        def elapsed_ms() -> int:
            return int((time.monotonic() - start_time) * 1000)

        if cancel_event.is_set():
            return TransportOutcome(
                ok=False,
                error_kind=TransportErrorKind.ABORTED,
                error_message="Cancelled before upload started",
            )

        self.logger.info(
            f"Starting upload: {request.file.name} -> {endpoint} "
            f"({request.file.size} bytes, deadline {timeout_ms} ms)",
        )

        file_handle = request.file.open()
        client = self._create_client(timeout_ms / 1000)
        abort_event = threading.Event()
        finished = threading.Event()
        box: Dict[str, Any] = {}

        try:
            http_request = client.build_request(
                "POST",
                endpoint,
                data=request.form_fields(),
                files={
                    FORM_FIELD_FILE: (
                        request.file.name,
                        file_handle,
                        request.file.mime_type,
                    ),
                },
            )
            content_length = http_request.headers.get("Content-Length")
            progress.set_total(int(content_length) if content_length else request.file.size)
            http_request.stream = ProgressStream(http_request.stream, progress, abort_event)

            def send() -> None:
                try:
                    box["response"] = client.send(http_request)
                except Exception as e:
                    box["error"] = e
                finally:
                    finished.set()

            worker = threading.Thread(
                target=send,
                name=f"upload-{request.kind.value}",
                daemon=True,
            )
            worker.start()

            abort_kind = None
            while not finished.wait(CANCEL_POLL_INTERVAL):
                if cancel_event.is_set():
                    abort_kind = TransportErrorKind.ABORTED
                    break
                if time.monotonic() >= deadline:
                    abort_kind = TransportErrorKind.TIMEOUT
                    break

            if abort_kind is not None and not finished.is_set():
                # Stop sending and tear down the connection under the worker
                abort_event.set()
                client.close()
                message = (
                    f"Upload timed out after {timeout_ms} ms"
                    if abort_kind == TransportErrorKind.TIMEOUT
                    else "Upload cancelled"
                )
                self.logger.warning(f"{message}: {request.file.name}")
                return TransportOutcome(
                    ok=False,
                    error_kind=abort_kind,
                    error_message=message,
                    elapsed_ms=elapsed_ms(),
                )

            if "error" in box:
                return self._outcome_from_exception(box["error"], elapsed_ms())

            return self._outcome_from_response(box["response"], elapsed_ms())

        finally:
            abort_event.set()
            client.close()
            file_handle.close()

    def _outcome_from_response(
        self,
        response: httpx.Response,
        elapsed: int,
    ) -> TransportOutcome:
        payload = parse_response_payload(response)

        if 200 <= response.status_code < 300:
            self.logger.debug(f"Response {response.status_code} in {elapsed} ms")
            return TransportOutcome(
                ok=True,
                status_code=response.status_code,
                payload=payload,
                elapsed_ms=elapsed,
            )

        self.logger.warning(f"Server returned HTTP {response.status_code}")
        return TransportOutcome(
            ok=False,
            status_code=response.status_code,
            payload=payload,
            error_kind=TransportErrorKind.HTTP_STATUS,
            error_message=f"HTTP {response.status_code}",
            elapsed_ms=elapsed,
        )

    def _outcome_from_exception(self, error: Exception, elapsed: int) -> TransportOutcome:
        """
        Map an exception raised by client.send() to an outcome.

        Args:
            error: Exception from the worker thread
            elapsed: Milliseconds since the upload started

        Returns:
            Failed TransportOutcome
        """
        if isinstance(error, (httpx.ConnectTimeout, httpx.PoolTimeout)):
            # Never reached the server; the analysis deadline did not expire
            kind = TransportErrorKind.NETWORK_FAILURE
        elif isinstance(error, httpx.TimeoutException):
            # Read/write timeouts are set to the submission deadline
            kind = TransportErrorKind.TIMEOUT
        elif isinstance(error, UploadInterrupted):
            kind = TransportErrorKind.ABORTED
        elif isinstance(error, httpx.RequestError):
            # DNS errors, connection refused, TLS, etc.
            kind = TransportErrorKind.NETWORK_FAILURE
        else:
            self.logger.error(f"Unexpected upload error: {error}", exc_info=error)
            kind = TransportErrorKind.NETWORK_FAILURE

        self.logger.warning(f"Upload failed ({kind.value}): {error}")
        return TransportOutcome(
            ok=False,
            error_kind=kind,
            error_message=str(error),
            elapsed_ms=elapsed,
        )

    def is_available(self) -> bool:
        """Ready whenever a base URL is configured and not closed"""
        return bool(self.base_url) and not self._closed

    def close(self) -> None:
        self._closed = True
        self.logger.info("HTTP Transport closed")
