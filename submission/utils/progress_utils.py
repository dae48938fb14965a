"""
Progress Utilities

Turns raw byte counts from the network layer into the percent values a
caller sees. Values are clamped to 0..100, never go backwards, and stop
once the tracker is closed.
"""

import logging
import threading
from typing import Callable, List, Optional

from config.settings import PROGRESS_LOG_STEP
from submission.models.media_file import ProgressEvent

# Callback signature: on_progress(percent_complete)
ProgressCallback = Callable[[int], None]


def calculate_percent(bytes_sent: int, total_bytes: int) -> int:
    """
    Percent of total_bytes sent, rounded and clamped to 0..100.

    An unknown or zero total reports 0 until bytes are actually sent,
    then 100.
    """
    if total_bytes <= 0:
        return 100 if bytes_sent > 0 else 0
    percent = int(round(bytes_sent * 100 / total_bytes))
    return max(0, min(100, percent))


class ProgressTracker:
    """
    Monotonic progress relay for one request.

    The transport calls update() from its I/O thread; the caller's
    callback runs on that same thread, outside the tracker lock, so the
    callback may cancel the submission. close() is called when the
    submission reaches a terminal state, after which updates are ignored.
    Only strictly increasing percents are recorded and delivered.
    """

    def __init__(
        self,
        total_bytes: int,
        on_progress: Optional[ProgressCallback] = None,
        label: str = "upload",
    ):
        self.logger = logging.getLogger(__name__)
        self.total_bytes = total_bytes
        self.on_progress = on_progress
        self.label = label

        self._lock = threading.RLock()
        self._closed = False
        self._last_percent = -1
        self._last_logged = -PROGRESS_LOG_STEP
        self.events: List[ProgressEvent] = []

    @property
    def last_percent(self) -> int:
        return max(self._last_percent, 0)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def set_total(self, total_bytes: int) -> None:
        """Replace the byte total once the transport knows the body length"""
        with self._lock:
            self.total_bytes = total_bytes

    def update(self, bytes_sent: int) -> None:
        """Report the cumulative number of bytes sent so far"""
        percent = calculate_percent(bytes_sent, self.total_bytes)

        with self._lock:
            if self._closed or percent <= self._last_percent:
                return
            self._last_percent = percent
            self.events.append(ProgressEvent(percent_complete=percent))

            if percent >= self._last_logged + PROGRESS_LOG_STEP:
                self.logger.debug(f"{self.label} progress: {percent}%")
                self._last_logged = percent

        # Never call out while holding the lock: the callback may cancel
        # the submission, which closes this tracker from another thread
        if self.on_progress and not self._closed:
            try:
                self.on_progress(percent)
            except Exception as e:
                self.logger.error(f"Error in progress callback: {e}")

    def close(self) -> None:
        """Stop delivering progress"""
        with self._lock:
            self._closed = True
