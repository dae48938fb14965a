"""
Timeout Utilities

Request deadlines per media kind.

Video analysis time grows with file size much faster than upload time,
so the video deadline is estimated from the size instead of being fixed.
"""

from config.settings import (
    IMAGE_TIMEOUT_MS,
    VIDEO_MB_PER_MINUTE,
    VIDEO_TIMEOUT_BASE_MS,
    VIDEO_TIMEOUT_CAP_MS,
    VIDEO_TIMEOUT_PER_GB_MS,
    VIDEO_TIMEOUT_PER_HOUR_MS,
)
from submission.constants import MediaKind


def estimate_video_timeout(file_size_bytes: int) -> int:
    """
    Estimate the deadline for a video submission.

    timeout = base
            + size in GB * per-GB allowance
            + estimated footage hours * per-hour allowance

    capped at VIDEO_TIMEOUT_CAP_MS. Footage length is guessed from the
    size (VIDEO_MB_PER_MINUTE).

    Args:
        file_size_bytes: Video size in bytes

    Returns:
        Deadline in milliseconds

    Example:
        estimate_video_timeout(0)                   # 1800000 (30 min)
        estimate_video_timeout(1024 * 1024 * 1024)  # 5707200 (~95 min)
    """
    size_mb = max(file_size_bytes, 0) / (1024 * 1024)
    estimated_duration_hours = (size_mb / VIDEO_MB_PER_MINUTE) / 60

    timeout = VIDEO_TIMEOUT_BASE_MS
    timeout += (size_mb / 1024) * VIDEO_TIMEOUT_PER_GB_MS
    timeout += estimated_duration_hours * VIDEO_TIMEOUT_PER_HOUR_MS

    return int(min(max(timeout, 0), VIDEO_TIMEOUT_CAP_MS))


def timeout_for(kind: MediaKind, file_size_bytes: int) -> int:
    """Deadline in milliseconds for a submission of the given kind"""
    if kind == MediaKind.VIDEO:
        return estimate_video_timeout(file_size_bytes)
    return IMAGE_TIMEOUT_MS
