"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Environment-specific values (service URL, log level) come from .env
- Import these settings in modules: from config.settings import IMAGE_TIMEOUT_MS
- Durations carry their unit in the name (_MS, _SECONDS)
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# ANALYSIS SERVICE
# =============================================================================

# Base URL of the remote analysis service (no trailing slash)
ANALYSIS_API_BASE_URL = os.getenv(
    "ANALYSIS_API_BASE_URL",
    "http://localhost:8000/api",
).rstrip("/")

# Endpoints (relative to ANALYSIS_API_BASE_URL)
VIDEO_ANALYZE_ENDPOINT = "/video/analyze"
IMAGE_ANALYZE_ENDPOINT = "/image/analyze"

# Multipart form field names
FORM_FIELD_FILE = "file"
FORM_FIELD_ANALYSIS_TYPE = "analysis_type"

# Connection setup timeout (seconds) - the overall deadline is separate
HTTP_CONNECT_TIMEOUT_SECONDS = float(os.getenv("HTTP_CONNECT_TIMEOUT_SECONDS", "30"))

# =============================================================================
# MEDIA CONSTRAINTS
# =============================================================================

IMAGE_MIME_TYPES = ("image/jpeg", "image/png", "image/gif")
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif")
IMAGE_MAX_SIZE_BYTES = 20 * 1024 * 1024  # 20 MB

VIDEO_MIME_TYPES = ("video/mp4", "video/quicktime", "video/webm", "video/avi")
VIDEO_EXTENSIONS = ("mp4", "mov", "webm", "avi")
VIDEO_MAX_SIZE_BYTES = 5 * 1024 * 1024 * 1024  # 5 GB

# Extension -> mime type for accepted media, checked before the mimetypes
# module (whose video tables vary between platforms)
MIME_TYPES_BY_EXTENSION = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "webm": "video/webm",
    "avi": "video/avi",
}

# =============================================================================
# TIMEOUTS
# =============================================================================

# Images have a hard 20 MB ceiling, so a fixed deadline is enough
IMAGE_TIMEOUT_MS = 2 * 60 * 1000  # 2 minutes

# Video deadline = BASE + size_gb * PER_GB + estimated_hours * PER_HOUR, capped
VIDEO_TIMEOUT_BASE_MS = 30 * 60 * 1000  # 30 minutes
VIDEO_TIMEOUT_PER_GB_MS = 60 * 60 * 1000  # 1 hour per GB
VIDEO_TIMEOUT_PER_HOUR_MS = 30 * 60 * 1000  # 30 minutes per estimated hour
VIDEO_TIMEOUT_CAP_MS = 2 * 60 * 60 * 1000  # 2 hours

# Rough calibration: 100 MB of HD video is about one minute of footage
VIDEO_MB_PER_MINUTE = 100

# =============================================================================
# ERROR MESSAGES
# =============================================================================

# Videos above this size get the "try overview mode" hint on timeout
LARGE_VIDEO_THRESHOLD_MB = 200

# Server-side upload ceiling quoted in the 413 message
SERVER_MAX_UPLOAD_LABEL = "5GB"

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s | %(name)s"

# Log upload progress at most every N percent
PROGRESS_LOG_STEP = 10
