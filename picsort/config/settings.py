"""Configuration settings and constants for the picsort package."""

from pathlib import Path
from typing import FrozenSet

# Image file extensions (lowercase, without the dot)
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({
    "jpg", "jpeg", "png", "gif", "bmp", "webp"
})

# Video file extensions
VIDEO_EXTENSIONS: FrozenSet[str] = frozenset({
    "mp4", "webm", "mov", "mkv", "avi", "ogv"
})

# Extensions listed by the directory scanner
SUPPORTED_EXTENSIONS: FrozenSet[str] = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS

# Extensions the change watcher reacts to (images only, plus TIFF)
WATCH_EXTENSIONS: FrozenSet[str] = IMAGE_EXTENSIONS | {"tiff", "tif"}

# Names starting with this marker are hidden
HIDDEN_FILE_PREFIX: str = "."

# Collision resolution: probes name_1.ext .. name_999.ext
MAX_UNIQUE_NAME_ATTEMPTS: int = 999
UNIQUE_NAME_SEPARATOR: str = "_"

# Change watcher timing
DEBOUNCE_SECONDS: float = 0.5
WATCH_POLL_INTERVAL_SECONDS: float = 0.05

# Thumbnail generation
DEFAULT_THUMBNAIL_SIZE: int = 256
THUMBNAIL_FORMAT: str = "JPEG"
THUMBNAIL_SUFFIX: str = ".jpg"
THUMBNAIL_JPEG_QUALITY: int = 85
THUMBNAIL_FILE_MODE: int = 0o644
CACHE_KEY_LENGTH: int = 32
DEFAULT_CACHE_MAX_AGE_DAYS: int = 30

# Video frame extraction (skips the black leading frame of many encodings)
FFMPEG_BINARY: str = "ffmpeg"
VIDEO_FRAME_SEEK_SECONDS: int = 5
VIDEO_FRAME_QUALITY: int = 2

# Default directories
APP_DIR: Path = Path.home() / ".picsort"
DEFAULT_CACHE_DIR: Path = Path.home() / ".cache" / "picsort" / "thumbnails"
DEFAULT_LOG_DIR: Path = APP_DIR / "logs"
DEFAULT_CONFIG_PATH: Path = APP_DIR / "settings.json"

# Logging
LOG_FILENAME: str = "picsort.log"
LOG_ROTATION: str = "10 MB"
LOG_RETENTION: str = "7 days"

# Destination slots kept in the settings file ("1".."5")
DESTINATION_SLOTS: int = 5
DEFAULT_THEME: str = "system"
DEFAULT_LANGUAGE: str = "ja"
