"""Configuration, settings store and CLI handling."""

from picsort.config.settings import (
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    SUPPORTED_EXTENSIONS,
    WATCH_EXTENSIONS,
    MAX_UNIQUE_NAME_ATTEMPTS,
    DEBOUNCE_SECONDS,
    WATCH_POLL_INTERVAL_SECONDS,
    DEFAULT_THUMBNAIL_SIZE,
    DEFAULT_CACHE_MAX_AGE_DAYS,
    DEFAULT_CACHE_DIR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOG_DIR,
)
from picsort.config.store import (
    Settings,
    load_settings,
    save_settings,
)

__all__ = [
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "SUPPORTED_EXTENSIONS",
    "WATCH_EXTENSIONS",
    "MAX_UNIQUE_NAME_ATTEMPTS",
    "DEBOUNCE_SECONDS",
    "WATCH_POLL_INTERVAL_SECONDS",
    "DEFAULT_THUMBNAIL_SIZE",
    "DEFAULT_CACHE_MAX_AGE_DAYS",
    "DEFAULT_CACHE_DIR",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_LOG_DIR",
    "Settings",
    "load_settings",
    "save_settings",
]
