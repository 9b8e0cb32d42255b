"""Thumbnail generation and caching."""

from picsort.thumbnails.cache import ThumbnailCache
from picsort.thumbnails.generators import (
    generate_image_thumbnail,
    generate_video_thumbnail,
    build_frame_command,
)

__all__ = [
    "ThumbnailCache",
    "generate_image_thumbnail",
    "generate_video_thumbnail",
    "build_frame_command",
]
