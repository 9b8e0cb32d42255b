"""Filesystem operations for media organization."""

from picsort.filesystem.paths import (
    ensure_unique_destination,
    validate_file_name,
    split_name,
    natural_sort_key,
    is_hidden,
)
from picsort.filesystem.file_ops import (
    move_file,
    undo_move,
    move_files_batch,
)
from picsort.filesystem.discovery import (
    get_extension,
    is_supported_media,
    is_video_file,
    scan_media,
    count_media,
)

__all__ = [
    "ensure_unique_destination",
    "validate_file_name",
    "split_name",
    "natural_sort_key",
    "is_hidden",
    "move_file",
    "undo_move",
    "move_files_batch",
    "get_extension",
    "is_supported_media",
    "is_video_file",
    "scan_media",
    "count_media",
]
