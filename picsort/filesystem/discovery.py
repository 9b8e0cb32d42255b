"""Directory scanning for supported media files."""

import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from loguru import logger

from picsort.config.settings import SUPPORTED_EXTENSIONS, VIDEO_EXTENSIONS
from picsort.exceptions import InvalidDirectoryError, ReadFailedError
from picsort.filesystem.paths import is_hidden, natural_sort_key
from picsort.models.media import MediaEntry


def get_extension(name: Union[str, Path]) -> str:
    """Return the lowercase extension of a name, without the dot."""
    return Path(name).suffix.lower().lstrip(".")


def is_supported_media(name: Union[str, Path]) -> bool:
    """Check if a file name has a supported image or video extension."""
    return get_extension(name) in SUPPORTED_EXTENSIONS


def is_video_file(name: Union[str, Path]) -> bool:
    """Check if a file name has a video extension (case-insensitive)."""
    return get_extension(name) in VIDEO_EXTENSIONS


def scan_media(directory: Union[str, Path]) -> List[MediaEntry]:
    """
    List the supported media files of a directory.

    Not recursive. Hidden entries, symbolic links (whatever they point to),
    sub-directories and unsupported extensions are skipped. Metadata that
    cannot be read leaves size/modified_at empty instead of failing the scan.

    Args:
        directory: Directory to scan.

    Returns:
        MediaEntry list in natural order of the file names.

    Raises:
        InvalidDirectoryError: If directory is not a directory.
        ReadFailedError: If the directory cannot be enumerated.
    """
    directory = Path(directory).absolute()
    logger.debug(f"Scanning: {directory}")

    if not directory.is_dir():
        logger.error(f"Not a directory: {directory}")
        raise InvalidDirectoryError(f"Not a directory: {directory}")

    entries: List[MediaEntry] = []
    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                entry = _to_media_entry(dir_entry)
                if entry is not None:
                    entries.append(entry)
    except OSError as e:
        logger.error(f"Error reading directory {directory}: {e}")
        raise ReadFailedError(f"Failed to read directory {directory}: {e}") from e

    entries.sort(key=lambda entry: natural_sort_key(entry.name))
    logger.info(f"Scan complete: {directory} - {len(entries)} media file(s)")
    return entries


def count_media(directory: Union[str, Path]) -> int:
    """Count the supported media files of a directory."""
    return len(scan_media(directory))


def _to_media_entry(dir_entry: "os.DirEntry[str]") -> Optional[MediaEntry]:
    name = dir_entry.name
    if is_hidden(name) or not is_supported_media(name):
        return None

    try:
        if dir_entry.is_symlink() or dir_entry.is_dir(follow_symlinks=False):
            return None
    except OSError as e:
        logger.debug(f"Cannot determine type of {dir_entry.path}: {e}")

    size, modified_at = _read_metadata(dir_entry)
    return MediaEntry(
        path=Path(dir_entry.path),
        name=name,
        size=size,
        modified_at=modified_at,
    )


def _read_metadata(dir_entry: "os.DirEntry[str]") -> Tuple[Optional[int], Optional[int]]:
    try:
        stat = dir_entry.stat(follow_symlinks=False)
    except OSError as e:
        logger.warning(f"Cannot read metadata for {dir_entry.path}: {e}")
        return None, None
    return stat.st_size, int(stat.st_mtime)
