"""Path helpers: collision-free destinations and natural ordering."""

import re
from pathlib import Path
from typing import Any, Tuple, Union

from loguru import logger

from picsort.config.settings import (
    HIDDEN_FILE_PREFIX,
    MAX_UNIQUE_NAME_ATTEMPTS,
    UNIQUE_NAME_SEPARATOR,
)
from picsort.exceptions import InvalidNameError, NameSpaceExhaustedError

_DIGITS = re.compile(r"([0-9]+)")
_DIGIT_CODE = ord("0")


def validate_file_name(name: str) -> str:
    """
    Check that a name designates a single directory entry.

    Args:
        name: Candidate file name.

    Returns:
        The name, unchanged.

    Raises:
        InvalidNameError: If the name is empty, a dot entry, or contains
            a path separator.
    """
    if not name or name in {".", ".."}:
        raise InvalidNameError(f"Invalid file name: {name!r}")
    if "/" in name or "\\" in name or "\x00" in name:
        raise InvalidNameError(f"File name must not contain separators: {name!r}")
    return name


def split_name(name: str) -> Tuple[str, str]:
    """
    Split a file name into stem and extension.

    Only the last extension is split off ("a.tar.gz" -> "a.tar", ".gz"),
    and a leading dot does not start an extension (".hidden" -> ".hidden", "").

    Args:
        name: File name.

    Returns:
        Tuple of (stem, extension including the dot, or "").
    """
    path = Path(name)
    return path.stem, path.suffix


def ensure_unique_destination(
    directory: Union[str, Path],
    desired_name: str,
    max_attempts: int = MAX_UNIQUE_NAME_ATTEMPTS,
) -> Path:
    """
    Return a path in directory that does not exist yet.

    Returns directory/desired_name when free, otherwise probes
    stem_1.ext, stem_2.ext, ... up to max_attempts. The name is kept
    as is (including non-ASCII characters); only an ASCII counter is
    inserted before the extension.

    The existence check and the caller's later claim are not atomic:
    concurrent writers into the same directory must serialize themselves.

    Args:
        directory: Destination directory.
        desired_name: Wanted file name.
        max_attempts: Number of suffixed candidates to try.

    Returns:
        First unoccupied candidate path.

    Raises:
        InvalidNameError: If desired_name is not a plain file name.
        NameSpaceExhaustedError: If every candidate is taken.
    """
    validate_file_name(desired_name)
    directory = Path(directory)

    candidate = directory / desired_name
    if not _occupied(candidate):
        return candidate

    stem, extension = split_name(desired_name)
    for counter in range(1, max_attempts + 1):
        candidate = directory / f"{stem}{UNIQUE_NAME_SEPARATOR}{counter}{extension}"
        if not _occupied(candidate):
            logger.debug(f"Name collision resolved: {desired_name} -> {candidate.name}")
            return candidate

    raise NameSpaceExhaustedError(
        f"Could not generate unique filename for {desired_name} in {directory} "
        f"after {max_attempts} attempts"
    )


def _occupied(path: Path) -> bool:
    """True if anything (including a dangling symlink) sits at path."""
    return path.exists() or path.is_symlink()


def natural_sort_key(name: str) -> Tuple[Any, ...]:
    """
    Sort key comparing embedded numbers by value ("img2" < "img10").

    Other characters compare one by one by code point, case-sensitively
    ("B" < "a", "img.jpg" < "img1.jpg"), and whitespace is ignored.

    Args:
        name: Display name.

    Returns:
        Tuple of per-character and per-number parts, followed by the raw
        name so that equal keys still order deterministically.
    """
    parts = []
    for index, part in enumerate(_DIGITS.split(name)):
        if index % 2:
            # a digit run ranks like its first digit against any other character
            parts.append((_DIGIT_CODE, int(part), part))
        else:
            parts.extend((ord(char), 0, "") for char in part if not char.isspace())
    return tuple(parts), name


def is_hidden(name: str) -> bool:
    """Check if a name starts with the hidden-file marker."""
    return name.startswith(HIDDEN_FILE_PREFIX)
