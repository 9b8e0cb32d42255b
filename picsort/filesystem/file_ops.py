"""File operations for moving files, undoing moves and batch moves."""

import errno
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Union

from loguru import logger

from picsort.exceptions import (
    DestinationInvalidError,
    InvalidNameError,
    MoveFailedError,
    PicsortError,
    SourceNotFoundError,
    BatchMoveError,
)
from picsort.filesystem.paths import ensure_unique_destination
from picsort.models.media import MoveRecord

# Re-allocations attempted when the rename target appears between probe and claim
_CLAIM_RETRIES = 3


def move_file(source: Union[str, Path], destination_dir: Union[str, Path]) -> MoveRecord:
    """
    Move a file into a directory, keeping its name when possible.

    The destination name goes through ensure_unique_destination, so an
    existing file with the same name is never overwritten: the moved file
    receives a _N suffix instead.

    Args:
        source: File (or directory entry) to move.
        destination_dir: Directory that will receive the file.

    Returns:
        MoveRecord with the previous and final paths.

    Raises:
        SourceNotFoundError: If source does not exist.
        DestinationInvalidError: If destination_dir is missing or not a directory.
        InvalidNameError: If source has no usable file name.
        NameSpaceExhaustedError: If no free name was found.
        MoveFailedError: If the rename itself fails.
    """
    source = Path(source)
    destination_dir = Path(destination_dir)
    logger.debug(f"Move requested: {source} -> {destination_dir}")

    if not (source.exists() or source.is_symlink()):
        logger.error(f"Source file not found: {source}")
        raise SourceNotFoundError(f"Source file not found: {source}")

    if not destination_dir.is_dir():
        logger.error(f"Destination is not a directory: {destination_dir}")
        raise DestinationInvalidError(f"Destination folder not found: {destination_dir}")

    if not source.name:
        raise InvalidNameError(f"Invalid file name: {source}")

    record = _claim_and_rename(source, destination_dir)
    logger.info(f"File moved: {record.previous_path} -> {record.new_path}")
    return record


def undo_move(current_path: Union[str, Path], original_dir: Union[str, Path]) -> MoveRecord:
    """
    Move a file back into the directory it came from.

    No mapping of the original name is kept: the file goes back under its
    current name, and receives a new suffix if that name is now taken.

    Args:
        current_path: Where the file is now (MoveRecord.new_path).
        original_dir: Directory to restore into (MoveRecord.undo_target).

    Returns:
        MoveRecord describing the restoring move.
    """
    logger.debug(f"Undo requested: {current_path} -> {original_dir}")
    record = move_file(current_path, original_dir)
    logger.info(f"Move undone: {record.previous_path} -> {record.new_path}")
    return record


def move_files_batch(
    sources: Iterable[Union[str, Path]],
    destination_dir: Union[str, Path],
) -> List[Path]:
    """
    Move several files into one directory, in the given order.

    Fails fast: the first missing source or failed move stops the batch.
    There is no rollback; files moved before the failure stay moved and
    are reported on the raised BatchMoveError.

    Args:
        sources: Files to move.
        destination_dir: Directory that will receive them.

    Returns:
        Final paths, positionally aligned with sources.

    Raises:
        DestinationInvalidError: If destination_dir is missing or not a directory.
        BatchMoveError: On the first failing item (cause chained).
    """
    destination_dir = Path(destination_dir)
    if not destination_dir.is_dir():
        logger.error(f"Destination folder not found: {destination_dir}")
        raise DestinationInvalidError(f"Destination folder not found: {destination_dir}")

    completed: List[MoveRecord] = []
    for source in sources:
        try:
            completed.append(move_file(source, destination_dir))
        except PicsortError as e:
            logger.error(
                f"Batch move stopped at {source} after {len(completed)} file(s): {e}"
            )
            raise BatchMoveError(
                f"Failed to move file {source}: {e}",
                failed_source=Path(source),
                completed=completed,
            ) from e

    logger.info(f"Moved {len(completed)} files to {destination_dir}")
    return [record.new_path for record in completed]


def _claim_and_rename(source: Path, destination_dir: Path) -> MoveRecord:
    """Allocate a free name and rename source onto it."""
    for _ in range(_CLAIM_RETRIES):
        destination = ensure_unique_destination(destination_dir, source.name)
        try:
            _rename(source, destination)
        except FileExistsError:
            logger.warning(f"Destination appeared during move, retrying: {destination}")
            continue
        except OSError as e:
            logger.error(f"Error moving {source} -> {destination}: {e}")
            raise MoveFailedError(f"Failed to move file {source}: {e}") from e
        return MoveRecord(previous_path=source, new_path=destination)

    raise MoveFailedError(f"Failed to move file {source}: destination kept appearing")


def _rename(source: Path, destination: Path) -> None:
    """Rename atomically, falling back to a copy+delete across filesystems."""
    try:
        os.rename(source, destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        logger.debug(f"Cross-device move, copying: {source} -> {destination}")
        shutil.move(str(source), str(destination))
