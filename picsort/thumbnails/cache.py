"""Content-addressed thumbnail cache with staleness detection."""

import os
import tempfile
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Union

from loguru import logger
from tqdm import tqdm

from picsort.config.settings import (
    DEFAULT_CACHE_DIR,
    DEFAULT_THUMBNAIL_SIZE,
    FFMPEG_BINARY,
    THUMBNAIL_FILE_MODE,
    THUMBNAIL_SUFFIX,
)
from picsort.exceptions import (
    FileOperationError,
    PicsortError,
    SourceNotFoundError,
    ThumbnailGenerationError,
)
from picsort.filesystem.discovery import is_video_file
from picsort.models.media import ThumbnailBatchResult, ThumbnailEntry, ThumbnailFailure
from picsort.thumbnails.generators import generate_image_thumbnail, generate_video_thumbnail
from picsort.utils.hash import path_digest

_SECONDS_PER_DAY = 24 * 60 * 60


class ThumbnailCache:
    """
    Disk cache of thumbnails keyed by the source path.

    Each source maps to one cache file named after a SHA-256 digest of its
    absolute path. A cached file is reused only while its modification time
    is strictly newer than the source's; otherwise it is regenerated.

    Generation for different sources shares no mutable state and may run
    concurrently.

    Attributes:
        cache_dir: Directory holding the thumbnail files.
        ffmpeg: Executable used for video frames.
    """

    def __init__(
        self,
        cache_dir: Union[str, Path, None] = None,
        ffmpeg: str = FFMPEG_BINARY,
    ) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir is not None else DEFAULT_CACHE_DIR
        self.ffmpeg = ffmpeg

    def cache_key(self, source: Union[str, Path]) -> str:
        """Return the stable cache key of a source path."""
        return path_digest(source)

    def cache_path(self, source: Union[str, Path]) -> Path:
        """Return where the thumbnail of source is (or would be) stored."""
        return self.cache_dir / f"{self.cache_key(source)}{THUMBNAIL_SUFFIX}"

    def lookup(self, source: Union[str, Path]) -> Optional[ThumbnailEntry]:
        """
        Return the cached thumbnail of source if it is fresh.

        Args:
            source: Original media file.

        Returns:
            ThumbnailEntry when the cache file exists and is newer than the
            source, None on a miss or a stale entry.
        """
        source = Path(source)
        thumb_path = self.cache_path(source)
        try:
            source_mtime = source.stat().st_mtime
            thumb_mtime = thumb_path.stat().st_mtime
        except OSError:
            return None

        if thumb_mtime <= source_mtime:
            logger.debug(f"Stale thumbnail for: {source}")
            return None

        return ThumbnailEntry(
            source_path=source,
            cache_key=self.cache_key(source),
            cache_path=thumb_path,
            generated_at=thumb_mtime,
            from_cache=True,
        )

    def generate(self, source: Union[str, Path], size: int = DEFAULT_THUMBNAIL_SIZE) -> ThumbnailEntry:
        """
        Return a fresh thumbnail for source, generating it when needed.

        Videos get a frame extracted with ffmpeg; anything else is decoded
        and resized with Pillow.

        Args:
            source: Original media file.
            size: Maximum width and height in pixels.

        Returns:
            ThumbnailEntry pointing to the cache file.

        Raises:
            ValueError: If size is not positive.
            SourceNotFoundError: If source does not exist.
            FileOperationError: If the cache directory cannot be written.
            ThumbnailGenerationError: If decoding or frame extraction fails.
        """
        if size <= 0:
            raise ValueError(f"Thumbnail size must be positive, got {size}")

        source = Path(source)
        if not source.exists():
            raise SourceNotFoundError(f"File not found: {source}")

        cached = self.lookup(source)
        if cached is not None:
            logger.debug(f"Using cached thumbnail for: {source}")
            return cached

        logger.info(f"Generating thumbnail for: {source}")
        thumb_path = self.cache_path(source)
        self._ensure_cache_dir()
        self._write_atomically(source, thumb_path, size)

        return ThumbnailEntry(
            source_path=source,
            cache_key=self.cache_key(source),
            cache_path=thumb_path,
            generated_at=thumb_path.stat().st_mtime,
        )

    def generate_batch(
        self,
        sources: Iterable[Union[str, Path]],
        size: int = DEFAULT_THUMBNAIL_SIZE,
        max_workers: int = 1,
        show_progress: bool = False,
    ) -> ThumbnailBatchResult:
        """
        Generate thumbnails for several files independently.

        A failure on one file never aborts the others: successes and
        failures are returned separately, both in input order.

        Args:
            sources: Original media files.
            size: Maximum width and height in pixels.
            max_workers: Worker threads; 1 processes sequentially.
            show_progress: Display a tqdm progress bar on stderr.

        Returns:
            ThumbnailBatchResult with results and per-item errors.
        """
        paths = [Path(source) for source in sources]
        if max_workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outcomes = list(tqdm(
                    executor.map(lambda p: self._generate_or_fail(p, size), paths),
                    desc="Thumbnails",
                    total=len(paths),
                    disable=not show_progress,
                ))
        else:
            outcomes = [
                self._generate_or_fail(path, size)
                for path in tqdm(paths, desc="Thumbnails", disable=not show_progress)
            ]

        batch = ThumbnailBatchResult()
        for outcome in outcomes:
            if isinstance(outcome, ThumbnailFailure):
                batch.errors.append(outcome)
            else:
                batch.results.append(outcome)
        return batch

    def invalidate(self, source: Union[str, Path]) -> bool:
        """
        Remove the cached thumbnail of source.

        Returns:
            True if a cache file was removed.
        """
        thumb_path = self.cache_path(source)
        try:
            thumb_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Failed to remove thumbnail {thumb_path}: {e}")
            return False
        logger.debug(f"Thumbnail invalidated for: {source}")
        return True

    def cleanup(self, max_age_days: float) -> int:
        """
        Remove cache files older than max_age_days.

        Entries that cannot be inspected or removed are skipped. A missing
        cache directory counts as empty.

        Args:
            max_age_days: Age threshold in days.

        Returns:
            Number of files removed.
        """
        if not self.cache_dir.is_dir():
            return 0

        max_age = max_age_days * _SECONDS_PER_DAY
        now = time.time()
        removed_count = 0

        try:
            entries = list(os.scandir(self.cache_dir))
        except OSError as e:
            logger.warning(f"Cannot read thumbnail cache {self.cache_dir}: {e}")
            return 0

        for entry in entries:
            try:
                if not entry.is_file(follow_symlinks=False):
                    continue
                age = now - entry.stat(follow_symlinks=False).st_mtime
            except OSError as e:
                logger.debug(f"Skipping unreadable cache entry {entry.path}: {e}")
                continue

            if age <= max_age:
                continue

            try:
                os.remove(entry.path)
                removed_count += 1
            except OSError as e:
                logger.warning(f"Failed to remove old thumbnail {entry.path}: {e}")

        logger.info(f"Cleaned up {removed_count} old thumbnails")
        return removed_count

    def _generate_or_fail(self, source: Path, size: int) -> Union[ThumbnailEntry, ThumbnailFailure]:
        try:
            return self.generate(source, size)
        except (PicsortError, ValueError) as e:
            logger.warning(f"Failed to generate thumbnail for {source}: {e}")
            return ThumbnailFailure(path=source, error=str(e))

    def _ensure_cache_dir(self) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create cache directory: {e}") from e

    def _write_atomically(self, source: Path, thumb_path: Path, size: int) -> None:
        """Generate into a temporary file, then replace any stale thumbnail."""
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=".tmp-", suffix=THUMBNAIL_SUFFIX, dir=self.cache_dir
            )
            os.close(fd)
        except OSError as e:
            raise FileOperationError(f"Failed to write to cache directory: {e}") from e

        tmp_path = Path(tmp_name)
        try:
            if is_video_file(source):
                generate_video_thumbnail(source, tmp_path, size, ffmpeg=self.ffmpeg)
            else:
                generate_image_thumbnail(source, tmp_path, size)
            # mkstemp creates the file as 0600
            os.chmod(tmp_path, THUMBNAIL_FILE_MODE)
            os.replace(tmp_path, thumb_path)
        except OSError as e:
            raise ThumbnailGenerationError(f"Failed to save thumbnail: {e}") from e
        finally:
            tmp_path.unlink(missing_ok=True)
