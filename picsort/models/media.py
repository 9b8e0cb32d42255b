"""Media data models: scan entries, move records and thumbnails."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class MediaEntry:
    """
    Snapshot of a media file found by the directory scanner.

    Not kept in sync after creation: a new scan or a change event is
    needed to learn about updates.

    Attributes:
        path: Absolute path of the file.
        name: File name exactly as stored on disk.
        size: Size in bytes, or None if metadata could not be read.
        modified_at: Last modification time (Unix seconds), or None.
    """

    path: Path
    name: str
    size: Optional[int] = None
    modified_at: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the listing format, omitting absent metadata."""
        data: Dict[str, Any] = {"path": str(self.path), "name": self.name}
        if self.size is not None:
            data["size"] = self.size
        if self.modified_at is not None:
            data["modifiedAt"] = self.modified_at
        return data


@dataclass(frozen=True)
class MoveRecord:
    """
    Outcome of a single move.

    Attributes:
        previous_path: Where the file was before the move.
        new_path: Where the file ended up (after collision resolution).
    """

    previous_path: Path
    new_path: Path

    @property
    def undo_target(self) -> Path:
        """Directory to pass to undo_move to reverse this move."""
        return self.previous_path.parent

    @property
    def renamed(self) -> bool:
        """True if the file received a collision suffix."""
        return self.previous_path.name != self.new_path.name


@dataclass(frozen=True)
class ThumbnailEntry:
    """
    A thumbnail stored in the cache.

    Attributes:
        source_path: Original media file.
        cache_key: Stable key derived from the absolute source path.
        cache_path: Location of the thumbnail file.
        generated_at: Modification time of the cache file (Unix seconds).
        from_cache: True if an existing fresh thumbnail was reused.
    """

    source_path: Path
    cache_key: str
    cache_path: Path
    generated_at: float
    from_cache: bool = False

    def to_dict(self) -> Dict[str, str]:
        return {
            "originalPath": str(self.source_path),
            "thumbnailPath": str(self.cache_path),
        }


@dataclass(frozen=True)
class ThumbnailFailure:
    """A single failed item of a thumbnail batch."""

    path: Path
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": str(self.path), "error": self.error}


@dataclass
class ThumbnailBatchResult:
    """
    Result of a batch thumbnail request.

    Successes and failures are kept apart; one failing item never drops
    the others.
    """

    results: List[ThumbnailEntry] = field(default_factory=list)
    errors: List[ThumbnailFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [entry.to_dict() for entry in self.results],
            "errors": [failure.to_dict() for failure in self.errors],
        }
