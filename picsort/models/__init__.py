"""Data models for media organization."""

from picsort.models.media import (
    MediaEntry,
    MoveRecord,
    ThumbnailEntry,
    ThumbnailFailure,
    ThumbnailBatchResult,
)
from picsort.models.events import ChangeKind, ChangeEvent, PendingChange

__all__ = [
    "MediaEntry",
    "MoveRecord",
    "ThumbnailEntry",
    "ThumbnailFailure",
    "ThumbnailBatchResult",
    "ChangeKind",
    "ChangeEvent",
    "PendingChange",
]
