"""Directory change watching with debounced notifications."""

from picsort.watcher.debounce import DebounceBuffer
from picsort.watcher.change_watcher import (
    ChangeWatcher,
    WatchSession,
    classify_event,
    is_watched_file,
)

__all__ = [
    "DebounceBuffer",
    "ChangeWatcher",
    "WatchSession",
    "classify_event",
    "is_watched_file",
]
