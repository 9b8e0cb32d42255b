"""Debounce buffer collapsing raw filesystem events per path."""

import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from picsort.config.settings import DEBOUNCE_SECONDS
from picsort.models.events import ChangeEvent, ChangeKind, PendingChange


class DebounceBuffer:
    """
    Pending changes keyed by path, flushed once they have settled.

    Each new event for a path overwrites the previous one (last writer
    wins) and restarts its quiet period, so a burst of events on one file
    produces a single notification carrying the latest kind.

    Not thread-safe: owned by the watcher loop.

    Args:
        window: Quiet period in seconds before a change is emitted.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        window: float = DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window = window
        self._clock = clock
        self._pending: Dict[Path, PendingChange] = {}

    def record(self, path: Union[str, Path], kind: ChangeKind) -> None:
        """Insert or overwrite the pending change for path."""
        path = Path(path)
        self._pending[path] = PendingChange(path=path, kind=kind, first_seen=self._clock())

    def pop_settled(self, now: Optional[float] = None) -> List[ChangeEvent]:
        """
        Remove and return every change older than the window.

        Args:
            now: Current time; defaults to the buffer's clock.

        Returns:
            Settled events, oldest first.
        """
        if now is None:
            now = self._clock()
        settled = [
            change for change in self._pending.values()
            if now - change.first_seen >= self.window
        ]
        settled.sort(key=lambda change: change.first_seen)
        for change in settled:
            del self._pending[change.path]
        return [ChangeEvent(kind=change.kind, path=change.path) for change in settled]

    def clear(self) -> None:
        """Drop every pending change."""
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and Path(path) in self._pending
