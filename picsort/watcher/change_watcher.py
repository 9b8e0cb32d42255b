"""Directory watcher emitting debounced change notifications."""

import os
import queue
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from loguru import logger
from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from picsort.config.settings import (
    DEBOUNCE_SECONDS,
    WATCH_EXTENSIONS,
    WATCH_POLL_INTERVAL_SECONDS,
)
from picsort.exceptions import InvalidDirectoryError, WatchSetupError
from picsort.models.events import ChangeEvent, ChangeKind
from picsort.watcher.debounce import DebounceBuffer

ChangeCallback = Callable[[ChangeEvent], None]

_EVENT_KINDS = {
    EVENT_TYPE_CREATED: ChangeKind.CREATED,
    EVENT_TYPE_MODIFIED: ChangeKind.MODIFIED,
    EVENT_TYPE_DELETED: ChangeKind.REMOVED,
}


def is_watched_file(path: Union[str, Path]) -> bool:
    """Check if changes to path are reported (image extensions only)."""
    return Path(path).suffix.lower().lstrip(".") in WATCH_EXTENSIONS


def classify_event(event: FileSystemEvent) -> List[Tuple[Path, ChangeKind]]:
    """
    Translate a raw watchdog event into (path, kind) pairs.

    Directory events, open/close notifications and files outside the
    watched extensions yield nothing. A rename yields Removed for the old
    name and Created for the new one.

    Args:
        event: Raw event from the observer.

    Returns:
        Qualifying (path, kind) pairs, possibly empty.
    """
    if event.is_directory:
        return []

    if event.event_type == EVENT_TYPE_MOVED:
        candidates = [
            (Path(os.fsdecode(event.src_path)), ChangeKind.REMOVED),
            (Path(os.fsdecode(event.dest_path)), ChangeKind.CREATED),
        ]
    elif event.event_type in _EVENT_KINDS:
        candidates = [(Path(os.fsdecode(event.src_path)), _EVENT_KINDS[event.event_type])]
    else:
        return []

    return [(path, kind) for path, kind in candidates if is_watched_file(path)]


class _QueueingEventHandler(FileSystemEventHandler):
    """Forwards every raw event from the observer thread to the loop queue."""

    def __init__(self, events: "queue.Queue[FileSystemEvent]") -> None:
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._events.put(event)


@dataclass
class WatchSession:
    """
    One live observation of a directory.

    ``cancelled`` means the loop was signalled to stop; ``running`` turning
    False means it has actually exited. Use ``join`` to wait for the latter.

    Attributes:
        directory: Watched directory.
        cancel_event: Cancellation signal polled by the loop.
        observer: watchdog observer feeding raw events.
        thread: Thread running the debounce loop.
    """

    directory: Path
    cancel_event: threading.Event = field(default_factory=threading.Event)
    observer: Any = None
    thread: Optional[threading.Thread] = None

    def cancel(self) -> None:
        """Signal the loop to stop. Does not wait."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    @property
    def running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the loop to exit.

        Returns:
            True if the loop has stopped.
        """
        if self.thread is not None:
            self.thread.join(timeout)
        return not self.running


class ChangeWatcher:
    """
    Watches one directory and reports settled changes to a consumer.

    At most one session is live per watcher. ``start`` cancels the
    previous session and installs the new one under the same lock, so two
    concurrent starts cannot lose a session. ``start`` and ``stop`` only
    signal the background loop; they never wait for it to drain.

    Raw events go through a queue to the loop, which polls it with a
    bounded timeout, collapses them per path in a DebounceBuffer and calls
    ``on_change`` once per settled path. Errors inside the loop (odd raw
    events, a failing consumer) are logged and skipped.

    Args:
        on_change: Consumer called from the loop thread with each ChangeEvent.
        debounce: Quiet period in seconds before a change is emitted.
        poll_interval: Bounded wait on the event queue, in seconds.
        observer_factory: Builds the watchdog observer (e.g. PollingObserver).
        clock: Monotonic time source for the debounce buffer.
    """

    def __init__(
        self,
        on_change: ChangeCallback,
        debounce: float = DEBOUNCE_SECONDS,
        poll_interval: float = WATCH_POLL_INTERVAL_SECONDS,
        observer_factory: Callable[[], Any] = Observer,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._on_change = on_change
        self.debounce = debounce
        self.poll_interval = poll_interval
        self._observer_factory = observer_factory
        self._clock = clock
        self._lock = threading.Lock()
        self._session: Optional[WatchSession] = None

    @property
    def session(self) -> Optional[WatchSession]:
        with self._lock:
            return self._session

    @property
    def watching_path(self) -> Optional[Path]:
        session = self.session
        return session.directory if session else None

    @property
    def is_watching(self) -> bool:
        return self.session is not None

    def start(self, directory: Union[str, Path]) -> WatchSession:
        """
        Start watching directory, replacing any current session.

        Args:
            directory: Directory to observe (not recursive).

        Returns:
            The new WatchSession.

        Raises:
            InvalidDirectoryError: If directory does not exist or is not a directory.
            WatchSetupError: If the notification subsystem cannot be started.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise InvalidDirectoryError(f"Path does not exist or is not a directory: {directory}")

        events: "queue.Queue[FileSystemEvent]" = queue.Queue()
        session = WatchSession(directory=directory)

        with self._lock:
            previous, self._session = self._session, None
            if previous is not None:
                previous.cancel()
                logger.info(f"Previous watch cancelled: {previous.directory}")

            try:
                observer = self._observer_factory()
                observer.schedule(_QueueingEventHandler(events), str(directory), recursive=False)
                observer.start()
            except (OSError, RuntimeError) as e:
                logger.error(f"Failed to start watching {directory}: {e}")
                raise WatchSetupError(f"Failed to start watching {directory}: {e}") from e

            session.observer = observer
            session.thread = threading.Thread(
                target=self._run,
                args=(session, events),
                name=f"picsort-watcher-{directory.name}",
                daemon=True,
            )
            session.thread.start()
            self._session = session

        logger.info(f"Watching: {directory}")
        return session

    def stop(self) -> Optional[WatchSession]:
        """
        Signal the current session to stop and go idle.

        Returns:
            The cancelled session (join it to wait for the loop), or None
            if nothing was being watched.
        """
        with self._lock:
            session, self._session = self._session, None

        if session is not None:
            session.cancel()
            logger.info(f"Stop requested for: {session.directory}")
        return session

    def _run(self, session: WatchSession, events: "queue.Queue[FileSystemEvent]") -> None:
        buffer = DebounceBuffer(self.debounce, clock=self._clock)
        logger.debug(f"Watcher loop started: {session.directory}")
        try:
            while not session.cancel_event.is_set():
                try:
                    raw = events.get(timeout=self.poll_interval)
                except queue.Empty:
                    raw = None

                if raw is not None:
                    self._collect(buffer, raw)

                for change in buffer.pop_settled():
                    self._emit(change)
        finally:
            if buffer:
                logger.debug(f"Discarding {len(buffer)} unsettled change(s): {session.directory}")
            buffer.clear()
            self._shutdown_observer(session)
            logger.info(f"Stopped watching: {session.directory}")

    def _collect(self, buffer: DebounceBuffer, raw: FileSystemEvent) -> None:
        try:
            changes = classify_event(raw)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed filesystem event {raw!r}: {e}")
            return

        for path, kind in changes:
            buffer.record(path, kind)

    def _emit(self, change: ChangeEvent) -> None:
        if change.kind is ChangeKind.MODIFIED:
            logger.debug(f"File modified (debounced): {change.path}")
        else:
            logger.info(f"File {change.kind.value.lower()} (debounced): {change.path}")

        try:
            self._on_change(change)
        except Exception as e:
            logger.exception(f"Change consumer failed for {change}: {e}")

    @staticmethod
    def _shutdown_observer(session: WatchSession) -> None:
        observer = session.observer
        if observer is None:
            return
        try:
            observer.stop()
            observer.join()
        except (OSError, RuntimeError) as e:
            logger.warning(f"Error stopping observer for {session.directory}: {e}")
