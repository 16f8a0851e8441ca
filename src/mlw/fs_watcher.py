"""File system watcher using watchdog library."""

import logging
import os
import threading
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .exceptions import WatchError, WatchRegistrationError
from .models import ChangeEvent, ChangeKind

logger = logging.getLogger(__name__)

_KIND_BY_EVENT_TYPE = {
    EVENT_TYPE_CREATED: ChangeKind.CREATE,
    EVENT_TYPE_MODIFIED: ChangeKind.MODIFY,
    EVENT_TYPE_DELETED: ChangeKind.REMOVE,
    # A rename changes what lives at both paths
    EVENT_TYPE_MOVED: ChangeKind.MODIFY,
}


class FSEventHandler(FileSystemEventHandler):
    """Handler that converts watchdog events to ChangeEvent."""

    def __init__(
        self,
        callback: Callable[[ChangeEvent], object],
        error_callback: Optional[Callable[[WatchError], object]] = None,
        only_path: Optional[Path] = None,
    ):
        """
        Initialize the handler.

        Args:
            callback: Receives every converted event
            error_callback: Receives conversion failures
            only_path: If set, drop events that do not touch this path
        """
        super().__init__()
        self.callback = callback
        self.error_callback = error_callback
        self.only_path = only_path

    def _convert(self, event: FileSystemEvent) -> ChangeEvent:
        paths = [Path(os.fsdecode(event.src_path))]
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            paths.append(Path(os.fsdecode(dest_path)))

        return ChangeEvent(
            kind=_KIND_BY_EVENT_TYPE.get(event.event_type, ChangeKind.OTHER),
            paths=tuple(paths),
            timestamp=time.monotonic(),
        )

    def on_any_event(self, event: FileSystemEvent) -> None:
        try:
            change = self._convert(event)
        except Exception as e:
            # Report instead of letting the observer thread die
            if self.error_callback:
                self.error_callback(WatchError(f"Failed to convert {event!r}: {e}"))
            else:
                logger.error(f"Failed to convert {event!r}: {e}")
            return

        if self.only_path is not None and self.only_path not in change.paths:
            return

        self.callback(change)


class FSWatcherPool:
    """
    Manages multiple watchdog observers, one per root.

    Provides a unified interface for starting and stopping
    watchers for multiple root directories or files.
    """

    def __init__(
        self,
        event_callback: Callable[[ChangeEvent], object],
        error_callback: Optional[Callable[[WatchError], object]] = None,
        recursive: bool = True,
    ):
        """
        Initialize the watcher pool.

        Args:
            event_callback: Callback function for change events
            error_callback: Callback function for watcher failures
            recursive: Whether directories are watched recursively
        """
        self.event_callback = event_callback
        self.error_callback = error_callback
        self.recursive = recursive
        self._observers: Dict[Path, Observer] = {}
        self._lock = threading.Lock()

    def start_watching(self, root: Path) -> bool:
        """
        Start watching a root directory or file.

        A file is watched through its parent directory, with events
        restricted to the file itself.

        Args:
            root: Path to watch

        Returns:
            True if watching started, False if already watching

        Raises:
            WatchRegistrationError: If the path does not exist or the
                observer cannot be started
        """
        root = Path(root).resolve()

        with self._lock:
            if root in self._observers:
                return False

            if not root.exists():
                raise WatchRegistrationError(f"Cannot watch {root}: path does not exist")

            if root.is_dir():
                handler = FSEventHandler(self.event_callback, self.error_callback)
                watch_dir, recursive = root, self.recursive
            else:
                handler = FSEventHandler(self.event_callback, self.error_callback, only_path=root)
                watch_dir, recursive = root.parent, False

            observer = Observer()
            try:
                observer.schedule(handler, str(watch_dir), recursive=recursive)
                observer.start()
            except OSError as e:
                raise WatchRegistrationError(f"Failed to watch {root}: {e}") from e

            self._observers[root] = observer
            logger.debug(f"Started observer for {root} (recursive={recursive})")
            return True

    def stop_watching(self, root: Path) -> bool:
        """
        Stop watching a root.

        Args:
            root: Path to the root

        Returns:
            True if watching stopped, False if not watching
        """
        root = Path(root).resolve()

        with self._lock:
            if root not in self._observers:
                return False

            observer = self._observers.pop(root)
            observer.stop()
            observer.join(timeout=5.0)
            return True

    def stop_all(self) -> int:
        """
        Stop all watchers.

        Returns:
            Number of watchers stopped
        """
        with self._lock:
            count = len(self._observers)

            for observer in self._observers.values():
                observer.stop()

            for observer in self._observers.values():
                observer.join(timeout=5.0)

            self._observers.clear()
            return count

    def is_watching(self, root: Path) -> bool:
        root = Path(root).resolve()

        with self._lock:
            return root in self._observers

    def get_watched_roots(self) -> List[Path]:
        with self._lock:
            return list(self._observers.keys())

    def __len__(self) -> int:
        """Return the number of active watchers."""
        with self._lock:
            return len(self._observers)
