"""In-memory channel carrying change notifications to the event loop."""

import queue
import threading
from typing import Optional

from .exceptions import ChannelClosedError, ChannelTimeoutError, WatchError
from .models import ChangeEvent, ChannelItem

# Marks the end of the stream once close() has been called.
_CLOSED = object()


class EventChannel:
    """
    Unbounded FIFO channel between watcher threads and a single consumer.

    Producers call send()/send_error() from any thread. The consumer blocks
    in recv() until an item arrives or the channel is closed.
    """

    def __init__(self):
        self._queue: "queue.Queue" = queue.Queue()
        self._closed = False
        self._lock = threading.Lock()

    def send(self, event: ChangeEvent) -> bool:
        """
        Deliver a change event.

        Args:
            event: The event to deliver

        Returns:
            True if delivered, False if the channel is closed
        """
        return self._put(event)

    def send_error(self, error: WatchError) -> bool:
        """
        Deliver a watcher failure in place of an event.

        Args:
            error: The failure to deliver

        Returns:
            True if delivered, False if the channel is closed
        """
        return self._put(error)

    def _put(self, item) -> bool:
        with self._lock:
            if self._closed:
                return False
            self._queue.put(item)
            return True

    def close(self, discard_pending: bool = False) -> int:
        """
        Close the channel.

        Items already sent can still be received unless discard_pending is
        set, in which case they are dropped and the next recv raises.

        Returns:
            Number of discarded items
        """
        discarded = 0
        with self._lock:
            if self._closed and not discard_pending:
                return 0
            if discard_pending:
                while True:
                    try:
                        item = self._queue.get_nowait()
                    except queue.Empty:
                        break
                    if item is not _CLOSED:
                        discarded += 1
            if discard_pending or not self._closed:
                self._queue.put(_CLOSED)
            self._closed = True
        return discarded

    def recv(self, timeout: Optional[float] = None) -> ChannelItem:
        """
        Receive the next item, blocking until one is available.

        Args:
            timeout: Seconds to wait, or None to wait forever

        Returns:
            A ChangeEvent or a WatchError

        Raises:
            ChannelClosedError: If the channel is closed and drained
            ChannelTimeoutError: If the timeout expired
        """
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            raise ChannelTimeoutError(f"No event received within {timeout}s") from None

        if item is _CLOSED:
            # Leave the marker for any later recv() call
            self._queue.put(_CLOSED)
            raise ChannelClosedError("Channel is closed")
        return item

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def __len__(self) -> int:
        """Return the number of pending items."""
        size = self._queue.qsize()
        return size - 1 if self.closed and size else size
