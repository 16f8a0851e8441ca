"""Debouncing of restart triggers."""

import threading
import time
from typing import Callable, Optional


def should_trigger(now: float, last_trigger_time: float, delay: float) -> bool:
    """
    Check whether an event at `now` falls outside the debounce window.

    The comparison is strict: an event exactly `delay` seconds after the
    last trigger is still inside the window.

    Args:
        now: Time of the event
        last_trigger_time: Time of the last accepted trigger
        delay: Debounce window in seconds

    Returns:
        True if the event should trigger
    """
    return now - last_trigger_time > delay


class DebounceState:
    """Time of the last accepted trigger and the lock that guards it."""

    def __init__(self, last_trigger_time: float):
        self.last_trigger_time = last_trigger_time
        self.lock = threading.Lock()


class Debouncer:
    """
    Collapses bursts of change events into at most one trigger per window.

    Rejected events are dropped, not queued: the next accepted event is the
    first one arriving more than `delay` seconds after the last trigger.
    """

    def __init__(
        self,
        delay: float,
        clock: Callable[[], float] = time.monotonic,
        state: Optional[DebounceState] = None,
    ):
        """
        Initialize the debouncer.

        Args:
            delay: Debounce window in seconds
            clock: Monotonic clock used when no event time is given
            state: Shared state; a fresh one stamped with the current time
                is created if omitted
        """
        self.delay = delay
        self.clock = clock
        self.state = state or DebounceState(clock())

    @property
    def last_trigger_time(self) -> float:
        with self.state.lock:
            return self.state.last_trigger_time

    def record_trigger(self, now: float) -> None:
        """Mark `now` as the time of the last accepted trigger."""
        with self.state.lock:
            self.state.last_trigger_time = now

    def try_trigger(self, now: Optional[float] = None) -> bool:
        """
        Check the window and record the trigger in one critical section.

        Args:
            now: Time of the event (default: the clock's current time)

        Returns:
            True if the event was accepted
        """
        if now is None:
            now = self.clock()

        with self.state.lock:
            if not should_trigger(now, self.state.last_trigger_time, self.delay):
                return False
            self.state.last_trigger_time = now
            return True
