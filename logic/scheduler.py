"""
Deferred callbacks for the computer's move.

The session never sleeps or spawns threads: it hands the computer's move to a
scheduler and lets the host decide when it fires. The Tkinter UI schedules
through root.after; the console and tests use ManualScheduler.
"""

from typing import Callable, Dict, List, Tuple


class Scheduler:
    """Interface for running a callback after a delay."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]):
        """Schedule callback and return a handle for cancel()."""
        raise NotImplementedError

    def cancel(self, handle) -> None:
        """Drop a scheduled callback. Unknown or fired handles are ignored."""
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """
    Queue of callbacks that only fire when asked to.

    Delays are recorded but not waited on; the owner decides when time
    has passed.
    """

    def __init__(self):
        self._next_handle = 0
        self._tasks: Dict[int, Tuple[int, Callable[[], None]]] = {}

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next_handle += 1
        self._tasks[self._next_handle] = (delay_ms, callback)
        return self._next_handle

    def cancel(self, handle) -> None:
        self._tasks.pop(handle, None)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to fire."""
        return len(self._tasks)

    def next_delay(self) -> int:
        """Delay of the oldest waiting callback, 0 if none."""
        if not self._tasks:
            return 0
        return self._tasks[min(self._tasks)][0]

    def run_pending(self) -> int:
        """
        Fire every waiting callback in scheduling order.

        Callbacks scheduled while running are left for the next call.

        Returns:
            How many callbacks fired.
        """
        handles: List[int] = sorted(self._tasks)
        fired = 0
        for handle in handles:
            task = self._tasks.pop(handle, None)
            if task is None:
                continue
            task[1]()
            fired += 1
        return fired
