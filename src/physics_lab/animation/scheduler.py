# MIT License (see LICENSE)
"""
Frame scheduling.

A scheduler delivers at most one pending frame callback at a time, the way
a browser's requestAnimationFrame does. Cancelling the pending request is
the only way to stop a loop; there is no separate cancellation token.
"""
from __future__ import annotations
from typing import Callable, Protocol

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Anything that can call back with a monotonic timestamp in seconds."""

    def request(self, callback: FrameCallback) -> int:
        """Schedule ``callback`` for the next frame and return a handle."""
        ...

    def cancel(self, handle: int) -> None:
        """Drop a pending request. Unknown or already fired handles are ignored."""
        ...


class ManualScheduler:
    """
    Scheduler driven by explicit timestamps, for tests and headless runs.

    Example:
        scheduler = ManualScheduler()
        driver = AnimationDriver(lab, scheduler)
        driver.play()
        for i in range(600):
            scheduler.fire(i / 60)
    """

    def __init__(self) -> None:
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def fire(self, timestamp: float) -> int:
        """
        Run every callback pending before this call with ``timestamp``.

        Callbacks requested while firing wait for the next fire().

        Returns:
            Number of callbacks run.
        """
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(timestamp)
        return len(due)

    def run(self, timestamps) -> int:
        """Fire once per timestamp; returns the total number of callbacks run."""
        return sum(self.fire(t) for t in timestamps)
