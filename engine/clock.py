"""
clock.py — Cancellable Step Clock
==================================
The pacing primitive between two steps of a run:

    outcome = clock.wait(400)    # WaitOutcome.COMPLETED or CANCELLED

A wait returns early the moment the run is cancelled.  Waits are plain
`threading.Event.wait` calls, so there is never a timer left behind to
tear down.

A paused clock finishes the current wait and then holds at that
boundary until resume() or cancel().
"""

import threading
from enum import Enum


class WaitOutcome(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CancelToken:
    """One-shot cancellation flag shared by a run and whoever wants to stop it."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Block up to `timeout` seconds; True if cancelled meanwhile."""
        return self._event.wait(timeout)


class StepClock:
    def __init__(self, token: CancelToken):
        self.token    = token
        self._lock    = threading.Lock()
        self._resumed = threading.Event()
        self._resumed.set()

    def wait(self, duration_ms: float) -> WaitOutcome:
        if self.token.wait(max(0.0, duration_ms) / 1000.0):
            return WaitOutcome.CANCELLED
        # held here while paused; cancel() releases it
        self._resumed.wait()
        if self.token.cancelled:
            return WaitOutcome.CANCELLED
        return WaitOutcome.COMPLETED

    # ------------------------------------------------------------------
    # Pause / resume / cancel
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._lock:
            if not self.token.cancelled:
                self._resumed.clear()

    def resume(self) -> None:
        self._resumed.set()

    def cancel(self) -> None:
        with self._lock:
            self.token.cancel()
            self._resumed.set()

    @property
    def paused(self) -> bool:
        return not self._resumed.is_set()
