"""
runner.py — Timed Algorithm Runner
===================================
The AlgorithmRunner is the ONLY object the UI talks to while an
algorithm animates.  It owns at most one run at a time, pulls Steps from
the algorithm generator on a worker thread, and between steps pauses on
a cancellable StepClock.

For every step it:
    1. replaces the VisualState with a new snapshot
    2. appends the step's log line (if any) to the LogSink
    3. hands a StepEvent to every subscriber
    4. pauses, unless the step asks for none

State machine (per run):
    IDLE     →  start()                    →  RUNNING
    RUNNING  →  final step applied         →  COMPLETED
    RUNNING  →  cancel() / reset() / start →  CANCELLED
    any      →  start()  →  RUNNING   (the prior run is cancelled AND
                                       joined before the new one begins)

Thread safety:
  VisualState, LogSink and the active handle form one unit guarded by
  `_lock`.  start() and reset() are additionally serialised by
  `_start_lock` so two callers can never interleave a supersession.
  Step events reach subscribers on the worker thread, publish() events
  on the calling thread.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Generator, List, Optional, Union

from algorithms import check_inputs, get_algorithm
from algorithms.step import Pause, Step
from structures.errors import ConcurrentRunConflict, InvalidInput
from engine.clock import CancelToken, StepClock, WaitOutcome
from engine.config import (
    JOIN_TIMEOUT_S,
    SECONDARY_PAUSE_RATIO,
    SPEED_MAX_MS,
    SPEED_MIN_MS,
    SPEED_PRESETS,
)
from engine.log_sink import LogSink
from engine.visual_state import VisualState

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States & events
# ---------------------------------------------------------------------------
class RunStatus(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class StepEvent:
    run_id:   Optional[int]
    status:   RunStatus
    state:    VisualState
    log_line: Optional[str]


Subscriber = Callable[[StepEvent], None]


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def resolve_speed(speed: Union[None, int, float, str], default: int) -> float:
    """Milliseconds per primary pause from a number, a numeric string or a preset name."""
    if speed is None:
        return default
    if isinstance(speed, str):
        if speed in SPEED_PRESETS:
            return SPEED_PRESETS[speed]
        try:
            speed = float(speed)
        except ValueError:
            raise InvalidInput(f"Unknown speed '{speed}'") from None
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise InvalidInput(f"Speed must be a number of milliseconds, got {speed!r}")
    if not SPEED_MIN_MS <= speed <= SPEED_MAX_MS:
        raise InvalidInput(f"Speed must be between {SPEED_MIN_MS} and {SPEED_MAX_MS} ms, got {speed}")
    return speed


# ---------------------------------------------------------------------------
# RunHandle
# ---------------------------------------------------------------------------
class RunHandle:
    """
    Attributes:
        run_id        : Runner-unique, increasing id.
        algo_key      : Registry key of the algorithm.
        speed_ms      : Primary pause length.
        status        : RunStatus; written by the worker thread.
        steps_applied : Number of steps that reached the VisualState.
    """

    def __init__(self, run_id: int, algo_key: str, speed_ms: float):
        self.run_id:        int       = run_id
        self.algo_key:      str       = algo_key
        self.speed_ms:      float     = speed_ms
        self.status:        RunStatus = RunStatus.RUNNING
        self.steps_applied: int       = 0
        self.token = CancelToken()
        self.clock = StepClock(self.token)
        self.thread: Optional[threading.Thread] = None

    def cancel(self) -> None:
        self.clock.cancel()

    def pause(self) -> None:
        self.clock.pause()

    def resume(self) -> None:
        self.clock.resume()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker to exit.  True once it has."""
        if self.thread is not None:
            self.thread.join(timeout)
        return not self.is_alive

    @property
    def is_alive(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    @property
    def done(self) -> bool:
        return self.status in (RunStatus.COMPLETED, RunStatus.CANCELLED)

    def __repr__(self) -> str:
        return f"RunHandle(id={self.run_id}, algo={self.algo_key}, status={self.status.value})"


# ---------------------------------------------------------------------------
# AlgorithmRunner
# ---------------------------------------------------------------------------
class AlgorithmRunner:
    """
    Attributes:
        log       : The LogSink every run writes to.
        supersede : True  → start() while running cancels the old run.
                    False → start() while running raises ConcurrentRunConflict.
    """

    def __init__(self, log: Optional[LogSink] = None, supersede: bool = True):
        self.log:       LogSink = log if log is not None else LogSink()
        self.supersede: bool    = supersede

        self._state:       VisualState         = VisualState()
        self._active:      Optional[RunHandle] = None
        self._subscribers: List[Subscriber]    = []
        self._run_ids = itertools.count(1)
        self._lock       = threading.RLock()
        self._start_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        inputs: Optional[Dict[str, Any]] = None,
        speed_ms: Union[None, int, float, str] = None,
    ) -> RunHandle:
        """
        Begin a run and return immediately.

        Raises:
            InvalidInput          – unknown algorithm, missing / bad input, bad speed.
                                    Nothing has been touched when this is raised.
            ConcurrentRunConflict – only when supersede=False and a run is live.
        """
        info = get_algorithm(algo_key)
        if info is None:
            raise InvalidInput(f"Unknown algorithm: {algo_key}")
        kwargs = check_inputs(info, inputs or {})
        speed  = resolve_speed(speed_ms, info.default_speed_ms)
        steps  = info.fn(**kwargs)

        with self._start_lock:
            prior = self._active
            if prior is not None:
                if not self.supersede and not prior.done:
                    steps.close()
                    raise ConcurrentRunConflict(f"Run {prior.run_id} ({prior.algo_key}) is still running")
                self._stop(prior)

            handle = RunHandle(next(self._run_ids), info.key, speed)
            with self._lock:
                self._active = handle
                self._state  = VisualState(items=self._state.items, bars=self._state.bars)

            handle.thread = threading.Thread(
                target=self._drive,
                args=(handle, steps),
                name=f"run-{handle.run_id}-{info.key}",
                daemon=True,
            )
            handle.thread.start()

        logger.info("Run %d started: %s at %sms", handle.run_id, info.key, speed)
        return handle

    def cancel(self, handle: Optional[RunHandle] = None) -> bool:
        """Ask a run (default: the active one) to stop.  False if it already ended."""
        handle = handle or self._active
        if handle is None or handle.done:
            return False
        handle.cancel()
        logger.info("Run %d cancel requested", handle.run_id)
        return True

    def reset(self, banner: Optional[str] = None) -> None:
        """Cancel any run, then clear VisualState and LogSink."""
        with self._start_lock:
            if self._active is not None:
                self._stop(self._active)
            with self._lock:
                self._active = None
                self._state  = VisualState()
                self.log.clear(banner)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Join the active run's worker.  True if nothing is left running."""
        handle = self._active
        return handle is None or handle.join(timeout)

    # ------------------------------------------------------------------
    # Pause / Resume
    # ------------------------------------------------------------------
    def pause(self) -> bool:
        handle = self._active
        if handle is None or handle.done:
            return False
        handle.pause()
        return True

    def resume(self) -> bool:
        handle = self._active
        if handle is None:
            return False
        handle.resume()
        return True

    # ------------------------------------------------------------------
    # Non-animated mutations (container push / pop, banners, …)
    # ------------------------------------------------------------------
    def publish(self, log: Optional[str] = None, **changes: Any) -> VisualState:
        with self._lock:
            if changes:
                self._state = replace(self._state, **changes)
            line   = self.log.append(log) if log else None
            active = self._active
            event  = StepEvent(
                run_id=active.run_id if active else None,
                status=active.status if active else RunStatus.IDLE,
                state=self._state,
                log_line=line,
            )
        self._notify(event)
        return event.state

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback`; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> VisualState:
        with self._lock:
            return self._state

    @property
    def active(self) -> Optional[RunHandle]:
        return self._active

    @property
    def status(self) -> RunStatus:
        handle = self._active
        return handle.status if handle else RunStatus.IDLE

    @property
    def is_running(self) -> bool:
        return self.status is RunStatus.RUNNING

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            handle = self._active
            return {
                "status": handle.status.value if handle else RunStatus.IDLE.value,
                "run_id": handle.run_id if handle else None,
                "algo":   handle.algo_key if handle else None,
                "paused": handle.clock.paused if handle else False,
                "state":  self._state.to_dict(),
                "log":    self.log.snapshot(),
            }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _drive(self, handle: RunHandle, steps: Generator[Step, None, None]) -> None:
        try:
            for step in steps:
                if not self._apply(handle, step):
                    break
                if step.pause is None:
                    continue
                if handle.clock.wait(self._pause_ms(handle, step.pause)) is WaitOutcome.CANCELLED:
                    break
            self._finish(handle)
        except Exception:
            logger.exception("Run %d (%s) failed", handle.run_id, handle.algo_key)
            with self._lock:
                handle.status = RunStatus.CANCELLED
                if self._active is handle:
                    self.log.append(f"ERROR: {handle.algo_key} run aborted")
        finally:
            steps.close()

    def _apply(self, handle: RunHandle, step: Step) -> bool:
        with self._lock:
            # checked under the lock: a cancelled run never writes again
            if handle.token.cancelled or self._active is not handle:
                return False
            self._state = self._state.advance(step)
            line = self.log.append(step.log) if step.log else None
            handle.steps_applied += 1
            if step.is_final:
                handle.status = RunStatus.COMPLETED
            event = StepEvent(handle.run_id, handle.status, self._state, line)
        self._notify(event)
        return True

    def _finish(self, handle: RunHandle) -> None:
        with self._lock:
            if handle.status is RunStatus.RUNNING:
                handle.status = RunStatus.CANCELLED if handle.token.cancelled else RunStatus.COMPLETED
        logger.info("Run %d %s after %d steps", handle.run_id, handle.status.value, handle.steps_applied)

    def _stop(self, handle: RunHandle) -> None:
        handle.cancel()
        if handle.thread is threading.current_thread():
            # start()/reset() from inside a subscriber: the worker exits at its next check
            return
        if not handle.join(JOIN_TIMEOUT_S):
            logger.warning("Run %d did not stop within %.1fs", handle.run_id, JOIN_TIMEOUT_S)

    @staticmethod
    def _pause_ms(handle: RunHandle, pause: Pause) -> float:
        if pause is Pause.SECONDARY:
            return handle.speed_ms * SECONDARY_PAUSE_RATIO
        return handle.speed_ms

    def _notify(self, event: StepEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception("Step subscriber %r failed", callback)

