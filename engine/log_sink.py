"""
log_sink.py — Bounded Activity Journal
=======================================
The user-visible log panel: newest entry first, each stamped with the
wall-clock time, capped at LOG_CAPACITY entries.  Older entries fall off
the end and are gone.

Safe to read from one thread while a run appends from another.
"""

import threading
from collections import deque
from datetime import datetime
from typing import Callable, Deque, List, Optional

from engine.config import LOG_CAPACITY, LOG_TIME_FORMAT


class LogSink:
    def __init__(
        self,
        capacity: int = LOG_CAPACITY,
        now: Callable[[], datetime] = datetime.now,
        banner: Optional[str] = None,
    ):
        self._now = now
        self._entries: Deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()
        if banner:
            self._entries.append(banner)

    def append(self, message: str) -> str:
        line = f"[{self._now().strftime(LOG_TIME_FORMAT)}] {message}"
        with self._lock:
            # a full deque drops from the right, i.e. the oldest entry
            self._entries.appendleft(line)
        return line

    def clear(self, banner: Optional[str] = None) -> None:
        """Empty the journal; `banner`, if given, becomes its only (unstamped) line."""
        with self._lock:
            self._entries.clear()
            if banner:
                self._entries.append(banner)

    def snapshot(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    @property
    def latest(self) -> Optional[str]:
        with self._lock:
            return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)
