"""
config.py — Engine Constants
=============================
Every tunable number in one place.  All durations are milliseconds.
"""

from typing import Dict


# ---------------------------------------------------------------------------
# Pacing
# ---------------------------------------------------------------------------
SPEED_MIN_MS: int = 10
SPEED_MAX_MS: int = 2000

# secondary pauses (e.g. BFS after enqueueing neighbours) run at half speed
SECONDARY_PAUSE_RATIO: float = 0.5

SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,    # demo mode
    "turbo":  50,
}


# ---------------------------------------------------------------------------
# Journal
# ---------------------------------------------------------------------------
LOG_CAPACITY:   int = 20
LOG_TIME_FORMAT: str = "%H:%M:%S"


# random value when a push / enqueue / insert comes without one
RANDOM_VALUE_MIN: int = 1
RANDOM_VALUE_MAX: int = 99

# how long start() / reset() wait for a superseded worker to stop
JOIN_TIMEOUT_S: float = 5.0
