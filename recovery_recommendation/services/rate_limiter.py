"""Local LLM rate limiter

Sliding-window call counting so the service stays under the completion API
quota. Per process only; a restart resets every window.
"""

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterable, List, Optional


@dataclass
class RateWindow:
    """Call budget over a sliding duration"""
    name: str
    duration_seconds: float
    max_calls: int
    timestamps: Deque[float] = field(default_factory=deque)

    def prune(self, now: float) -> None:
        while self.timestamps and now - self.timestamps[0] >= self.duration_seconds:
            self.timestamps.popleft()

    @property
    def has_capacity(self) -> bool:
        return len(self.timestamps) < self.max_calls


def default_windows(per_minute: int = 10, per_hour: int = 100) -> List[RateWindow]:
    """1-minute and 1-hour windows"""
    return [
        RateWindow(name="1m", duration_seconds=60, max_calls=per_minute),
        RateWindow(name="1h", duration_seconds=60 * 60, max_calls=per_hour),
    ]


class RateLimiter:
    """Admits a call only when every window has room

    Admission records the call in all windows at once; a denial records
    nothing.
    """

    def __init__(
        self,
        windows: Optional[Iterable[RateWindow]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            windows: rate windows (default: 10/min + 100/hour)
            clock: time source in seconds
        """
        self._windows = list(windows) if windows is not None else default_windows()
        if not self._windows:
            raise ValueError("RateLimiter needs at least one window")
        self._clock = clock
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        """Record a call if every window allows it

        Returns:
            True if the call is permitted
        """
        with self._lock:
            now = self._clock()
            for window in self._windows:
                window.prune(now)

            if not all(window.has_capacity for window in self._windows):
                return False

            for window in self._windows:
                window.timestamps.append(now)
            return True

    def remaining(self) -> Dict[str, int]:
        """Calls left per window right now"""
        with self._lock:
            now = self._clock()
            result = {}
            for window in self._windows:
                window.prune(now)
                result[window.name] = window.max_calls - len(window.timestamps)
            return result
