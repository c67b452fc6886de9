# perflayer/core/clock.py
import time
from typing import Protocol

NANOSECS_PER_SEC = 1_000_000_000


class ClockSource(Protocol):
    def frequency(self) -> int: ...

    def now(self) -> int: ...


class MonotonicClock:
    """
    High resolution monotonic tick source.

    One tick is one nanosecond, so frequency() is fixed on every platform.
    """

    def frequency(self) -> int:
        return NANOSECS_PER_SEC

    def now(self) -> int:
        try:
            return time.perf_counter_ns()
        except OSError:
            return 0


def elapsed(clock: ClockSource, begin: int, end: int) -> float:
    """Seconds between two ticks of `clock`."""
    return (end - begin) / clock.frequency()
