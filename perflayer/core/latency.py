# perflayer/core/latency.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List

from perflayer.core.clock import ClockSource, MonotonicClock

MS_PER_SEC = 1000.0

# Added to the total before dividing so an empty epoch never yields NaN.
TOTAL_TIME_EPSILON = 1e-6


@dataclass(slots=True)
class CallStat:
    total_time: float = 0.0  # milliseconds
    call_count: int = 0


@dataclass(frozen=True, slots=True)
class RankedCall:
    name: str
    total_time: float
    call_count: int
    percentage: float


class CallLatencyAggregator:
    """
    Accumulates elapsed time per call name between report flushes.

    The start timestamp is stored per thread, not per name: a nested call
    on the same thread overwrites the outer call's start (last writer wins).
    """

    def __init__(self, clock: ClockSource | None = None) -> None:
        self.clock = clock or MonotonicClock()

        self._stats: Dict[str, CallStat] = {}
        self._lock = threading.Lock()
        self._local = threading.local()

    def begin_call(self, name: str) -> None:
        self._local.start = self.clock.now()

    def end_call(self, name: str) -> float:
        """
        Close the current thread's timed call and credit it to `name`.
        Returns the elapsed time in milliseconds.
        """
        start = getattr(self._local, "start", None)
        if start is None:
            return 0.0

        end = self.clock.now()

        elapsed_ms = (end - start) * MS_PER_SEC / self.clock.frequency()
        self.record(name, elapsed_ms)
        return elapsed_ms

    def record(self, name: str, elapsed_ms: float) -> None:
        with self._lock:
            stat = self._stats.get(name)
            if stat is None:
                stat = CallStat()
                self._stats[name] = stat
            stat.total_time += elapsed_ms
            stat.call_count += 1

    def drain_ranked(self, top_n: int | None = None) -> List[RankedCall]:
        """
        Take the table, clear it, and return it ranked by total time.

        This is a flush: a second call without new samples returns [].
        """
        with self._lock:
            stats = self._stats
            self._stats = {}

        total_api_time = (
            sum(s.total_time for s in stats.values()) + TOTAL_TIME_EPSILON
        )

        # sorted() is stable; equal totals keep first-seen order.
        ranked = sorted(
            stats.items(), key=lambda item: item[1].total_time, reverse=True
        )
        if top_n is not None:
            ranked = ranked[:top_n]

        return [
            RankedCall(
                name=name,
                total_time=stat.total_time,
                call_count=stat.call_count,
                percentage=stat.total_time * 100.0 / total_api_time,
            )
            for name, stat in ranked
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._stats)
