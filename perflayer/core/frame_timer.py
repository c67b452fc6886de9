# perflayer/core/frame_timer.py
from __future__ import annotations

import threading

import numpy as np
from numpy.typing import NDArray

from perflayer.core.clock import ClockSource, MonotonicClock

DEFAULT_WINDOW_SIZE = 40


class FrameTimeWindow:
    """
    Simple moving average over the last `capacity` frame durations.

    The window keeps a running sum instead of re-summing every frame:
    the oldest sample is subtracted before the newest is added.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_WINDOW_SIZE,
        clock: ClockSource | None = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError(f"Window capacity must be positive, got {capacity}")

        self.capacity = capacity
        self.clock = clock or MonotonicClock()

        self._samples: NDArray[np.float64] = np.zeros(capacity, dtype=np.float64)
        self._cursor = 0
        self._count = 0
        self._sum = 0.0

        # [last, current] ticks; last == 0 means no prior frame
        self._queries = [0, 0]
        self._frame_index = 0

        self._lock = threading.Lock()

    def record_frame_boundary(self) -> float | None:
        """
        Sample the clock at a frame boundary.

        Returns the duration of the frame that just ended in seconds, or
        None on the very first boundary (nothing to measure against yet).
        """
        now = self.clock.now()

        with self._lock:
            self._queries[0] = self._queries[1]
            self._queries[1] = now
            last, current = self._queries

            frame_time: float | None = None
            if last != 0:
                frame_time = (current - last) / self.clock.frequency()

                self._sum -= float(self._samples[self._cursor])
                self._sum += frame_time
                self._samples[self._cursor] = frame_time

                self._cursor = (self._cursor + 1) % self.capacity
                self._count = min(self._count + 1, self.capacity)

            self._frame_index += 1
            return frame_time

    def frames_per_second(self) -> float:
        # Reciprocal of the average frame time, not of the latest frame.
        with self._lock:
            return self._count / self._sum if self._sum > 0 else 0.0

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def sample_count(self) -> int:
        return self._count

    @property
    def total_time(self) -> float:
        return self._sum

    def samples(self) -> list[float]:
        """Valid samples, oldest first."""
        with self._lock:
            if self._count < self.capacity:
                return [float(x) for x in self._samples[: self._count]]
            ordered = np.roll(self._samples, -self._cursor)
            return [float(x) for x in ordered]

    def reset(self) -> None:
        with self._lock:
            self._samples.fill(0.0)
            self._cursor = 0
            self._count = 0
            self._sum = 0.0
            self._queries = [0, 0]
            self._frame_index = 0
