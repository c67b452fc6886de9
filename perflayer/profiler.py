# perflayer/profiler.py
from __future__ import annotations

import os
import threading
from typing import List

from perflayer.control.channel import (
    ControlChannel,
    FifoControlChannel,
    NullControlChannel,
)
from perflayer.core.clock import ClockSource, MonotonicClock
from perflayer.core.frame_timer import FrameTimeWindow
from perflayer.core.latency import CallLatencyAggregator, RankedCall
from perflayer.core.ledger import AllocationLedger, LedgerTotals
from perflayer.core.options import OptionFlags, ReportOption
from perflayer.report.format import format_call_table, format_fps, format_memory
from perflayer.report.sink import ReportSink
from perflayer.settings import ProfilerSettings
from perflayer.types import Handle, Result


class Profiler:
    """
    Hook surface called by an interception layer around graphics API calls.

    One instance is owned by the interception layer and shared by every
    call site. Hooks never raise into the host application: failures are
    written to the sink and swallowed.
    """

    def __init__(
        self,
        settings: ProfilerSettings | None = None,
        clock: ClockSource | None = None,
        sink: ReportSink | None = None,
        channel: ControlChannel | None = None,
    ) -> None:
        self.settings = settings or ProfilerSettings()
        self.settings.validate()

        self.clock = clock or MonotonicClock()
        self.options = OptionFlags(self.settings.default_options)

        self.frames = FrameTimeWindow(self.settings.window_size, self.clock)
        self.calls = CallLatencyAggregator(self.clock)
        self.memory_ledger = AllocationLedger()

        self.sink = sink or ReportSink(
            tag=self.settings.tag,
            log_path=self.settings.log_path,
            echo=self.settings.echo,
            flush_threshold=self.settings.flush_threshold,
        )
        self.channel = channel or self._default_channel()

        self.present_count = 0
        self._cadence_lock = threading.Lock()

    def _default_channel(self) -> ControlChannel:
        if self.settings.fifo_path is None or not hasattr(os, "mkfifo"):
            return NullControlChannel()
        return FifoControlChannel(self.settings.fifo_path, sink=self.sink)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> Profiler:
        self.sink.open()
        self.channel.open()
        return self

    def close(self) -> None:
        self.channel.close()
        self.sink.close()

    def __enter__(self) -> Profiler:
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def on_before_call(self, name: str) -> None:
        try:
            if self.options.is_enabled(ReportOption.API_NAME):
                self.sink.write(f"Calling {name}")
            # Always stamped so a call never ends against a start taken
            # before profiling was switched back on.
            self.calls.begin_call(name)
        except Exception as e:
            self._absorb("on_before_call", e)

    def on_after_call(self, name: str, result: int = Result.SUCCESS) -> float:
        """Returns the call's elapsed milliseconds, 0.0 if not timed."""
        try:
            elapsed_ms = 0.0
            if self.options.is_enabled(ReportOption.PROFILE_INFO):
                elapsed_ms = self.calls.end_call(name)

            if self.options.is_enabled(ReportOption.DEBUG_INFO):
                self.sink.write(
                    f"[PROFILE_INFO] - {name} : Time = {elapsed_ms:.6f} ms"
                )
                if result != Result.SUCCESS:
                    self.sink.write(
                        f"[DEBUG_INFO] - {name} returned {_result_name(result)}"
                    )
            return elapsed_ms
        except Exception as e:
            self._absorb("on_after_call", e)
            return 0.0

    def on_allocate(self, handle: Handle, size: int) -> Result:
        try:
            stale = self.memory_ledger.on_allocate(handle, size)
            if stale is not None and self.options.is_enabled(
                ReportOption.DEBUG_INFO
            ):
                self.sink.write(
                    f"[DEBUG_INFO] - handle {handle!r} reallocated "
                    f"without free ({stale} bytes dropped)"
                )
        except Exception as e:
            self._absorb("on_allocate", e)
        return Result.SUCCESS

    def on_free(self, handle: Handle) -> None:
        try:
            self.memory_ledger.on_free(handle)
        except Exception as e:
            self._absorb("on_free", e)

    def on_frame_boundary(self) -> None:
        try:
            self.channel.poll(self.options)

            frame_time = self.frames.record_frame_boundary()
            if frame_time is not None and self.options.is_enabled(
                ReportOption.DEBUG_INFO
            ):
                self.sink.write_lines(
                    [
                        f"[DEBUG_INFO] - Frame Num = {self.frames.frame_index - 1}",
                        f"[DEBUG_INFO] - TotalFrame : Time = {frame_time * 1000:.4f} ms",
                        f"[DEBUG_INFO] - Avg FPS: {self.frames.frames_per_second():.2f}",
                    ]
                )

            with self._cadence_lock:
                self.present_count += 1
                due = self.present_count >= self.settings.display_rate
                if due:
                    self.present_count = 0
            if due:
                self.report()
        except Exception as e:
            self._absorb("on_frame_boundary", e)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def report(self) -> None:
        """Emit one report and start a new profiling epoch."""
        self.sink.write_lines(self.build_report())
        self.sink.flush()

    def build_report(self) -> List[str]:
        lines = format_memory(self.memory())

        if self.options.is_enabled(ReportOption.FPS):
            lines.append(format_fps(self.frames_per_second()))

        top_n = (
            None
            if self.options.is_enabled(ReportOption.PROFILE_INFO_ALL)
            else self.settings.top_n
        )
        # Drained every report so a disabled table never spans epochs.
        rows = self.drain_ranked(top_n)
        if self.options.is_enabled(ReportOption.PROFILE_INFO):
            lines.extend(format_call_table(rows))

        return lines

    def frames_per_second(self) -> float:
        return self.frames.frames_per_second()

    def memory(self) -> LedgerTotals:
        return self.memory_ledger.snapshot()

    def drain_ranked(self, top_n: int | None = None) -> List[RankedCall]:
        return self.calls.drain_ranked(top_n)

    def _absorb(self, hook: str, error: Exception) -> None:
        try:
            self.sink.write(f"[ERROR] - {hook} failed: {error}")
        except Exception:
            pass


def _result_name(result: int) -> str:
    try:
        return Result(result).name
    except ValueError:
        return str(result)
