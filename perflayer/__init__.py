# perflayer/__init__.py
from perflayer.core import (
    AllocationLedger,
    CallLatencyAggregator,
    FrameTimeWindow,
    MonotonicClock,
    OptionFlags,
    ReportOption,
)
from perflayer.profiler import Profiler
from perflayer.report import ReportSink
from perflayer.settings import ProfilerSettings
from perflayer.types import NULL_HANDLE, Result

__all__ = [
    "AllocationLedger",
    "CallLatencyAggregator",
    "FrameTimeWindow",
    "MonotonicClock",
    "NULL_HANDLE",
    "OptionFlags",
    "Profiler",
    "ProfilerSettings",
    "ReportOption",
    "ReportSink",
    "Result",
]
