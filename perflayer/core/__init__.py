# perflayer/core/__init__.py
from perflayer.core.clock import ClockSource, MonotonicClock, elapsed
from perflayer.core.frame_timer import FrameTimeWindow
from perflayer.core.latency import CallLatencyAggregator, CallStat, RankedCall
from perflayer.core.ledger import AllocationLedger, LedgerTotals
from perflayer.core.options import DEFAULT_OPTIONS, OptionFlags, ReportOption

__all__ = [
    "ClockSource",
    "MonotonicClock",
    "elapsed",
    "FrameTimeWindow",
    "CallLatencyAggregator",
    "CallStat",
    "RankedCall",
    "AllocationLedger",
    "LedgerTotals",
    "DEFAULT_OPTIONS",
    "OptionFlags",
    "ReportOption",
]
