# perflayer/report/__init__.py
from perflayer.report.format import (
    CALL_TABLE_HEADER,
    format_call_row,
    format_call_table,
    format_fps,
    format_memory,
)
from perflayer.report.sink import ReportSink

__all__ = [
    "CALL_TABLE_HEADER",
    "ReportSink",
    "format_call_row",
    "format_call_table",
    "format_fps",
    "format_memory",
]
