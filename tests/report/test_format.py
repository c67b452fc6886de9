from perflayer.core.latency import RankedCall
from perflayer.core.ledger import LedgerTotals
from perflayer.report.format import (
    CALL_TABLE_HEADER,
    format_call_row,
    format_call_table,
    format_fps,
    format_memory,
)


def test_call_row_grammar():
    row = RankedCall("vkQueueSubmit", 12.345678, 42, 61.728)
    assert format_call_row(row) == "vkQueueSubmit,12.3457,61.73%,42"


def test_call_table_starts_with_header():
    rows = [RankedCall("a", 2.0, 1, 66.666), RankedCall("b", 1.0, 3, 33.333)]

    assert format_call_table(rows) == [
        "Name,Time,Percentage,CallCount",
        "a,2.0000,66.67%,1",
        "b,1.0000,33.33%,3",
    ]
    assert format_call_table([]) == [CALL_TABLE_HEADER]


def test_memory_and_fps_lines():
    assert format_memory(LedgerTotals(2, 3072)) == [
        "Memory Allocation Count: 2",
        "Total Memory Allocation Size: 3072",
    ]
    assert format_fps(59.9441) == "Avg FPS: 59.94"
