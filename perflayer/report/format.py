# perflayer/report/format.py
from __future__ import annotations

from typing import Iterable, List

from perflayer.core.latency import RankedCall
from perflayer.core.ledger import LedgerTotals

CALL_TABLE_HEADER = "Name,Time,Percentage,CallCount"


def format_call_row(row: RankedCall) -> str:
    return (
        f"{row.name},{row.total_time:.4f},{row.percentage:.2f}%,{row.call_count}"
    )


def format_call_table(rows: Iterable[RankedCall]) -> List[str]:
    return [CALL_TABLE_HEADER, *(format_call_row(r) for r in rows)]


def format_memory(totals: LedgerTotals) -> List[str]:
    return [
        f"Memory Allocation Count: {totals.count}",
        f"Total Memory Allocation Size: {totals.total_bytes}",
    ]


def format_fps(fps: float) -> str:
    return f"Avg FPS: {fps:.2f}"
