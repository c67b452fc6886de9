# perflayer/core/ledger.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict

from perflayer.types import Handle, is_null_handle


@dataclass(frozen=True, slots=True)
class LedgerTotals:
    count: int
    total_bytes: int


class AllocationLedger:
    """
    Live allocations keyed by handle.

    count and total_bytes are always derivable from the mapping: each
    handle is added once per allocation and removed once per matching free.
    """

    def __init__(self) -> None:
        self._sizes: Dict[Handle, int] = {}
        self._count = 0
        self._total_bytes = 0
        self._lock = threading.Lock()

    def on_allocate(self, handle: Handle, size: int) -> int | None:
        """
        Record an allocation. If `handle` was still tracked, the stale entry
        is reversed first and its size is returned so the caller can log it.
        """
        if is_null_handle(handle):
            return None

        with self._lock:
            stale = self._sizes.pop(handle, None)
            if stale is not None:
                self._count -= 1
                self._total_bytes -= stale

            self._sizes[handle] = size
            self._count += 1
            self._total_bytes += size
            return stale

    def on_free(self, handle: Handle) -> int | None:
        """Forget `handle`. Null and unknown handles are ignored."""
        if is_null_handle(handle):
            return None

        with self._lock:
            size = self._sizes.pop(handle, None)
            if size is None:
                return None
            self._count -= 1
            self._total_bytes -= size
            return size

    @property
    def count(self) -> int:
        return self._count

    @property
    def total_bytes(self) -> int:
        return self._total_bytes

    def snapshot(self) -> LedgerTotals:
        with self._lock:
            return LedgerTotals(self._count, self._total_bytes)

    def __contains__(self, handle: Handle) -> bool:
        with self._lock:
            return handle in self._sizes

    def __len__(self) -> int:
        with self._lock:
            return len(self._sizes)
