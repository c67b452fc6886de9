import threading

from perflayer.core.ledger import AllocationLedger, LedgerTotals
from perflayer.types import NULL_HANDLE


def test_allocate_and_free():
    ledger = AllocationLedger()

    ledger.on_allocate(0x1001, 1024)
    ledger.on_allocate(0x1002, 2048)
    assert ledger.snapshot() == LedgerTotals(count=2, total_bytes=3072)

    assert ledger.on_free(0x1001) == 1024
    assert ledger.snapshot() == LedgerTotals(count=1, total_bytes=2048)
    assert 0x1001 not in ledger
    assert 0x1002 in ledger


def test_free_unknown_handle_is_noop():
    ledger = AllocationLedger()
    ledger.on_allocate(1, 512)

    assert ledger.on_free(999) is None
    assert ledger.count == 1
    assert ledger.total_bytes == 512


def test_double_free_does_not_go_negative():
    ledger = AllocationLedger()
    ledger.on_allocate(1, 512)

    ledger.on_free(1)
    ledger.on_free(1)

    assert ledger.count == 0
    assert ledger.total_bytes == 0


def test_null_handles_are_ignored():
    ledger = AllocationLedger()

    assert ledger.on_allocate(NULL_HANDLE, 64) is None
    assert ledger.on_allocate(None, 64) is None
    ledger.on_free(NULL_HANDLE)
    ledger.on_free(None)

    assert ledger.snapshot() == LedgerTotals(0, 0)


def test_stale_handle_is_replaced_not_double_counted():
    ledger = AllocationLedger()
    ledger.on_allocate(7, 100)

    assert ledger.on_allocate(7, 300) == 100
    assert ledger.snapshot() == LedgerTotals(count=1, total_bytes=300)
    assert len(ledger) == 1


def test_concurrent_allocations_balance():
    ledger = AllocationLedger()
    threads_n, per_thread = 8, 1000

    def work(t):
        for i in range(per_thread):
            handle = (t, i)
            ledger.on_allocate(handle, 16)
            if i % 2:
                ledger.on_free(handle)

    threads = [threading.Thread(target=work, args=(t,)) for t in range(threads_n)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    live = threads_n * per_thread // 2
    assert ledger.snapshot() == LedgerTotals(count=live, total_bytes=live * 16)
    assert len(ledger) == live
