from typing import List

import pytest

from perflayer.control.channel import apply_commands
from perflayer.core.options import OptionFlags
from perflayer.profiler import Profiler
from perflayer.report.sink import ReportSink
from perflayer.settings import ProfilerSettings


class FakeClock:
    """Clock ticking in milliseconds: frequency() is 1000 ticks per second."""

    def __init__(self, start: int = 1000) -> None:
        self.ticks = start

    def frequency(self) -> int:
        return 1000

    def now(self) -> int:
        return self.ticks

    def advance(self, ticks: int) -> None:
        self.ticks += ticks


class FakeChannel:
    """Control channel fed by the test instead of a named pipe."""

    def __init__(self) -> None:
        self.pending: List[bytes] = []
        self.opened = False

    def open(self) -> bool:
        self.opened = True
        return True

    def send(self, data: bytes) -> None:
        self.pending.append(data)

    def poll(self, flags: OptionFlags) -> int:
        data = b"".join(self.pending)
        self.pending.clear()
        return apply_commands(flags, data)

    def close(self) -> None:
        self.opened = False


@pytest.fixture
def clock():
    """Returns a fresh FakeClock for each test."""
    return FakeClock()


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def sink():
    return ReportSink(log_path=None, echo=False)


@pytest.fixture
def settings():
    return ProfilerSettings(fifo_path=None, log_path=None, echo=False)


@pytest.fixture
def profiler(settings, clock, sink, channel):
    return Profiler(settings, clock=clock, sink=sink, channel=channel)


@pytest.fixture
def captured(sink, monkeypatch):
    """Lines written to the sink, without the tag prefix."""
    lines: List[str] = []
    original = sink.write

    def record(line: str) -> None:
        lines.append(line)
        original(line)

    monkeypatch.setattr(sink, "write", record)
    return lines
