# perflayer/control/channel.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Protocol, Tuple

from perflayer.core.options import OptionFlags, ReportOption
from perflayer.report.sink import ReportSink

DEFAULT_FIFO_PATH = Path("/tmp/VKProfileLayerCmd.fifo")

# byte -> (option, enable?)
COMMANDS: Dict[int, Tuple[ReportOption, bool]] = {
    ord("N"): (ReportOption.API_NAME, True),
    ord("n"): (ReportOption.API_NAME, False),
    ord("F"): (ReportOption.FPS, True),
    ord("f"): (ReportOption.FPS, False),
    ord("D"): (ReportOption.DEBUG_INFO, True),
    ord("d"): (ReportOption.DEBUG_INFO, False),
    ord("P"): (ReportOption.PROFILE_INFO, True),
    ord("p"): (ReportOption.PROFILE_INFO, False),
    ord("A"): (ReportOption.PROFILE_INFO_ALL, True),
    ord("a"): (ReportOption.PROFILE_INFO_ALL, False),
}


def apply_commands(flags: OptionFlags, data: bytes) -> int:
    """
    Apply each recognised command byte in order.
    Returns how many bytes were recognised; the rest are ignored.
    """
    applied = 0
    for byte in data:
        command = COMMANDS.get(byte)
        if command is None:
            continue
        option, on = command
        flags.set(option, on)
        applied += 1
    return applied


class ControlChannel(Protocol):
    def open(self) -> bool: ...

    def poll(self, flags: OptionFlags) -> int: ...

    def close(self) -> None: ...


class NullControlChannel:
    """Channel used when live toggling is disabled."""

    def open(self) -> bool:
        return False

    def poll(self, flags: OptionFlags) -> int:
        return 0

    def close(self) -> None:
        pass


class FifoControlChannel:
    """
    Named pipe carrying single byte commands.

    The pipe is read non-blocking: an empty pipe (or no writer at all)
    returns immediately from poll().
    """

    def __init__(
        self,
        path: Path = DEFAULT_FIFO_PATH,
        sink: ReportSink | None = None,
        read_size: int = 64,
    ) -> None:
        self.path = path
        self.sink = sink
        self.read_size = read_size
        self._fd: int | None = None

    @property
    def is_open(self) -> bool:
        return self._fd is not None

    def open(self) -> bool:
        if self._fd is not None:
            return True

        try:
            if not self.path.exists():
                os.mkfifo(self.path, 0o666)
            self._fd = os.open(self.path, os.O_RDONLY | os.O_NONBLOCK)
        except (OSError, AttributeError) as e:
            self._fd = None
            self._log(f"[ERROR] - open {self.path} error! ({e})")
            return False

        self._log(f"[INFO] - open {self.path} successfully!")
        return True

    def read(self) -> bytes:
        if self._fd is None:
            return b""

        chunks = []
        while True:
            try:
                data = os.read(self._fd, self.read_size)
            except BlockingIOError:
                break  # No data
            except OSError:
                break
            if not data:
                break  # No writer
            chunks.append(data)
        return b"".join(chunks)

    def poll(self, flags: OptionFlags) -> int:
        data = self.read()
        if not data:
            return 0
        return apply_commands(flags, data)

    def close(self) -> None:
        if self._fd is None:
            return
        try:
            os.close(self._fd)
        finally:
            self._fd = None

    def _log(self, line: str) -> None:
        if self.sink is not None:
            self.sink.write(line)
        else:
            print(line)
