# perflayer/report/sink.py
from __future__ import annotations

import io
import threading
from pathlib import Path
from typing import IO, Iterable

DEFAULT_TAG = "PerfLayer"
DEFAULT_FLUSH_THRESHOLD = 1024 * 1024


class ReportSink:
    """
    Line oriented text output.

    Lines are tagged and mirrored to stdout. While a log file is open they
    are also collected in memory; the buffer is written to the file once it
    grows past the threshold or when flush() is called. Without a log file
    nothing is buffered.
    """

    def __init__(
        self,
        tag: str = DEFAULT_TAG,
        log_path: Path | None = None,
        echo: bool = True,
        flush_threshold: int = DEFAULT_FLUSH_THRESHOLD,
    ) -> None:
        self.tag = tag
        self.log_path = log_path
        self.echo = echo
        self.flush_threshold = flush_threshold

        self._buffer = io.StringIO()
        self._file: IO[str] | None = None
        self._lock = threading.Lock()

    @property
    def prefix(self) -> str:
        return f"[{self.tag}] - "

    @property
    def persisting(self) -> bool:
        return self._file is not None

    def open(self) -> None:
        if self.log_path is None or self._file is not None:
            return

        try:
            self._file = open(self.log_path, "w", encoding="utf-8")
        except OSError as e:
            self._file = None
            print(f"{self.prefix}[WARNING] - Fail to open dump file {self.log_path}: {e}")

    def write(self, line: str) -> None:
        text = f"{self.prefix}{line}"
        if self.echo:
            print(text)

        with self._lock:
            if self._file is None:
                return
            self._buffer.write(text + "\n")
            if self._buffer.tell() >= self.flush_threshold:
                self._flush_locked()

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        with self._lock:
            self._flush_locked()

    def _flush_locked(self) -> None:
        if self._file is None:
            return

        try:
            self._file.write(self._buffer.getvalue())
            self._file.flush()
        except OSError as e:
            print(f"{self.prefix}[WARNING] - Dump file write failed: {e}")
            self._file = None
        finally:
            self._buffer = io.StringIO()

    def close(self) -> None:
        with self._lock:
            self._flush_locked()
            if self._file is not None:
                self._file.close()
                self._file = None
