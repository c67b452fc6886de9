# perflayer/core/options.py
from __future__ import annotations

import threading
from enum import Enum
from typing import FrozenSet, Iterable


class ReportOption(str, Enum):
    API_NAME = "api_name"  # Log every intercepted call name
    FPS = "fps"  # Report the averaged frame rate
    DEBUG_INFO = "debug_info"  # Per-frame and per-call debug lines
    PROFILE_INFO = "profile_info"  # Time calls and report the hot call table
    PROFILE_INFO_ALL = "profile_info_all"  # Report every call site, not top-N


DEFAULT_OPTIONS: FrozenSet[ReportOption] = frozenset({ReportOption.FPS})


class OptionFlags:
    """Thread-safe set of enabled ReportOptions."""

    def __init__(self, enabled: Iterable[ReportOption] = DEFAULT_OPTIONS) -> None:
        self._enabled = set(enabled)
        self._lock = threading.Lock()

    def enable(self, option: ReportOption) -> None:
        with self._lock:
            self._enabled.add(option)

    def disable(self, option: ReportOption) -> None:
        with self._lock:
            self._enabled.discard(option)

    def set(self, option: ReportOption, on: bool) -> None:
        if on:
            self.enable(option)
        else:
            self.disable(option)

    def toggle(self, option: ReportOption) -> bool:
        with self._lock:
            if option in self._enabled:
                self._enabled.discard(option)
                return False
            self._enabled.add(option)
            return True

    def is_enabled(self, option: ReportOption) -> bool:
        with self._lock:
            return option in self._enabled

    def __contains__(self, option: ReportOption) -> bool:
        return self.is_enabled(option)

    def snapshot(self) -> FrozenSet[ReportOption]:
        with self._lock:
            return frozenset(self._enabled)
