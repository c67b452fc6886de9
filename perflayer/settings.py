# perflayer/settings.py
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

from perflayer.control.channel import DEFAULT_FIFO_PATH
from perflayer.core.frame_timer import DEFAULT_WINDOW_SIZE
from perflayer.core.options import DEFAULT_OPTIONS, ReportOption
from perflayer.report.sink import DEFAULT_FLUSH_THRESHOLD, DEFAULT_TAG

DEFAULT_LOG_PATH = (
    Path("DumpLogFile.txt")
    if sys.platform == "win32"
    else Path("/tmp/DumpLogFile.txt")
)


@dataclass(slots=True)
class ProfilerSettings:
    """
    Configuration for a Profiler. Set a path to None to disable it.
    """

    # Frames averaged for the FPS estimate
    window_size: int = DEFAULT_WINDOW_SIZE

    # Presents between two reports
    display_rate: int = 60

    # Rows in the hot call table unless PROFILE_INFO_ALL is on
    top_n: int = 10

    fifo_path: Path | None = DEFAULT_FIFO_PATH
    log_path: Path | None = DEFAULT_LOG_PATH

    tag: str = DEFAULT_TAG
    echo: bool = True
    flush_threshold: int = DEFAULT_FLUSH_THRESHOLD

    default_options: FrozenSet[ReportOption] = field(
        default_factory=lambda: DEFAULT_OPTIONS
    )

    def validate(self) -> None:
        if self.window_size <= 0:
            raise ValueError(f"window_size must be positive, got {self.window_size}")
        if self.display_rate <= 0:
            raise ValueError(
                f"display_rate must be positive, got {self.display_rate}"
            )
        if self.top_n <= 0:
            raise ValueError(f"top_n must be positive, got {self.top_n}")
