# perflayer/control/__init__.py
from perflayer.control.channel import (
    COMMANDS,
    DEFAULT_FIFO_PATH,
    ControlChannel,
    FifoControlChannel,
    NullControlChannel,
    apply_commands,
)

__all__ = [
    "COMMANDS",
    "DEFAULT_FIFO_PATH",
    "ControlChannel",
    "FifoControlChannel",
    "NullControlChannel",
    "apply_commands",
]
