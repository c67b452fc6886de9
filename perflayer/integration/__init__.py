# perflayer/integration/__init__.py
from perflayer.integration.moderngl_hooks import (
    ALLOCATING_METHODS,
    InstrumentedContext,
    instrument_present,
    resource_nbytes,
)

__all__ = [
    "ALLOCATING_METHODS",
    "InstrumentedContext",
    "instrument_present",
    "resource_nbytes",
]
