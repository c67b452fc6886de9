# perflayer/debug/__init__.py
from perflayer.debug.trace import traced

__all__ = ["traced"]
