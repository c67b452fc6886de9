# perflayer/types.py
from __future__ import annotations

from enum import IntEnum
from typing import Hashable, NewType, TypeAlias

CallName = NewType("CallName", str)

Handle: TypeAlias = Hashable

# Handle value meaning "no allocation".
NULL_HANDLE: Handle = 0


class Result(IntEnum):
    SUCCESS = 0
    TIMEOUT = 1
    ERROR = 2


def is_null_handle(handle: Handle | None) -> bool:
    return handle is None or handle == NULL_HANDLE
