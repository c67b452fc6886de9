# perflayer/debug/trace.py
from __future__ import annotations

import functools
from typing import Callable, ParamSpec, TypeVar

from perflayer.profiler import Profiler
from perflayer.types import Result

P = ParamSpec("P")
R = TypeVar("R")


def traced(
    profiler: Profiler, name: str | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Report every call of the decorated function to `profiler` as an
    intercepted API call.

    Args:
        profiler: Profiler receiving the before/after hooks.
        name: Call name used in reports. Defaults to the function's
              qualified name.
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        call_name = name or fn.__qualname__

        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            profiler.on_before_call(call_name)
            try:
                value = fn(*args, **kwargs)
            except Exception:
                profiler.on_after_call(call_name, Result.ERROR)
                raise
            profiler.on_after_call(call_name, Result.SUCCESS)
            return value

        return wrapper

    return decorator
