# perflayer/integration/moderngl_hooks.py
from __future__ import annotations

import functools
import math
from typing import Any, Callable, FrozenSet

import moderngl
import pygame

from perflayer.profiler import Profiler
from perflayer.types import NULL_HANDLE, Result

ALLOCATING_METHODS: FrozenSet[str] = frozenset(
    {
        "buffer",
        "texture",
        "texture_array",
        "texture3d",
        "texture_cube",
        "depth_texture",
        "renderbuffer",
        "depth_renderbuffer",
    }
)


def resource_nbytes(obj: Any, cube: bool = False) -> int:
    """
    Best effort size in bytes of a moderngl Buffer, Texture or Renderbuffer.
    """
    size = getattr(obj, "size", 0)
    if isinstance(size, int):
        return size  # Buffers report bytes directly

    components = getattr(obj, "components", 1)
    dtype = getattr(obj, "dtype", "f1")
    itemsize = int(dtype[-1]) if dtype and dtype[-1].isdigit() else 1
    samples = max(1, getattr(obj, "samples", 0) or 1)

    nbytes = math.prod(size) * components * itemsize * samples
    return nbytes * 6 if cube else nbytes


def _handle_of(obj: Any) -> Any:
    # GL names are allocated per object kind; a buffer and a texture may
    # share the same glo.
    glo = getattr(obj, "glo", NULL_HANDLE)
    if glo == NULL_HANDLE:
        return NULL_HANDLE
    return (type(obj).__name__, glo)


class InstrumentedContext:
    """
    Proxy over a moderngl.Context reporting every method call to a Profiler.

    Resources created through the proxy are tracked in the allocation
    ledger; release them with free() so the ledger stays accurate.
    """

    def __init__(
        self, ctx: moderngl.Context, profiler: Profiler, prefix: str = "ctx"
    ) -> None:
        object.__setattr__(self, "_ctx", ctx)
        object.__setattr__(self, "_profiler", profiler)
        object.__setattr__(self, "_prefix", prefix)

    @property
    def wrapped(self) -> moderngl.Context:
        return self._ctx

    def __getattr__(self, attr: str) -> Any:
        value = getattr(self._ctx, attr)
        if attr.startswith("_") or not callable(value):
            return value
        return self._wrap(attr, value)

    def __setattr__(self, attr: str, value: Any) -> None:
        setattr(self._ctx, attr, value)

    def _wrap(self, attr: str, method: Callable[..., Any]) -> Callable[..., Any]:
        profiler = self._profiler
        call_name = f"{self._prefix}.{attr}"

        @functools.wraps(method)
        def call(*args: Any, **kwargs: Any) -> Any:
            profiler.on_before_call(call_name)
            try:
                value = method(*args, **kwargs)
            except Exception:
                profiler.on_after_call(call_name, Result.ERROR)
                raise
            profiler.on_after_call(call_name, Result.SUCCESS)

            if attr in ALLOCATING_METHODS:
                profiler.on_allocate(
                    _handle_of(value),
                    resource_nbytes(value, cube=attr == "texture_cube"),
                )
            return value

        return call

    def free(self, obj: Any) -> None:
        """Release a resource created through this context."""
        call_name = f"{self._prefix}.free"
        self._profiler.on_before_call(call_name)
        self._profiler.on_free(_handle_of(obj))
        try:
            obj.release()
        except Exception:
            self._profiler.on_after_call(call_name, Result.ERROR)
            raise
        self._profiler.on_after_call(call_name, Result.SUCCESS)


def instrument_present(
    profiler: Profiler,
    present: Callable[[], Any] | None = None,
    name: str = "present",
) -> Callable[[], Any]:
    """
    Wrap a present call (pygame.display.flip by default) so each call
    marks a frame boundary.
    """
    target = present or pygame.display.flip

    def instrumented() -> Any:
        profiler.on_before_call(name)
        profiler.on_frame_boundary()
        try:
            value = target()
        except Exception:
            profiler.on_after_call(name, Result.ERROR)
            raise
        profiler.on_after_call(name, Result.SUCCESS)
        return value

    return instrumented
