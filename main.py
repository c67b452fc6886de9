"""
Instrumented render loop demo.

Opens a pygame OpenGL window, routes every moderngl call through a
Profiler and reports every `display_rate` presents.

Live toggles (from another shell):
    echo -n P > /tmp/VKProfileLayerCmd.fifo   # enable hot call table
    echo -n f > /tmp/VKProfileLayerCmd.fifo   # disable FPS line

Expected keys:
    - ESC: quit
"""

from __future__ import annotations

import sys

import moderngl
import numpy as np
import pygame

from perflayer.core.options import ReportOption
from perflayer.debug.trace import traced
from perflayer.integration.moderngl_hooks import (
    InstrumentedContext,
    instrument_present,
)
from perflayer.profiler import Profiler
from perflayer.settings import ProfilerSettings


def _handle_pygame_events() -> bool:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
    return True


def main() -> None:
    pygame.init()
    pygame.display.set_mode((640, 360), pygame.OPENGL | pygame.DOUBLEBUF)
    pygame.display.set_caption("perflayer")

    settings = ProfilerSettings(display_rate=120)

    with Profiler(settings) as profiler:
        profiler.options.enable(ReportOption.PROFILE_INFO)

        ctx = InstrumentedContext(moderngl.create_context(), profiler)
        present = instrument_present(profiler)

        @traced(profiler, name="app.upload_particles")
        def upload_particles(frame: int) -> moderngl.Buffer:
            data = np.random.default_rng(frame).random(4096, dtype=np.float32)
            return ctx.buffer(data.tobytes())

        frame = 0
        live: list[moderngl.Buffer] = []
        while _handle_pygame_events():
            ctx.clear(0.1, 0.1, 0.12)

            live.append(upload_particles(frame))
            if len(live) > 8:
                ctx.free(live.pop(0))

            present()
            frame += 1

        for buf in live:
            ctx.free(buf)

    pygame.quit()
    sys.exit(0)


if __name__ == "__main__":
    main()
