"""Frame scheduling, kept apart from what a frame does.

``FrameScheduler.run`` calls ``step(dt_ms)`` once per display frame until its
``CancelToken`` is cancelled (leaving the play screen) or ``step`` returns
``False``.  The clock is injectable; by default it is a ``pygame.time.Clock``
capped at ``FPS``.
"""

from typing import Callable, Optional

import pygame

from config import FPS


class CancelToken:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FrameScheduler:
    def __init__(self, fps: int = FPS, clock=None):
        self.fps = fps
        self.clock = clock if clock is not None else pygame.time.Clock()
        self.ticks = 0

    def run(self, step: Callable[[float], Optional[bool]], token: CancelToken,
            max_ticks: Optional[int] = None) -> int:
        """Drive *step* until cancelled. Returns the number of frames run."""
        ran = 0
        while not token.cancelled:
            if max_ticks is not None and ran >= max_ticks:
                break
            dt_ms = self.clock.tick(self.fps)
            ran += 1
            self.ticks += 1
            if step(dt_ms) is False:
                break
        return ran
