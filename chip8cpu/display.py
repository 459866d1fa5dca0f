"""Headless framebuffer implementing the CPU display interface."""

from typing import Callable, List

import numpy as np

from chip8cpu.constants import SCREEN_WIDTH, SCREEN_HEIGHT


RenderListener = Callable[[np.ndarray], object]


class FrameBuffer:
    """64x32 monochrome framebuffer indexed ``[x, y]``.

    ``render()`` hands a copy of the pixels to every registered listener,
    e.g. a ``FrameRecorder`` or a host window.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((width, height), dtype=np.bool_)
        self.listeners: List[RenderListener] = []
        self.frame_count = 0

    def set_pixel(self, x: int, y: int) -> bool:
        """XOR the pixel at (x, y), wrapping around the edges.

        Returns True if a lit pixel was erased.
        """
        x %= self.width
        y %= self.height
        erased = bool(self.pixels[x, y])
        self.pixels[x, y] = not erased
        return erased

    def clear(self):
        self.pixels[:] = False

    def render(self):
        self.frame_count += 1
        for listener in self.listeners:
            listener(self.pixels.copy())

    def add_listener(self, listener: RenderListener):
        self.listeners.append(listener)

    def remove_listener(self, listener: RenderListener):
        self.listeners.remove(listener)

    def lit_pixels(self) -> int:
        return int(self.pixels.sum())

    def __str__(self):
        return "\n".join(
            "".join("#" if self.pixels[x, y] else "." for x in range(self.width))
            for y in range(self.height)
        )
