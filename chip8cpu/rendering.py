"""CHIP-8 rendering utilities for visualization and recording."""

from collections import deque
from typing import Deque, Optional, Tuple

import cv2
import numpy as np
from PIL import Image

from chip8cpu.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8cpu.logging import ConsoleLogger

logger = ConsoleLogger("Rendering")

# One minute at 60 Hz.
DEFAULT_MAX_FRAMES = 3600


def display_to_rgb(
    pixels: np.ndarray,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert a boolean framebuffer to an RGB array with optional upscaling.

    Args:
        pixels: Boolean array of shape (64, 32) indexed ``[x, y]``
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")

    # (64 width, 32 height) -> image rows first
    pixels = np.asarray(pixels, dtype=np.bool_).T
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro", "octo")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
        "octo": ((179, 102, 184), (45, 25, 61)),  # Purple on dark purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


class FrameRecorder:
    """Render listener that keeps the frames it is handed.

    Attach it with ``FrameBuffer.add_listener(recorder)``. Only the newest
    ``max_frames`` frames are kept; pass ``None`` to keep them all.
    """

    def __init__(self, max_frames: Optional[int] = DEFAULT_MAX_FRAMES):
        if max_frames is not None and max_frames < 1:
            raise ValueError(f"max_frames must be >= 1, got {max_frames}")
        self.max_frames = max_frames
        self.frames: Deque[np.ndarray] = deque(maxlen=max_frames)

    def __call__(self, pixels: np.ndarray):
        self.frames.append(np.asarray(pixels, dtype=np.bool_))

    def __len__(self):
        return len(self.frames)

    def save_png(self, filename: str, index: int = -1, scale: int = 8, color_scheme: str = "classic"):
        """Save one recorded frame as a PNG image."""
        if not self.frames:
            raise ValueError("No frames recorded")
        on_color, off_color = create_color_scheme(color_scheme)
        rgb = display_to_rgb(self.frames[index], scale, on_color, off_color)
        Image.fromarray(rgb).save(filename)

    def save_video(
        self,
        filename: str,
        fps: float = 60.0,
        scale: int = 8,
        color_scheme: str = "classic",
        persistence: bool = True,
    ):
        """Save recorded frames as an MP4 video with optional phosphor persistence.

        Args:
            filename: Output MP4 file
            fps: Video frame rate
            scale: Upscaling factor
            color_scheme: Color scheme for rendering
            persistence: Enable phosphor screen simulation (smooth fading)
        """
        if not self.frames:
            raise ValueError("No frames recorded")

        height, width = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
        on_color, off_color = np.array(create_color_scheme(color_scheme))

        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        writer = cv2.VideoWriter(filename, fourcc, fps, (width, height))

        glow = np.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=np.float32)
        decay = 0.8

        try:
            for pixels in self.frames:
                if persistence:
                    glow = np.clip(glow * decay + pixels.astype(np.float32), 0.0, 1.0)
                    pixel_values = glow.T
                else:
                    pixel_values = pixels.T.astype(np.float32)

                frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH, 3), dtype=np.uint8)
                for c in range(3):
                    frame[:, :, c] = off_color[c] + pixel_values * (on_color[c] - off_color[c])

                if scale > 1:
                    frame = np.repeat(np.repeat(frame, scale, axis=0), scale, axis=1)
                writer.write(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
        finally:
            writer.release()

        duration = len(self.frames) / fps
        logger.info(f"Video saved: {filename} ({len(self.frames)} frames, {fps} FPS, {duration:.1f}s)")
