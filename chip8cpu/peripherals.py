"""Interfaces of the devices the CPU talks to.

The CPU never owns its devices: they are created by the host and injected at
construction, so any object implementing these protocols can be used,
including test doubles.
"""

from typing import Callable, NamedTuple, Protocol, runtime_checkable


@runtime_checkable
class Display(Protocol):
    """64x32 monochrome display."""

    def set_pixel(self, x: int, y: int) -> bool:
        """Toggle the pixel at (x, y), wrapping out-of-range coordinates.

        Returns True if the toggle erased a lit pixel.
        """
        ...

    def clear(self) -> None:
        """Turn every pixel off."""
        ...

    def render(self) -> None:
        """Flush the framebuffer to the output surface."""
        ...


@runtime_checkable
class Keyboard(Protocol):
    """Hexadecimal keypad with keys 0x0-0xF."""

    def is_key_pressed(self, key: int) -> bool:
        ...

    def on_next_key_press(self, callback: Callable[[int], object]) -> None:
        """Register a callback invoked once with the next key pressed."""
        ...


@runtime_checkable
class Speaker(Protocol):
    """Single-tone buzzer."""

    def play(self, frequency: float) -> None:
        ...

    def stop(self) -> None:
        ...


class Devices(NamedTuple):
    """Devices handed to the instruction executors."""
    display: Display
    keyboard: Keyboard
    speaker: Speaker
