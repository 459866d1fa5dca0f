"""Hexadecimal keypad implementing the CPU keyboard interface."""

from typing import Callable, Dict, Optional

import numpy as np

from chip8cpu.constants import NUM_KEYS


# Host keys laid out as the 4x4 COSMAC VIP keypad:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


class Keypad:
    """Tracks the 16 CHIP-8 keys and fires a one-shot next-key callback."""

    def __init__(self, key_map: Dict[str, int] = None):
        self.key_map = dict(KEY_MAP if key_map is None else key_map)
        self.pressed = np.zeros(NUM_KEYS, dtype=np.bool_)
        self._next_key_callback: Optional[Callable[[int], object]] = None

    @staticmethod
    def _check_key(key: int) -> int:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key must be in 0x0-0xF, got {key!r}")
        return key

    def is_key_pressed(self, key: int) -> bool:
        # Registers can hold any byte; only 0x0-0xF name a key
        if not 0 <= key < NUM_KEYS:
            return False
        return bool(self.pressed[key])

    def on_next_key_press(self, callback: Callable[[int], object]):
        self._next_key_callback = callback

    @property
    def awaiting_key(self) -> bool:
        return self._next_key_callback is not None

    def key_down(self, key: int):
        """Press a logical key; a released-to-pressed transition fires the callback."""
        key = self._check_key(key)
        if self.pressed[key]:
            return
        self.pressed[key] = True
        callback, self._next_key_callback = self._next_key_callback, None
        if callback is not None:
            callback(key)

    def key_up(self, key: int):
        self.pressed[self._check_key(key)] = False

    def press(self, host_key: str) -> bool:
        """Press the key mapped to ``host_key``; returns False for unmapped keys."""
        key = self.key_map.get(host_key.lower())
        if key is None:
            return False
        self.key_down(key)
        return True

    def release(self, host_key: str) -> bool:
        key = self.key_map.get(host_key.lower())
        if key is None:
            return False
        self.key_up(key)
        return True

    def release_all(self):
        self.pressed[:] = False
