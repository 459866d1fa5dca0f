"""ROM file access."""

import os

from chip8cpu.constants import MAX_PROGRAM_SIZE, PROGRAM_START
from chip8cpu.errors import MemoryBoundsError, RomLoadError


def read_rom(path) -> bytes:
    """Read the raw bytes of a CHIP-8 ROM.

    Raises:
        RomLoadError: The file is missing, unreadable or empty
        MemoryBoundsError: The ROM does not fit above the program start address
    """
    try:
        with open(os.fspath(path), "rb") as f:
            rom_data = f.read()
    except OSError as e:
        raise RomLoadError(path, e.strerror or str(e)) from e

    if not rom_data:
        raise RomLoadError(path, "file is empty")
    if len(rom_data) > MAX_PROGRAM_SIZE:
        raise MemoryBoundsError(
            PROGRAM_START, len(rom_data),
            f"ROM '{path}' is {len(rom_data)} bytes, at most {MAX_PROGRAM_SIZE} fit in memory"
        )
    return rom_data
