"""Exceptions raised by the CHIP-8 core."""


class Chip8Error(Exception):
    """Base class for every error raised by the emulator."""


class DecodeError(Chip8Error):
    """Raised when an opcode cannot be decoded into an instruction family."""

    def __init__(self, opcode):
        self.opcode = opcode
        super().__init__(f"Cannot decode opcode {opcode!r}")


class StackUnderflowError(Chip8Error):
    """Raised on a return with an empty call stack."""


class StackOverflowError(Chip8Error):
    """Raised on a call with a full call stack."""


class MemoryBoundsError(Chip8Error):
    """Raised when an access would fall outside addressable memory."""

    def __init__(self, address: int, length: int = 1, message: str = None):
        self.address = address
        self.length = length
        if message is None:
            message = f"Memory access of {length} byte(s) at 0x{address:03X} is out of bounds"
        super().__init__(message)


class RomLoadError(Chip8Error):
    """Raised when a ROM cannot be read from its source."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Could not load ROM '{path}': {reason}")


class CPUHaltedError(Chip8Error):
    """Raised when cycling a CPU that stopped on a fatal error."""
