"""CHIP-8 CPU emulator package."""

from chip8cpu.state import CPUState, StackState, create_state
from chip8cpu.emulator import execute, fetch
from chip8cpu.decode import DecodedInstruction, decode, mnemonic
from chip8cpu.constants import *
from chip8cpu.config import CPUConfig
from chip8cpu.errors import (
    Chip8Error, DecodeError, StackUnderflowError, StackOverflowError,
    MemoryBoundsError, RomLoadError, CPUHaltedError
)
from chip8cpu.peripherals import Display, Keyboard, Speaker, Devices
from chip8cpu.cpu import CPU
from chip8cpu.display import FrameBuffer
from chip8cpu.keyboard import Keypad, KEY_MAP
from chip8cpu.speaker import ToneSpeaker
from chip8cpu.rom import read_rom
from chip8cpu.runner import run_frames
from chip8cpu.logging import set_log_level

__all__ = [
    "CPU",
    "CPUConfig",
    "CPUState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "DecodedInstruction",
    "decode",
    "mnemonic",
    "Display",
    "Keyboard",
    "Speaker",
    "Devices",
    "FrameBuffer",
    "Keypad",
    "KEY_MAP",
    "ToneSpeaker",
    "read_rom",
    "run_frames",
    "set_log_level",
    "Chip8Error",
    "DecodeError",
    "StackUnderflowError",
    "StackOverflowError",
    "MemoryBoundsError",
    "RomLoadError",
    "CPUHaltedError",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
