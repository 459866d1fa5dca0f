"""Frame-driven CHIP-8 CPU bound to its devices."""

from contextlib import contextmanager
from typing import Sequence, Union

import jax
import numpy as np

from chip8cpu.config import CPUConfig
from chip8cpu.constants import MAX_PROGRAM_SIZE, PROGRAM_START
from chip8cpu.decode import decode, mnemonic
from chip8cpu.emulator import execute, fetch
from chip8cpu.errors import Chip8Error, CPUHaltedError, MemoryBoundsError
from chip8cpu.logging import ConsoleLogger
from chip8cpu.peripherals import Devices, Display, Keyboard, Speaker
from chip8cpu.rom import read_rom
from chip8cpu.stack import addresses
from chip8cpu.state import CPUState, create_state, get_register, load_font, set_register, write_memory


ProgramData = Union[bytes, bytearray, memoryview, Sequence[int]]


class CPU:
    """CHIP-8 CPU driven once per display frame.

    The CPU owns memory, registers, stack and timers (held in an immutable
    ``CPUState`` that each instruction replaces) and calls into the display,
    keyboard and speaker it was given. The host calls ``cycle()`` once per
    frame; the CPU itself never sleeps.

    Args:
        display: Display receiving sprite draws, clears and render requests
        keyboard: Keypad queried by the skip-on-key instructions
        speaker: Buzzer started and stopped from the sound timer
        config: Session settings, defaults to ``CPUConfig()``
        rng: PRNG key for the random instruction, derived from ``config.seed`` if omitted
        logger: Logger for load, reset and error messages
    """

    def __init__(
        self,
        display: Display,
        keyboard: Keyboard,
        speaker: Speaker,
        config: CPUConfig = None,
        rng: jax.random.PRNGKey = None,
        logger: ConsoleLogger = None,
    ):
        self.display = display
        self.keyboard = keyboard
        self.speaker = speaker
        self.devices = Devices(display=display, keyboard=keyboard, speaker=speaker)

        self.config = config if config is not None else CPUConfig()
        self.speed = self.config.speed
        self.logger = logger or ConsoleLogger("CPU", log_level=self.config.log_level)

        self._rng = rng if rng is not None else jax.random.PRNGKey(self.config.seed)
        self.state: CPUState = create_state(self._rng)
        self.fonts_loaded = False
        self.halted = False

    # Register file views

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def address(self) -> int:
        return int(self.state.I)

    @property
    def registers(self) -> tuple:
        return tuple(int(v) for v in np.asarray(self.state.V))

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def stack(self) -> list:
        return addresses(self.state.stack)

    @property
    def paused(self) -> bool:
        return self.state.awaiting_key

    # Loading

    def load_sprites_into_memory(self):
        """Install the hexadecimal font glyphs at the start of memory."""
        self.state = load_font(self.state)
        self.fonts_loaded = True

    def load_program_into_memory(self, program: ProgramData):
        """Copy program bytes to memory starting at the program start address.

        Other state is left as is; call ``reset()`` first to start over.
        """
        if isinstance(program, (bytes, bytearray, memoryview)):
            data = list(bytes(program))
        else:
            data = [int(b) for b in program]
            if any(not 0 <= b <= 0xFF for b in data):
                raise ValueError("Program bytes must be in the range 0-255")

        if len(data) > MAX_PROGRAM_SIZE:
            raise MemoryBoundsError(
                PROGRAM_START, len(data),
                f"Program of {len(data)} bytes exceeds the {MAX_PROGRAM_SIZE} bytes available"
            )

        self.state = write_memory(self.state, PROGRAM_START, data)
        self.logger.info(f"Loaded program of {len(data)} bytes at 0x{PROGRAM_START:03X}")

    def load_rom(self, path):
        """Read a ROM file and load it; memory is untouched if reading fails."""
        self.load_program_into_memory(read_rom(path))

    def reset(self):
        """Return to the freshly constructed state, keeping the font if it was loaded."""
        self.state = create_state(self._rng)
        if self.fonts_loaded:
            self.state = load_font(self.state)
        self.halted = False
        self.logger.info("CPU reset")

    # Execution

    @contextmanager
    def _fatal_errors(self):
        try:
            yield
        except Chip8Error as e:
            self.halted = True
            self.logger.error(f"{type(e).__name__} at PC=0x{self.pc:03X}: {e}")
            raise

    def cycle(self):
        """Run one frame: a batch of instructions, timers, sound and render."""
        if self.halted:
            raise CPUHaltedError("CPU halted after a fatal error; call reset() first")

        for _ in range(self.speed):
            if not self.paused:
                with self._fatal_errors():
                    opcode = fetch(self.state)
                self.execute_instruction(opcode)

        if not self.paused:
            self.update_timers()

        self.play_sound()
        self.display.render()

    def execute_instruction(self, opcode: int):
        """Decode and execute one opcode against the current state."""
        was_waiting = self.state.awaiting_key
        with self._fatal_errors():
            instruction = decode(opcode)
            if self.config.trace and self.logger.is_enabled_for("DEBUG"):
                self.logger.debug(f"0x{self.pc:03X}: {instruction.raw:04X}  {mnemonic(instruction)}")
            self.state = execute(self.state, instruction, self.devices)

        if self.state.awaiting_key and not was_waiting:
            self.keyboard.on_next_key_press(self.deliver_key)

    def deliver_key(self, key: int) -> bool:
        """Resume from FX0A with ``key``; ignored unless awaiting a key."""
        register = self.state.wait_register
        if register is None:
            return False
        state = set_register(self.state, register, int(key) & 0xF)
        self.state = state.replace(wait_register=None)
        return True

    def update_timers(self):
        """Count both timers down by one, stopping at zero."""
        if self.delay_timer > 0:
            self.state = self.state.replace(delay_timer=self.state.delay_timer - 1)
        if self.sound_timer > 0:
            self.state = self.state.replace(sound_timer=self.state.sound_timer - 1)

    def play_sound(self):
        """Keep the speaker playing while the sound timer runs."""
        if self.sound_timer > 0:
            self.speaker.play(self.config.tone_frequency)
        else:
            self.speaker.stop()

    def register(self, index: int) -> int:
        return get_register(self.state, index)

    def __repr__(self):
        status = "halted" if self.halted else "awaiting key" if self.paused else "running"
        return f"CPU(pc=0x{self.pc:03X}, I=0x{self.address:03X}, {status})"
