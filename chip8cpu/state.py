"""CHIP-8 CPU state structures."""

from typing import Optional, Sequence

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, PyTreeNode, field

from chip8cpu.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_REGISTERS, STACK_SIZE
)
from chip8cpu.errors import MemoryBoundsError


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class CPUState(PyTreeNode):
    """Register file, memory, stack and timers of a CHIP-8 CPU.

    ``wait_register`` holds the register index targeted by a pending FX0A;
    the CPU is running when it is ``None`` and awaiting a key otherwise.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    wait_register: Optional[int] = field(pytree_node=False, default=None)

    @property
    def awaiting_key(self) -> bool:
        return self.wait_register is not None


def create_state(rng: jax.random.PRNGKey = jax.random.PRNGKey(0)) -> CPUState:
    """Create a zeroed CPU state with PC at the program start."""
    return CPUState(rng)


def as_u8(value: int) -> jnp.ndarray:
    return jnp.asarray(int(value) & 0xFF, dtype=jnp.uint8)


def as_u16(value: int) -> jnp.ndarray:
    return jnp.asarray(int(value) & 0xFFFF, dtype=jnp.uint16)


def get_register(state: CPUState, index: int) -> int:
    return int(state.V[index])


def set_register(state: CPUState, index: int, value: int) -> CPUState:
    return state.replace(V=state.V.at[index].set(int(value) & 0xFF))


def check_bounds(address: int, length: int = 1):
    """Raise if ``length`` bytes starting at ``address`` leave addressable memory."""
    if address < 0 or length < 0 or address + length > MEMORY_SIZE:
        raise MemoryBoundsError(address, length)


def read_memory(state: CPUState, address: int, length: int = 1) -> list[int]:
    """Read ``length`` bytes starting at ``address``."""
    address = int(address)
    check_bounds(address, length)
    return [int(b) for b in np.asarray(state.memory[address:address + length])]


def write_memory(state: CPUState, address: int, values: Sequence[int]) -> CPUState:
    """Write ``values`` starting at ``address``."""
    address = int(address)
    check_bounds(address, len(values))
    if len(values) == 0:
        return state
    data = jnp.asarray(np.asarray(values, dtype=np.uint8))
    return state.replace(memory=state.memory.at[address:address + len(values)].set(data))


def load_font(state: CPUState) -> CPUState:
    """Write the built-in hexadecimal font at the font start address."""
    return write_memory(state, FONT_START, FONT_DATA)
