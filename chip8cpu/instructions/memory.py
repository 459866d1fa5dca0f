"""CHIP-8 memory and register operations."""

import jax

from chip8cpu.state import CPUState, as_u16, get_register, set_register
from chip8cpu.decode import DecodedInstruction
from chip8cpu.peripherals import Devices


def execute_set(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """6XNN - Set VX = NN."""
    return set_register(state, instruction.x, instruction.nn)


def execute_add(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """7XNN - Add NN to VX, without carry."""
    return set_register(state, instruction.x, get_register(state, instruction.x) + instruction.nn)


def execute_set_index(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """ANNN - Set I = NNN."""
    return state.replace(I=as_u16(instruction.nnn))


def random_byte(rng: jax.random.PRNGKey) -> tuple[jax.random.PRNGKey, int]:
    """Draw a byte from ``rng``, returning the next key and the value."""
    key, subkey = jax.random.split(rng)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256)
    return key, int(value)


def execute_random(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """CXNN - Set VX = random & NN."""
    key, value = random_byte(state.rng)
    state = set_register(state, instruction.x, value & instruction.nn)
    return state.replace(rng=key)
