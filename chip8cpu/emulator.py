"""CHIP-8 instruction fetch and execution."""

from typing import Union

from chip8cpu.state import CPUState, as_u16, read_memory
from chip8cpu.decode import DecodedInstruction, decode
from chip8cpu.errors import DecodeError
from chip8cpu.peripherals import Devices
from chip8cpu.instructions.system import execute_system_instruction
from chip8cpu.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8cpu.instructions.alu import execute_alu_operation
from chip8cpu.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8cpu.instructions.display import execute_display
from chip8cpu.instructions.misc import execute_misc_instruction


# Indexed by the first nibble of the opcode
INSTRUCTION_FAMILIES = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)


def execute(
    state: CPUState,
    instruction: Union[int, DecodedInstruction],
    devices: Devices,
) -> CPUState:
    """Execute single CHIP-8 instruction.

    The program counter is advanced past the instruction before dispatch, so
    jumps, calls and skips act on the already advanced value.
    """
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)

    if not 0 <= instruction.opcode < len(INSTRUCTION_FAMILIES):
        raise DecodeError(instruction.raw)

    state = state.replace(pc=as_u16(int(state.pc) + 2))
    return INSTRUCTION_FAMILIES[instruction.opcode](state, instruction, devices)


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into uint16."""
    return (high << 8) | low


def fetch(state: CPUState) -> int:
    """Read the big-endian opcode at PC without moving it."""
    high, low = read_memory(state, state.pc, 2)
    return _pack_u16(high, low)
