"""CHIP-8 control flow instructions."""

from chip8cpu.state import CPUState, as_u16, get_register
from chip8cpu.decode import DecodedInstruction
from chip8cpu.peripherals import Devices
from chip8cpu.stack import push
from chip8cpu.instructions.system import unhandled


def execute_jump(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=as_u16(instruction.nnn))


def execute_call(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction, devices)


def skip_next(state: CPUState) -> CPUState:
    return state.replace(pc=as_u16(int(state.pc) + 2))


def make_skip_instruction(condition_fn, require_zero_n=False):
    """Factory for skip instructions."""
    def skip_instruction(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
        if require_zero_n and instruction.n != 0:
            return unhandled(state, instruction, devices)
        if condition_fn(state, instruction):
            return skip_next(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) == get_register(state, inst.y),
    require_zero_n=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) != get_register(state, inst.y),
    require_zero_n=True,
)


def execute_jump_with_offset(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """BNNN - Jump to address NNN + V0."""
    return state.replace(pc=as_u16(instruction.nnn + get_register(state, 0)))


def execute_skip_if_key(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    if instruction.nn not in (0x9E, 0xA1):
        return unhandled(state, instruction, devices)

    key_pressed = bool(devices.keyboard.is_key_pressed(get_register(state, instruction.x)))
    is_not_instruction = instruction.nn == 0xA1
    if key_pressed ^ is_not_instruction:
        return skip_next(state)
    return state
