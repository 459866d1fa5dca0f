"""CHIP-8 miscellaneous instructions (Fxxx)."""

from chip8cpu.constants import FONT_START, FONT_GLYPH_SIZE
from chip8cpu.state import (
    CPUState, as_u8, as_u16, get_register, set_register, read_memory, write_memory
)
from chip8cpu.decode import DecodedInstruction
from chip8cpu.peripherals import Devices
from chip8cpu.instructions.system import unhandled


def execute_get_delay_timer(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX07 - Set VX to delay timer value."""
    return set_register(state, instruction.x, int(state.delay_timer))


def execute_wait_for_key(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX0A - Wait for key press.

    Only switches the state to awaiting; the CPU hooks the keyboard and
    resumes through ``CPU.deliver_key``.
    """
    return state.replace(wait_register=instruction.x)


def execute_set_delay_timer(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=as_u8(get_register(state, instruction.x)))


def execute_set_sound_timer(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=as_u8(get_register(state, instruction.x)))


def execute_add_to_index(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX1E - Add VX to I register."""
    return state.replace(I=as_u16(int(state.I) + get_register(state, instruction.x)))


def execute_font_character(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + get_register(state, instruction.x) * FONT_GLYPH_SIZE
    return state.replace(I=as_u16(font_address))


def execute_bcd_conversion(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = get_register(state, instruction.x)
    digits = [value // 100, (value // 10) % 10, value % 10]
    return write_memory(state, state.I, digits)


def execute_store_registers(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX55 - Store V0 through VX in memory starting at I."""
    values = [get_register(state, i) for i in range(instruction.x + 1)]
    return write_memory(state, state.I, values)


def execute_load_registers(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = read_memory(state, state.I, instruction.x + 1)
    for index, value in enumerate(values):
        state = set_register(state, index, value)
    return state


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn, unhandled)
    return handler(state, instruction, devices)
