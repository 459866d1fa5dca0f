"""CHIP-8 system instructions (0x0xxx)."""

from chip8cpu.state import CPUState, as_u16
from chip8cpu.decode import DecodedInstruction, mnemonic
from chip8cpu.peripherals import Devices
from chip8cpu.stack import pop
from chip8cpu.logging import logger


def unhandled(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """Unknown sub-opcode of a known family: report it and leave the state alone."""
    logger.warning(
        f"Unhandled instruction 0x{instruction.raw:04X} ({mnemonic(instruction)}) "
        f"at 0x{int(state.pc) - 2:03X}, ignored"
    )
    return state


def execute_clear_screen(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """00E0 - Clear display."""
    devices.display.clear()
    return state


def execute_return(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=as_u16(address))


SYSTEM_INSTRUCTIONS = {
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """Dispatch system instructions."""
    handler = SYSTEM_INSTRUCTIONS.get(instruction.raw, unhandled)
    return handler(state, instruction, devices)
