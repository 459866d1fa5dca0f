"""CHIP-8 display operations."""

from chip8cpu.constants import FLAG_REGISTER, SPRITE_WIDTH
from chip8cpu.state import CPUState, get_register, read_memory, set_register
from chip8cpu.decode import DecodedInstruction
from chip8cpu.peripherals import Devices


def execute_display(state: CPUState, instruction: DecodedInstruction, devices: Devices) -> CPUState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Every set bit of the sprite is XORed onto the display through
    ``set_pixel``; VF reports whether any lit pixel was erased. Coordinate
    wrapping is the display's job.
    """
    sprite_x = get_register(state, instruction.x)
    sprite_y = get_register(state, instruction.y)
    rows = read_memory(state, state.I, instruction.n)

    collision = False
    for row_offset, sprite_byte in enumerate(rows):
        for col_offset in range(SPRITE_WIDTH):
            if (sprite_byte >> (SPRITE_WIDTH - 1 - col_offset)) & 1:
                if devices.display.set_pixel(sprite_x + col_offset, sprite_y + row_offset):
                    collision = True

    return set_register(state, FLAG_REGISTER, int(collision))
