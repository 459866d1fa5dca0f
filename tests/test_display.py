"""Tests for display operations (DXYN)."""

import pytest
from chip8cpu import execute, Devices, FrameBuffer, MemoryBoundsError
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state, devices, display):
        """Test basic sprite drawing without collision."""
        state = fresh_state

        # Simple 2x2 box sprite
        sprite = [0xC0, 0xC0]  # 11000000, 11000000
        state = setup_sprite_in_memory(state, 0x300, sprite)

        state = execute(state, 0x600A, devices)  # V0 = 10
        state = execute(state, 0x6105, devices)  # V1 = 5
        state = execute(state, 0xA300, devices)  # I = 0x300

        # Draw sprite: D012 (draw at V0,V1 with height 2)
        state = execute(state, 0xD012, devices)

        assert display.lit == {(10, 5), (11, 5), (10, 6), (11, 6)}
        assert state.V[15] == 0

    def test_bits_consumed_high_to_low(self, fresh_state, devices, display):
        """The most significant bit of a row is the leftmost pixel."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0b10100001])
        state = execute(state, 0xA300, devices)

        state = execute(state, 0xD011, devices)  # V0 = V1 = 0

        assert display.set_pixel_calls == [(0, 0), (2, 0), (7, 0)]

    def test_only_set_bits_touch_the_display(self, fresh_state, devices, display):
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x00, 0x00, 0x00])
        state = execute(state, 0xA300, devices)

        state = execute(state, 0xD013, devices)

        assert display.set_pixel_calls == []
        assert state.V[15] == 0

    def test_collision_detection(self, fresh_state, devices, display):
        """Test collision flag when sprite overlaps existing pixels."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])

        state = execute(state, 0x6014, devices)  # V0 = 20
        state = execute(state, 0x610A, devices)  # V1 = 10
        state = execute(state, 0xA400, devices)  # I = 0x400

        # Draw first time - no collision
        state = execute(state, 0xD011, devices)
        assert (20, 10) in display.lit
        assert state.V[15] == 0

        # Draw again at same location - should collide
        state = execute(state, 0xD011, devices)
        assert (20, 10) not in display.lit  # Pixel erased by XOR
        assert state.V[15] == 1

    def test_collision_flag_cleared_on_next_clean_draw(self, fresh_state, devices):
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])
        state = execute(state, 0xA400, devices)

        state = execute(state, 0xD011, devices)
        state = execute(state, 0xD011, devices)
        assert state.V[15] == 1

        state = execute(state, 0xD011, devices)
        assert state.V[15] == 0

    def test_sprite_coordinates_passed_unwrapped(self, fresh_state, devices, display):
        """Wrapping is left to the display."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xC0])
        state = execute(state, 0x603F, devices)  # V0 = 63
        state = execute(state, 0x611F, devices)  # V1 = 31
        state = execute(state, 0xA300, devices)

        state = execute(state, 0xD011, devices)

        assert display.set_pixel_calls == [(63, 31), (64, 31)]
        assert display.lit == {(63, 31), (0, 31)}

    def test_font_glyph_draw(self, cpu, display):
        """Drawing glyph 0 through FX29 lights the outline of a zero."""
        cpu.execute_instruction(0x6000)  # V0 = 0
        cpu.execute_instruction(0xF029)  # I = glyph 0
        cpu.execute_instruction(0xD005)  # Draw 5 rows at (0, 0)

        # 0xF0, 0x90, 0x90, 0x90, 0xF0
        assert len(display.lit) == 4 + 2 + 2 + 2 + 4
        assert (1, 2) not in display.lit
        assert (3, 2) in display.lit

    def test_sprite_read_out_of_bounds(self, fresh_state, devices):
        """Sprite rows past the end of memory are rejected."""
        state = execute(fresh_state, 0xAFFE, devices)  # I = 0xFFE

        with pytest.raises(MemoryBoundsError):
            execute(state, 0xD003, devices)


class TestWithFrameBuffer:
    """DXYN against the bundled framebuffer."""

    def test_xor_behavior(self, fresh_state, keyboard, speaker):
        """Drawing twice erases the sprite and reports a collision."""
        framebuffer = FrameBuffer()
        devices = Devices(display=framebuffer, keyboard=keyboard, speaker=speaker)

        state = setup_sprite_in_memory(fresh_state, 0x500, [0xF0])
        state = execute(state, 0x6008, devices)  # V0 = 8
        state = execute(state, 0x610F, devices)  # V1 = 15
        state = execute(state, 0xA500, devices)

        state = execute(state, 0xD011, devices)
        assert framebuffer.pixels[8:12, 15].all()
        assert framebuffer.lit_pixels() == 4
        assert state.V[15] == 0

        state = execute(state, 0xD011, devices)
        assert framebuffer.lit_pixels() == 0
        assert state.V[15] == 1

    def test_wraps_horizontally(self, fresh_state, keyboard, speaker):
        framebuffer = FrameBuffer()
        devices = Devices(display=framebuffer, keyboard=keyboard, speaker=speaker)

        state = setup_sprite_in_memory(fresh_state, 0x500, [0xFF])
        state = execute(state, 0x603C, devices)  # V0 = 60
        state = execute(state, 0xA500, devices)

        execute(state, 0xD011, devices)

        assert framebuffer.pixels[60:64, 0].all()
        assert framebuffer.pixels[0:4, 0].all()
        assert framebuffer.lit_pixels() == 8
