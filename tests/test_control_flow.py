"""Tests for control flow instructions."""

import pytest
from chip8cpu import execute, StackOverflowError, STACK_SIZE


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state, devices):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001, devices)
        assert state.pc == 1

    def test_jump_with_offset_uses_v0(self, fresh_state, devices):
        """BNNN - Jump to NNN + V0."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0x10))
        state = state.replace(V=state.V.at[3].set(0x77))  # Should be ignored

        state = execute(state, 0xB300, devices)

        assert state.pc == 0x310

    def test_jump_with_offset_past_12_bits(self, fresh_state, devices):
        """BNNN - The sum is not wrapped to 12 bits."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))

        state = execute(state, 0xBFFF, devices)

        assert state.pc == 0x10FE


class TestCall:
    """Test subroutine calls."""

    def test_call_pushes_return_address(self, fresh_state, devices):
        """2NNN - Push the address of the next instruction and jump."""
        state = execute(fresh_state, 0x2345, devices)

        assert state.pc == 0x345
        assert state.stack.pointer == 1
        assert state.stack.data[0] == 0x202

    def test_nested_calls(self, fresh_state, devices):
        state = execute(fresh_state, 0x2300, devices)
        state = execute(state, 0x2400, devices)

        assert state.stack.pointer == 2
        assert state.stack.data[0] == 0x202
        assert state.stack.data[1] == 0x302

    def test_call_overflow(self, fresh_state, devices):
        """2NNN with a full stack raises instead of overwriting."""
        state = fresh_state
        for _ in range(STACK_SIZE):
            state = execute(state, 0x2200, devices)

        with pytest.raises(StackOverflowError):
            execute(state, 0x2200, devices)


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state, devices):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542, devices)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 4

    def test_skip_if_equal_immediate_false(self, fresh_state, devices):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542, devices)
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_true(self, fresh_state, devices):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320, devices)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 4

    def test_skip_if_not_equal_immediate_false(self, fresh_state, devices):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320, devices)
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_true(self, fresh_state, devices):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120, devices)  # Skip if V1 == V2
        assert state.pc == initial_pc + 4

    def test_skip_if_equal_register_false(self, fresh_state, devices):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120, devices)
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_true(self, fresh_state, devices):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780, devices)  # Skip if V7 != V8
        assert state.pc == initial_pc + 4

    def test_skip_if_not_equal_register_false(self, fresh_state, devices):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xAA))
        initial_pc = state.pc

        state = execute(state, 0x9780, devices)
        assert state.pc == initial_pc + 2

    @pytest.mark.parametrize("opcode", [0x5121, 0x512F, 0x9781])
    def test_register_skips_with_nonzero_low_nibble(self, fresh_state, devices, capsys, opcode):
        """5XYN/9XYN with N != 0 are unhandled: logged, no skip."""
        state = execute(fresh_state, opcode, devices)

        assert state.pc == 0x202
        assert "Unhandled instruction" in capsys.readouterr().out


class TestKeySkips:
    """Test EX9E / EXA1 against the keyboard device."""

    def test_skip_if_key_pressed(self, fresh_state, devices, keyboard):
        """EX9E - Skip if key pressed."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))
        keyboard.pressed.add(5)

        state = execute(state, 0xE09E, devices)
        assert state.pc == 0x204

    def test_no_skip_if_key_not_pressed(self, fresh_state, devices):
        """EX9E - Do not skip when the key is up."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))

        state = execute(state, 0xE09E, devices)
        assert state.pc == 0x202

    def test_skip_if_key_not_pressed(self, fresh_state, devices):
        """EXA1 - Skip if key not pressed."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))

        state = execute(state, 0xE0A1, devices)
        assert state.pc == 0x204

    def test_no_skip_if_key_pressed(self, fresh_state, devices, keyboard):
        """EXA1 - Do not skip when the key is down."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))
        keyboard.pressed.add(5)

        state = execute(state, 0xE0A1, devices)
        assert state.pc == 0x202

    def test_key_queried_from_vx(self, fresh_state, devices, keyboard):
        """The keyboard is asked about the value of VX, not X."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0xB))
        keyboard.pressed.add(0xB)

        state = execute(state, 0xE39E, devices)
        assert state.pc == 0x204

    def test_unknown_key_instruction(self, fresh_state, devices, capsys):
        state = execute(fresh_state, 0xE0FF, devices)

        assert state.pc == 0x202
        assert "Unhandled instruction 0xE0FF" in capsys.readouterr().out
