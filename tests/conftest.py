"""Test configuration and fixtures for CHIP-8 CPU tests."""

import pytest
import jax.numpy as jnp

from chip8cpu import CPU, CPUConfig, Devices, create_state


class StubDisplay:
    """Display double that records calls and keeps lit pixels in a set."""

    def __init__(self):
        self.lit = set()
        self.set_pixel_calls = []
        self.clears = 0
        self.renders = 0

    def set_pixel(self, x, y):
        self.set_pixel_calls.append((x, y))
        position = (x % 64, y % 32)
        if position in self.lit:
            self.lit.remove(position)
            return True
        self.lit.add(position)
        return False

    def clear(self):
        self.clears += 1
        self.lit.clear()

    def render(self):
        self.renders += 1


class StubKeyboard:
    """Keyboard double with a one-shot callback slot."""

    def __init__(self):
        self.pressed = set()
        self.callback = None
        self.registrations = 0

    def is_key_pressed(self, key):
        return key in self.pressed

    def on_next_key_press(self, callback):
        self.registrations += 1
        self.callback = callback

    def press(self, key):
        self.pressed.add(key)
        callback, self.callback = self.callback, None
        if callback is not None:
            callback(key)


class StubSpeaker:
    """Speaker double that records play/stop events."""

    def __init__(self):
        self.events = []

    def play(self, frequency):
        self.events.append(("play", frequency))

    def stop(self):
        self.events.append(("stop",))


@pytest.fixture
def fresh_state():
    """Provide a fresh CPU state for each test."""
    return create_state()


@pytest.fixture
def display():
    return StubDisplay()


@pytest.fixture
def keyboard():
    return StubKeyboard()


@pytest.fixture
def speaker():
    return StubSpeaker()


@pytest.fixture
def devices(display, keyboard, speaker):
    return Devices(display=display, keyboard=keyboard, speaker=speaker)


@pytest.fixture
def make_cpu(display, keyboard, speaker):
    """Factory for a CPU wired to the stub devices."""
    def _make_cpu(program=None, **config_kwargs):
        cpu = CPU(display, keyboard, speaker, config=CPUConfig(**config_kwargs))
        cpu.load_sprites_into_memory()
        if program is not None:
            cpu.load_program_into_memory(program)
        return cpu
    return _make_cpu


@pytest.fixture
def cpu(make_cpu):
    return make_cpu()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program_bytes(*opcodes):
    """Assemble 16-bit opcodes into big-endian program bytes."""
    data = bytearray()
    for opcode in opcodes:
        data += opcode.to_bytes(2, "big")
    return bytes(data)
