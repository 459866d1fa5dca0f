"""CHIP-8 stack operations."""

import jax.numpy as jnp

from chip8cpu.constants import STACK_SIZE
from chip8cpu.errors import StackOverflowError, StackUnderflowError
from chip8cpu.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflowError(f"Call stack is full ({STACK_SIZE} entries)")
    new_data = stack.data.at[stack.pointer].set(int(address) & 0xFFFF)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack."""
    if stack.pointer <= 0:
        raise StackUnderflowError("Return with an empty call stack")
    new_pointer = stack.pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def addresses(stack: StackState) -> list[int]:
    """Return the stored return addresses, oldest first."""
    return [int(a) for a in jnp.asarray(stack.data[:stack.pointer])]
