"""CHIP-8 stack operations.

The stack pointer is not bounds checked; slots are addressed modulo the stack
size, so overflow and underflow wrap around instead of failing.
"""

import jax.numpy as jnp
from chip8vm.constants import STACK_MASK
from chip8vm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    slot = stack.pointer & STACK_MASK
    new_data = stack.data.at[slot].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = stack.pointer - 1
    return stack.replace(pointer=new_pointer), stack.data[new_pointer & STACK_MASK]
