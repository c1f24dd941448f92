"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, field, PyTreeNode

from chip8vm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, NUM_REGISTERS, NUM_KEYS, STACK_SIZE
)
from chip8vm.display import empty_display
from chip8vm.rng import default_key


@dataclass(frozen=True)
class StackState:
    """Return-address stack for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))


class EmulatorState(PyTreeNode):
    """Complete CHIP-8 machine state.

    Every field is a fixed-dtype JAX array so the state can be carried through
    ``jax.lax.switch``/``jax.lax.scan`` unchanged in structure.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=empty_display)
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))


def create_state(rng: Optional[jax.Array] = None) -> EmulatorState:
    """Create initial emulator state with font data loaded.

    Args:
        rng: PRNG key for the random source. When omitted the key is seeded
            from the wall clock, so ``CXNN`` results differ between runs.
    """
    if rng is None:
        rng = default_key()
    state = EmulatorState(rng)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))
