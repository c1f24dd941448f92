"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax
import jax.numpy as jnp
from chip8vm import create_state


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state with a fixed random key for each test."""
    return create_state(jax.random.PRNGKey(0))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **values):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10)``."""
    V = state.V
    for name, value in values.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)
