"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.constants import FLAG_REGISTER
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.display import draw_sprite, read_sprite_rows


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw N-row sprite from memory[I] at (VX, VY), VF = collision."""
    sprite_rows = read_sprite_rows(state.memory, state.I)
    display, collided = draw_sprite(
        state.display, state.V[instruction.x], state.V[instruction.y], sprite_rows, instruction.n
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collided, jnp.uint8))
    )
