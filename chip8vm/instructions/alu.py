"""CHIP-8 ALU operations (8xxx).

Operations that report a flag write VF before computing VX, and read their
operands back after that write. When X or Y is 0xF the result therefore sees
the freshly written flag.
"""

from typing import Callable

import jax.numpy as jnp
from chip8vm.constants import FLAG_REGISTER
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.instructions.dispatch import make_dispatcher, low_nibble


def alu_set(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY0 - Set: VX = VY."""
    return vy


def alu_or(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy


def alu_and(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy


def alu_xor(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy


def alu_sub_xy(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY5 - Subtract: VX -= VY."""
    return vx - vy


def alu_sub_yx(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY7 - Subtract: VX = VY - VX."""
    return vy - vx


def alu_shift_right(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1


def alu_shift_left(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XYE - Shift left: VX <<= 1."""
    return vx << 1


def _as_flag(value) -> jnp.ndarray:
    return jnp.astype(value, jnp.uint8)


def make_alu_instruction(result_fn: Callable) -> Callable:
    """Factory for ALU instructions that leave VF untouched."""
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        result = result_fn(state.V[instruction.x], state.V[instruction.y])
        return state.replace(V=state.V.at[instruction.x].set(result))
    return alu_instruction


def make_flagged_alu_instruction(flag_fn: Callable, result_fn: Callable) -> Callable:
    """Factory for ALU instructions that write VF, then VX."""
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        V = state.V.at[FLAG_REGISTER].set(_as_flag(flag_fn(state.V[instruction.x], state.V[instruction.y])))
        V = V.at[instruction.x].set(result_fn(V[instruction.x], V[instruction.y]))
        return state.replace(V=V)
    return alu_instruction


def execute_add_with_carry(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY4 - Add: VX += VY, VF = carry."""
    total = jnp.astype(state.V[instruction.x], jnp.int32) + jnp.astype(state.V[instruction.y], jnp.int32)
    V = state.V.at[FLAG_REGISTER].set(_as_flag(total > 0xFF))
    V = V.at[instruction.x].set(jnp.astype(total & 0xFF, jnp.uint8))
    return state.replace(V=V)


execute_alu_operation = make_dispatcher(
    {
        0x0: make_alu_instruction(alu_set),
        0x1: make_alu_instruction(alu_or),
        0x2: make_alu_instruction(alu_and),
        0x3: make_alu_instruction(alu_xor),
        0x4: execute_add_with_carry,
        0x5: make_flagged_alu_instruction(lambda vx, vy: vx > vy, alu_sub_xy),
        # Shifts read VX; VY is ignored
        0x6: make_flagged_alu_instruction(lambda vx, vy: vx & 1, alu_shift_right),
        0x7: make_flagged_alu_instruction(lambda vx, vy: vy > vx, alu_sub_yx),
        0xE: make_flagged_alu_instruction(lambda vx, vy: (vx & 0x80) >> 7, alu_shift_left),
    },
    low_nibble,
    16,
)
