"""CHIP-8 keypad skip instructions (Exxx)."""

import jax
import jax.lax
from chip8vm.constants import KEY_MASK
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.instructions.dispatch import make_dispatcher, low_nibble


def _key_pressed(state: EmulatorState, instruction: DecodedInstruction):
    return state.keypad[state.V[instruction.x] & KEY_MASK]


def execute_skip_if_key_pressed(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E - Skip next instruction if key VX is pressed."""
    return jax.lax.cond(
        _key_pressed(state, instruction),
        lambda state: state.replace(pc=state.pc + 2),
        lambda state: state,
        state
    )


def execute_skip_if_key_not_pressed(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EXA1 - Skip next instruction if key VX is not pressed."""
    return jax.lax.cond(
        _key_pressed(state, instruction),
        lambda state: state,
        lambda state: state.replace(pc=state.pc + 2),
        state
    )


execute_skip_if_key = make_dispatcher(
    {
        0xE: execute_skip_if_key_pressed,
        0x1: execute_skip_if_key_not_pressed,
    },
    low_nibble,
    16,
)
