"""Secondary dispatch for opcode families that share a primary nibble."""

from typing import Callable, Dict

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """No operation."""
    return state


def make_dispatcher(
    handlers: Dict[int, Handler],
    selector: Callable[[DecodedInstruction], int],
    table_size: int,
) -> Handler:
    """Build a handler that picks one of ``handlers`` by a secondary opcode field.

    Args:
        handlers: Mapping from secondary value (low nibble or low byte) to handler
        selector: Extracts the secondary value from a decoded instruction
        table_size: Number of possible secondary values (16 or 256)

    Returns:
        Handler that routes unassigned secondary values to ``no_op``
    """
    branches = [no_op, *handlers.values()]
    lookup = [0] * table_size
    for branch_index, secondary in enumerate(handlers, start=1):
        lookup[secondary] = branch_index
    lookup = jnp.array(lookup, dtype=jnp.int32)

    def dispatch(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        return jax.lax.switch(lookup[selector(instruction)], branches, state, instruction)

    return dispatch


def low_nibble(instruction: DecodedInstruction) -> int:
    return instruction.n


def low_byte(instruction: DecodedInstruction) -> int:
    return instruction.nn
