"""Main CHIP-8 emulator execution engine."""

from functools import partial

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import decode
from chip8vm.constants import ADDRESS_MASK, PROGRAM_START, MAX_PROGRAM_SIZE
from chip8vm.instructions.system import execute_system_instruction
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.keypad import execute_skip_if_key
from chip8vm.instructions.misc import execute_misc_instruction
from chip8vm.logging import get_logger, scan_with_progress

logger = get_logger()

# Indexed by the primary opcode nibble
PRIMARY_HANDLERS = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return jax.lax.switch(decoded_instruction.opcode, PRIMARY_HANDLERS, state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance the program counter."""
    address = jnp.astype(state.pc, jnp.int32)
    instruction = _pack_u16(
        state.memory[address & ADDRESS_MASK], state.memory[(address + 1) & ADDRESS_MASK]
    )
    return state.replace(pc=state.pc + 2), instruction


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement the delay and sound timers, stopping at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


@jax.jit
def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle, then tick both timers."""
    state, instruction = fetch(state)
    state = execute(state, instruction)
    return tick_timers(state)


@partial(jax.jit, static_argnames=("num_steps", "progress"))
def run(state: EmulatorState, num_steps: int, progress: bool = False) -> EmulatorState:
    """Run ``num_steps`` consecutive steps inside a single compiled scan.

    Args:
        state: Initial emulator state
        num_steps: Number of steps to execute
        progress: Show a tqdm progress bar while running

    Returns:
        State after the last step
    """
    def run_step(state, _):
        return step(state), None

    if progress:
        run_step = scan_with_progress(num_steps, desc=f"Emulating ({num_steps:,} steps)")(run_step)

    state, _ = jax.lax.scan(run_step, state, jnp.arange(num_steps))
    return state


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy program bytes verbatim into memory starting at 0x200."""
    if len(program) > MAX_PROGRAM_SIZE:
        logger.warning(
            f"Program is {len(program)} bytes, truncating to {MAX_PROGRAM_SIZE} bytes"
        )
        program = program[:MAX_PROGRAM_SIZE]
    if not program:
        return state
    program_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(program_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load a ROM file into memory starting at 0x200.

    An unreadable file leaves the state untouched; the failure is reported
    through the package logger instead of raised.
    """
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as e:
        logger.warning(f"Could not read ROM '{filename}': {e}")
        return state
    logger.debug(f"Loaded ROM '{filename}' ({len(rom_data)} bytes)")
    return load_program(state, rom_data)
