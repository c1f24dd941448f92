"""Timer, index, BCD and register-transfer instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.constants import ADDRESS_MASK, FONT_START, FONT_GLYPH_SIZE, NUM_REGISTERS
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.instructions.dispatch import make_dispatcher, low_byte


def _addresses(base: jnp.ndarray, count: int) -> jnp.ndarray:
    """``count`` consecutive memory addresses from ``base``, wrapped to 12 bits."""
    return (jnp.astype(base, jnp.int32) + jnp.arange(count, dtype=jnp.int32)) & ADDRESS_MASK


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - VX = delay timer."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Stores the lowest pressed key in VX. With no key down the program counter
    is rewound so the same instruction runs again on the next step.
    """
    def store_key(state):
        # argmax returns the first True, i.e. the lowest key index
        key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
        return state.replace(V=state.V.at[instruction.x].set(key))

    def retry(state):
        return state.replace(pc=state.pc - 2)

    return jax.lax.cond(jnp.any(state.keypad), store_key, retry, state)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Delay timer = VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Sound timer = VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I (16-bit wrap, VF untouched)."""
    return state.replace(I=state.I + jnp.astype(state.V[instruction.x], jnp.uint16))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Point I at the font glyph for digit VX."""
    digit = jnp.astype(state.V[instruction.x], jnp.uint16)
    return state.replace(I=jnp.astype(FONT_START + digit * FONT_GLYPH_SIZE, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Write the decimal digits of VX to I, I+1 and I+2."""
    digits = (state.V[instruction.x] // jnp.array([100, 10, 1], dtype=jnp.uint8)) % 10
    return state.replace(memory=state.memory.at[_addresses(state.I, 3)].set(digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Copy V0..VX to memory at I (I is left unchanged)."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    addresses = _addresses(state.I, NUM_REGISTERS)
    new_values = jnp.where(register_mask, state.V, state.memory[addresses])
    return state.replace(memory=state.memory.at[addresses].set(new_values))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Copy memory at I into V0..VX (I is left unchanged)."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    memory_values = state.memory[_addresses(state.I, NUM_REGISTERS)]
    return state.replace(V=jnp.where(register_mask, memory_values, state.V))


execute_misc_instruction = make_dispatcher(
    {
        0x07: execute_get_delay_timer,
        0x0A: execute_wait_for_key,
        0x15: execute_set_delay_timer,
        0x18: execute_set_sound_timer,
        0x1E: execute_add_to_index,
        0x29: execute_font_character,
        0x33: execute_bcd_conversion,
        0x55: execute_store_registers,
        0x65: execute_load_registers,
    },
    low_byte,
    256,
)
