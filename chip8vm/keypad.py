"""Keypad input and sound output seen from the host side."""

from typing import Iterable

import jax.numpy as jnp
from chip8vm.constants import NUM_KEYS
from chip8vm.state import EmulatorState

# Host keyboard layout for the 4x4 hex keypad:
#   1 2 3 4        1 2 3 C
#   q w e r   ->   4 5 6 D
#   a s d f        7 8 9 E
#   z x c v        A 0 B F
KEY_MAP = {
    "x": 0x0, "1": 0x1, "2": 0x2, "3": 0x3,
    "q": 0x4, "w": 0x5, "e": 0x6, "a": 0x7,
    "s": 0x8, "d": 0x9, "z": 0xA, "c": 0xB,
    "4": 0xC, "r": 0xD, "f": 0xE, "v": 0xF,
}


def _check_key(key: int) -> int:
    key = int(key)
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key index must be in 0..{NUM_KEYS - 1}, got {key}")
    return key


def press_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark ``key`` as held down."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(True))


def release_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark ``key`` as released."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(False))


def set_keypad(state: EmulatorState, keys: Iterable[bool]) -> EmulatorState:
    """Replace the whole keypad with 16 pressed/released flags."""
    keypad = jnp.asarray(list(keys), dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got shape {keypad.shape}")
    return state.replace(keypad=keypad)


def sound_active(state: EmulatorState) -> bool:
    """Whether the buzzer should currently sound."""
    return bool(state.sound_timer > 0)
