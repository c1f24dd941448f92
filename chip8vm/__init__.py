"""CHIP-8 virtual machine built on JAX."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import execute, fetch, step, run, tick_timers, load_program, load_rom
from chip8vm.decode import DecodedInstruction, decode
from chip8vm.display import clear, draw_sprite, frame_buffer
from chip8vm.keypad import press_key, release_key, set_keypad, sound_active
from chip8vm.disassembler import disassemble
from chip8vm.constants import PROGRAM_START, FONT_START, SCREEN_WIDTH, SCREEN_HEIGHT

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "run",
    "tick_timers",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "clear",
    "draw_sprite",
    "frame_buffer",
    "press_key",
    "release_key",
    "set_keypad",
    "sound_active",
    "disassemble",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
