"""CHIP-8 machine constants."""

import jax.numpy as jnp

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
FONT_START = 0x50
FONT_GLYPH_SIZE = 5

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
MAX_SPRITE_HEIGHT = 15
SPRITE_WIDTH = 8

NUM_REGISTERS = 16
NUM_KEYS = 16
STACK_SIZE = 16
FLAG_REGISTER = 0xF

ADDRESS_MASK = 0xFFF  # 12-bit memory address space
STACK_MASK = STACK_SIZE - 1
KEY_MASK = NUM_KEYS - 1

PIXEL_ON = 0xFFFFFFFF
PIXEL_OFF = 0x00000000

# Glyphs 0-F, 5 rows each, high nibble holds the pixels
FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)
