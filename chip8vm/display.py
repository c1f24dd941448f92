"""CHIP-8 display buffer operations.

The display is a row-major ``(SCREEN_HEIGHT, SCREEN_WIDTH)`` boolean array.
Sprites are composited with XOR and wrap around both screen edges
independently, so a sprite leaving the right edge re-enters on the left of the
same row and one leaving the bottom re-enters at the top.
"""

import jax.numpy as jnp

from chip8vm.constants import (
    ADDRESS_MASK, SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, MAX_SPRITE_HEIGHT, PIXEL_ON, PIXEL_OFF
)

# Pre-computed coordinate grids for display operations
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def empty_display() -> jnp.ndarray:
    """Return an all-off display."""
    return jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Turn every cell off."""
    return jnp.zeros_like(display)


def draw_sprite(
    display: jnp.ndarray,
    x: jnp.ndarray,
    y: jnp.ndarray,
    sprite_rows: jnp.ndarray,
    height: jnp.ndarray,
) -> tuple[jnp.ndarray, jnp.ndarray]:
    """XOR a sprite onto the display with toroidal wraparound.

    Args:
        display: Boolean array of shape (32, 64)
        x: Column of the sprite's top-left corner (any non-negative value)
        y: Row of the sprite's top-left corner (any non-negative value)
        sprite_rows: uint8 array holding at least ``height`` sprite bytes, the
            most significant bit being the leftmost pixel
        height: Number of rows to draw (0-15)

    Returns:
        Tuple of (new display, collided) where ``collided`` is True when any
        set sprite bit landed on a cell that was already on
    """
    sprite_rows = jnp.asarray(sprite_rows, dtype=jnp.uint8)
    x = jnp.astype(x, jnp.int32) % SCREEN_WIDTH
    y = jnp.astype(y, jnp.int32) % SCREEN_HEIGHT

    # Offsets of every screen cell relative to the sprite origin, wrapped
    col_offset = (xx - x) % SCREEN_WIDTH
    row_offset = (yy - y) % SCREEN_HEIGHT
    in_sprite = (col_offset < SPRITE_WIDTH) & (row_offset < height)

    row_bytes = sprite_rows[jnp.clip(row_offset, 0, sprite_rows.shape[0] - 1)]
    bit_shift = jnp.astype(jnp.clip(SPRITE_WIDTH - 1 - col_offset, 0, SPRITE_WIDTH - 1), jnp.uint8)
    sprite = (((row_bytes >> bit_shift) & 1) == 1) & in_sprite

    collided = jnp.any(display & sprite)
    return display ^ sprite, collided


def read_sprite_rows(memory: jnp.ndarray, address: jnp.ndarray) -> jnp.ndarray:
    """Read the largest possible sprite (15 rows) starting at ``address``."""
    offsets = jnp.arange(MAX_SPRITE_HEIGHT, dtype=jnp.int32)
    return memory[(jnp.astype(address, jnp.int32) + offsets) & ADDRESS_MASK]


def frame_buffer(display: jnp.ndarray) -> jnp.ndarray:
    """Flatten the display into row-major uint32 pixels (all bits set when on)."""
    return jnp.where(display.reshape(-1), jnp.uint32(PIXEL_ON), jnp.uint32(PIXEL_OFF))
