"""Turning the display into RGB images."""

from typing import Tuple

import jax.numpy as jnp
import numpy as np
from PIL import Image

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Color = Tuple[int, int, int]

# name -> (on_color, off_color)
COLOR_SCHEMES = {
    "chip8vm": ((179, 102, 184), (45, 25, 61)),
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "white": ((255, 255, 255), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
}


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (0, 255, 0),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert the display to an upscaled RGB image.

    Args:
        display: Boolean ``(32, 64)`` display, or the flat frame buffer from
            ``chip8vm.display.frame_buffer``
        scale: Nearest-neighbour upscaling factor
        on_color: RGB color of lit pixels
        off_color: RGB color of dark pixels

    Returns:
        uint8 array of shape ``(32 * scale, 64 * scale, 3)``
    """
    lit = np.asarray(display).reshape(SCREEN_HEIGHT, SCREEN_WIDTH) != 0
    palette = np.array([off_color, on_color], dtype=np.uint8)
    rgb = palette[lit.astype(np.intp)]
    if scale > 1:
        rgb = rgb.repeat(scale, axis=0).repeat(scale, axis=1)
    return rgb


def create_color_scheme(scheme: str = "white") -> Tuple[Color, Color]:
    """Return ``(on_color, off_color)`` for a scheme in ``COLOR_SCHEMES``."""
    try:
        return COLOR_SCHEMES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES)}"
        ) from None


def save_screenshot(
    display: jnp.ndarray,
    filename: str,
    scale: int = 8,
    color_scheme: str = "white",
) -> None:
    """Write the display to an image file (format picked from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    Image.fromarray(chip8_display_to_rgb(display, scale, on_color, off_color)).save(filename)
