"""Tests for display operations (DXYN)."""

import jax.numpy as jnp
from chip8vm import execute
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        # Simple 2x2 box sprite
        sprite = [0xC0, 0xC0]  # 11000000, 11000000
        state = setup_sprite_in_memory(fresh_state, 0x300, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xA300)  # I = 0x300

        state = execute(state, 0xD012)  # Draw at V0,V1 with height 2

        # display is indexed [row, column]
        assert state.display[5, 10]
        assert state.display[5, 11]
        assert state.display[6, 10]
        assert state.display[6, 11]
        assert not state.display[5, 12]
        assert state.V[15] == 0

    def test_alternating_pattern(self, fresh_state):
        """0b10101010 lights every other cell, and a second draw erases it."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0b10101010])
        state = execute(state, 0x6010)  # V0 = 16
        state = execute(state, 0x6104)  # V1 = 4
        state = execute(state, 0xA300)

        state = execute(state, 0xD011)
        row = [bool(state.display[4, 16 + col]) for col in range(8)]
        assert row == [True, False, True, False, True, False, True, False]
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert not jnp.any(state.display)
        assert state.V[15] == 1

    def test_collision_detection(self, fresh_state):
        """Test collision flag when sprite overlaps existing pixels."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])

        state = execute(state, 0x6014)  # V0 = 20
        state = execute(state, 0x610A)  # V1 = 10
        state = execute(state, 0xA400)

        state = execute(state, 0xD011)
        assert state.display[10, 20]
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert not state.display[10, 20]  # Pixel erased by XOR
        assert state.V[15] == 1

    def test_partial_overlap_collides(self, fresh_state):
        """A single shared pixel is enough to report a collision."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0xF0])
        state = state.replace(display=state.display.at[0, 3].set(True))
        state = execute(state, 0xA400)

        state = execute(state, 0xD011)  # V0 = V1 = 0

        assert state.V[15] == 1
        assert [bool(state.display[0, c]) for c in range(5)] == [True, True, True, False, False]

    def test_zero_bits_do_not_clear_pixels(self, fresh_state):
        """Unset sprite bits leave the target cells as they were."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x00])
        state = state.replace(display=state.display.at[0, 0].set(True))
        state = execute(state, 0xA400)

        state = execute(state, 0xD011)

        assert state.display[0, 0]
        assert state.V[15] == 0


class TestScreenWraparound:
    """Sprites wrap around both edges instead of being clipped."""

    def test_right_edge_wraps(self, fresh_state):
        """An 8-wide sprite at x=60 continues on columns 0-3."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])
        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x6100)  # V1 = 0
        state = execute(state, 0xA600)

        state = execute(state, 0xD011)

        lit = {c for c in range(64) if state.display[0, c]}
        assert lit == {60, 61, 62, 63, 0, 1, 2, 3}
        assert not jnp.any(state.display[1:])

    def test_bottom_edge_wraps(self, fresh_state):
        """A 3-row sprite at y=30 continues on row 0."""
        state = setup_sprite_in_memory(fresh_state, 0x700, [0x80, 0x80, 0x80])
        state = execute(state, 0x6000)  # V0 = 0
        state = execute(state, 0x611E)  # V1 = 30
        state = execute(state, 0xA700)

        state = execute(state, 0xD013)

        assert state.display[30, 0]
        assert state.display[31, 0]
        assert state.display[0, 0]
        assert jnp.sum(state.display) == 3

    def test_corner_wraps_both_axes(self, fresh_state):
        """8x2 sprite at (63, 31) lands on columns {63,0..6} and rows {31,0}."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0xFF, 0xFF])
        state = execute(state, 0x603F)  # V0 = 63
        state = execute(state, 0x611F)  # V1 = 31
        state = execute(state, 0xA800)

        state = execute(state, 0xD012)

        expected_cols = {63, 0, 1, 2, 3, 4, 5, 6}
        for row in (31, 0):
            lit = {c for c in range(64) if state.display[row, c]}
            assert lit == expected_cols
        assert jnp.sum(state.display) == 16

    def test_coordinate_wrapping(self, fresh_state):
        """Start coordinates beyond the screen are reduced modulo its size."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0x80])
        state = execute(state, 0x6046)  # V0 = 70 (70 % 64 = 6)
        state = execute(state, 0x6125)  # V1 = 37 (37 % 32 = 5)
        state = execute(state, 0xA800)

        state = execute(state, 0xD011)

        assert state.display[5, 6]


class TestSpriteVariations:
    """Test different sprite configurations."""

    def test_different_sprite_heights(self, fresh_state):
        """Only N rows are drawn."""
        sprite = [0x80, 0x40, 0x20, 0x10, 0x08]  # Diagonal line
        state = setup_sprite_in_memory(fresh_state, 0x900, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6108)  # V1 = 8
        state = execute(state, 0xA900)

        state = execute(state, 0xD013)

        assert state.display[8, 10]
        assert state.display[9, 11]
        assert state.display[10, 12]
        assert not state.display[11, 13]  # Row 3 not drawn (N=3)

    def test_zero_height_draws_nothing(self, fresh_state):
        """DXY0 leaves the display untouched and clears VF."""
        state = setup_sprite_in_memory(fresh_state, 0x900, [0xFF])
        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0xA900)

        state = execute(state, 0xD010)

        assert not jnp.any(state.display)
        assert state.V[15] == 0

    def test_font_glyph(self, fresh_state):
        """Drawing the built-in '0' glyph produces its outline."""
        state = execute(fresh_state, 0xA050)  # I = glyph 0

        state = execute(state, 0xD015)

        rows = [[bool(state.display[r, c]) for c in range(4)] for r in range(5)]
        assert rows == [
            [True, True, True, True],
            [True, False, False, True],
            [True, False, False, True],
            [True, False, False, True],
            [True, True, True, True],
        ]

    def test_vf_register_preservation(self, fresh_state):
        """VF is cleared when no collision happens."""
        state = setup_sprite_in_memory(fresh_state, 0xB00, [0x80])

        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0x6005)
        state = execute(state, 0x6105)
        state = execute(state, 0xAB00)
        state = execute(state, 0xD011)

        assert state.V[15] == 0
