"""Tests for the window-free parts of the pygame front end."""

import numpy as np
import pygame
from chip8vm.frontend import SAMPLE_RATE, build_key_codes, square_wave
from chip8vm.keypad import KEY_MAP


class TestSquareWave:
    """Buzzer sample buffer."""

    def test_buffer_shape_and_dtype(self):
        wave = square_wave(440, sample_rate=SAMPLE_RATE, duration=0.1)
        assert wave.dtype == np.int16
        assert wave.shape == (int(SAMPLE_RATE * 0.1),)

    def test_two_levels_at_fixed_amplitude(self):
        wave = square_wave(440)
        amplitude = int(0.2 * 32767)
        assert set(np.unique(wave).tolist()) == {-amplitude, amplitude}

    def test_period_follows_tone(self):
        # 1000 Hz at 8000 Hz sampling: 4 samples low, 4 samples high
        wave = square_wave(1000, sample_rate=8000, duration=0.002)
        assert (wave[:4] < 0).all()
        assert (wave[4:8] > 0).all()
        assert (wave[8:12] < 0).all()


class TestKeyCodes:
    """KEY_MAP names translated to pygame key codes."""

    def test_every_key_mapped(self):
        codes = build_key_codes()
        assert len(codes) == 16
        assert sorted(codes.values()) == list(range(16))

    def test_layout(self):
        codes = build_key_codes()
        assert codes[pygame.K_x] == 0x0
        assert codes[pygame.K_1] == 0x1
        assert codes[pygame.K_4] == 0xC
        assert codes[pygame.K_q] == 0x4
        assert codes[pygame.K_v] == 0xF
        assert {codes[pygame.key.key_code(name)] for name in KEY_MAP} == set(range(16))
