"""pygame front end: window, keyboard, pacing loop and buzzer."""

import time
from typing import Optional

import jax
import numpy as np
import pygame

from chip8vm.config import RunConfig
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.disassembler import disassemble
from chip8vm.display import frame_buffer
from chip8vm.emulator import step, load_rom
from chip8vm.keypad import KEY_MAP, press_key, release_key, sound_active
from chip8vm.logging import get_logger
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme
from chip8vm.state import create_state, EmulatorState

logger = get_logger("frontend")

SAMPLE_RATE = 44100


def square_wave(tone_hz: int, sample_rate: int = SAMPLE_RATE, duration: float = 0.1) -> np.ndarray:
    """One loopable buffer of a 16-bit signed square wave."""
    t = np.arange(int(sample_rate * duration))
    wave = ((t * tone_hz * 2 / sample_rate) % 2 >= 1).astype(np.float32) * 2 - 1
    return (wave * 0.2 * 32767).astype(np.int16)


def build_key_codes() -> dict:
    """Translate ``KEY_MAP`` key names into pygame key codes."""
    return {pygame.key.key_code(name): key for name, key in KEY_MAP.items()}


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


class Frontend:
    """Interactive session driving one emulator state.

    The loop polls input, runs ``step`` whenever more than
    ``cycle_delay_ms`` elapsed since the previous one, redraws the frame
    buffer and keeps the buzzer playing while the sound timer is nonzero.
    """

    def __init__(self, config: RunConfig):
        self.config = config
        rng = None if config.seed is None else jax.random.PRNGKey(config.seed)
        self.state: EmulatorState = load_rom(create_state(rng), config.rom)
        self.on_color, self.off_color = create_color_scheme(config.color_scheme)
        self.running = False
        self.key_codes = {}
        self.sound: Optional[pygame.mixer.Sound] = None
        self.sound_playing = False

    def _init_audio(self):
        try:
            pygame.mixer.init(SAMPLE_RATE, -16, 1, 512)
        except pygame.error as e:
            logger.warning(f"Audio disabled: {e}")
            return
        self.sound = pygame.mixer.Sound(square_wave(self.config.tone_hz))

    def _update_sound(self):
        if self.sound is None:
            return
        active = sound_active(self.state)
        if active and not self.sound_playing:
            self.sound.play(loops=-1)
        elif not active and self.sound_playing:
            self.sound.stop()
        self.sound_playing = active

    def handle_events(self):
        """Apply pending window and keyboard events to the keypad."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key in self.key_codes:
                    self.state = press_key(self.state, self.key_codes[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in self.key_codes:
                    self.state = release_key(self.state, self.key_codes[event.key])

    def render(self, screen, font):
        """Blit the current frame buffer, plus the debug overlay if enabled."""
        rgb = chip8_display_to_rgb(
            frame_buffer(self.state.display), self.config.scale, self.on_color, self.off_color
        )
        surface = pygame.image.frombuffer(rgb.tobytes(), (rgb.shape[1], rgb.shape[0]), "RGB")
        screen.blit(surface, (0, 0))

        if self.config.debug_overlay:
            pc = int(self.state.pc)
            memory = self.state.memory
            word = (int(memory[pc & 0xFFF]) << 8) | int(memory[(pc + 1) & 0xFFF])
            registers = [int(v) for v in self.state.V]
            lines = [
                f"PC: 0x{pc:03X}  {disassemble(word)}",
                f"I: 0x{int(self.state.I):03X}  DT: {int(self.state.delay_timer)}  ST: {int(self.state.sound_timer)}",
                " ".join(f"{v:02X}" for v in registers[:8]),
                " ".join(f"{v:02X}" for v in registers[8:]),
            ]
            draw_overlay_text(screen, lines, (5, 5), font, alpha=100)

        pygame.display.flip()

    def run(self):
        """Open the window and emulate until the user quits."""
        pygame.init()
        screen = pygame.display.set_mode(
            (SCREEN_WIDTH * self.config.scale, SCREEN_HEIGHT * self.config.scale)
        )
        pygame.display.set_caption("CHIP-8 Emulator")
        font = pygame.font.Font(None, 18)
        self.key_codes = build_key_codes()
        self._init_audio()

        logger.info(f"Running '{self.config.rom}' (ESC to quit)")
        self.running = True
        last_cycle = time.perf_counter()
        steps = 0
        try:
            while self.running:
                self.handle_events()

                executed = 0
                now = time.perf_counter()
                while (
                    (now - last_cycle) * 1000.0 > self.config.cycle_delay_ms
                    and executed < self.config.steps_per_frame
                ):
                    last_cycle = now
                    self.state = step(self.state)
                    executed += 1
                    now = time.perf_counter()

                if executed:
                    steps += executed
                    self._update_sound()
                    self.render(screen, font)
                else:
                    time.sleep(0.0005)
        finally:
            if self.sound is not None:
                self.sound.stop()
            pygame.quit()
            logger.info(f"Stopped after {steps:,} steps")
