"""Run configuration for the chip8vm front end."""

from dataclasses import dataclass
from typing import List, Optional

from hydra.core.config_store import ConfigStore
from omegaconf import MISSING, OmegaConf

from chip8vm.rendering import COLOR_SCHEMES


@dataclass
class RunConfig:
    """Settings for an interactive emulator session.

    Attributes:
        rom: Path to the ROM image to load at 0x200
        scale: Window pixels per CHIP-8 pixel
        cycle_delay_ms: Minimum wall-clock time between two steps
        steps_per_frame: Upper bound on steps executed per rendered frame
        color_scheme: Name of a scheme in ``chip8vm.rendering.COLOR_SCHEMES``
        seed: Fixed PRNG seed for CXNN; None seeds from the clock
        tone_hz: Buzzer pitch
        log_level: Console log level
        debug_overlay: Draw registers and the current instruction on screen
    """
    rom: str = MISSING
    scale: int = 10
    cycle_delay_ms: float = 1.0
    steps_per_frame: int = 20
    color_scheme: str = "white"
    seed: Optional[int] = None
    tone_hz: int = 440
    log_level: str = "INFO"
    debug_overlay: bool = False


cs = ConfigStore.instance()
cs.store(name="chip8vm", node=RunConfig)


def validate_config(cfg: RunConfig) -> RunConfig:
    """Reject settings the front end cannot run with."""
    if not cfg.rom:
        raise ValueError("A ROM path is required (rom=path/to/game.ch8)")
    if cfg.scale < 1:
        raise ValueError(f"scale must be >= 1, got {cfg.scale}")
    if cfg.cycle_delay_ms < 0:
        raise ValueError(f"cycle_delay_ms must be >= 0, got {cfg.cycle_delay_ms}")
    if cfg.steps_per_frame < 1:
        raise ValueError(f"steps_per_frame must be >= 1, got {cfg.steps_per_frame}")
    if cfg.color_scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{cfg.color_scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )
    return cfg


def load_config(overrides: Optional[List[str]] = None) -> RunConfig:
    """Build a validated ``RunConfig`` from ``key=value`` overrides."""
    cfg = OmegaConf.merge(
        OmegaConf.structured(RunConfig),
        OmegaConf.from_dotlist(overrides or []),
    )
    return validate_config(OmegaConf.to_object(cfg))
