"""Command line entry point: ``python -m chip8vm rom=path/to/game.ch8``."""

import hydra
from omegaconf import OmegaConf

from chip8vm.config import RunConfig, validate_config
from chip8vm.frontend import Frontend
from chip8vm.logging import get_logger


@hydra.main(version_base=None, config_name="chip8vm")
def main(cfg: RunConfig) -> None:
    config = validate_config(OmegaConf.to_object(cfg))
    for name in ("chip8vm", "frontend"):
        get_logger(name).set_level(config.log_level)
    Frontend(config).run()


if __name__ == "__main__":
    main()
