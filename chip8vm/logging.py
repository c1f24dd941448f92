"""Console logging for chip8vm.

``get_logger`` hands out shared, level-filtered console loggers. Long compiled
runs report progress through ``scan_with_progress``, which drives a tqdm bar
from inside ``jax.lax.scan`` via ``io_callback``.
"""

import sys
import time
from typing import Callable, Dict, Optional

import jax
from jax.experimental import io_callback

from tqdm import tqdm

LEVELS = {"DEBUG": 0, "INFO": 1, "WARNING": 2, "ERROR": 3, "CRITICAL": 4}

COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class ConsoleLogger:
    """Prints ``[elapsed][LEVEL][name] message`` lines at or above a level.

    Colours are only used when stdout is a terminal.
    """

    def __init__(self, name: str = "chip8vm", log_level: str = "INFO", show_timestamps: bool = True):
        self.name = name
        self.log_level = "INFO"
        self.set_level(log_level)
        self.show_timestamps = show_timestamps
        self.use_colors = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        self.start_time = time.time()

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        log_level = log_level.upper()
        if log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = log_level

    def is_enabled(self, level: str) -> bool:
        return LEVELS[level] >= LEVELS[self.log_level]

    def log(self, level: str, message: str):
        level = level.upper()
        if not self.is_enabled(level):
            return
        prefix = f"[{level:>8s}]"
        if self.use_colors:
            prefix = f"{COLORS[level]}{prefix}{RESET}"
        if self.show_timestamps:
            prefix = f"[{time.time() - self.start_time:8.2f}s]{prefix}"
        print(f"{prefix}[{self.name}] {message}", flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "chip8vm") -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name)
    return _loggers[name]


class ScanProgressBar:
    """Host-side tqdm bar updated in chunks from a traced loop.

    Iteration ``i`` of ``total`` opens the bar when ``i == 0``, advances it by
    ``print_rate`` every ``print_rate`` iterations and closes it on the last
    one, each through an ordered ``io_callback``.
    """

    def __init__(self, total: int, print_rate: Optional[int] = None, desc: Optional[str] = None, **tqdm_kwargs):
        self.total = total
        if print_rate is None:
            print_rate = min(total // 20, 50)
        self.print_rate = max(1, min(print_rate, total))
        self.desc = desc or f"Running ({total:,} steps)"
        for kwarg in ("total", "desc", "unit"):
            tqdm_kwargs.pop(kwarg, None)
        self.tqdm_kwargs = tqdm_kwargs
        self._bar = None

    def _open(self):
        self._bar = tqdm(total=self.total, desc=self.desc, unit="step", **self.tqdm_kwargs)

    def _advance(self, count):
        if self._bar is not None:
            self._bar.update(int(count))

    def _close(self):
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def _when(self, predicate, callback, *args):
        jax.lax.cond(
            predicate,
            lambda: io_callback(callback, None, *args, ordered=True),
            lambda: None,
        )

    def update(self, iter_num):
        """Traced hook run at the start of iteration ``iter_num``."""
        done = iter_num + 1
        last = iter_num == self.total - 1
        self._when(iter_num == 0, self._open)
        self._when((done % self.print_rate == 0) & ~last, self._advance, self.print_rate)
        # The final chunk may be shorter than print_rate
        self._when(last, self._advance, self.total - (self.total - 1) // self.print_rate * self.print_rate)
        self._when(last, self._close)


def scan_with_progress(
    n: int,
    print_rate: Optional[int] = None,
    desc: Optional[str] = None,
    **tqdm_kwargs,
) -> Callable:
    """Decorate a ``jax.lax.scan`` body so it drives a progress bar.

    The scanned ``xs`` must be the iteration index (or a tuple starting with it).
    """
    bar = ScanProgressBar(n, print_rate, desc, **tqdm_kwargs)

    def decorator(body):
        def body_with_progress(carry, x):
            bar.update(x[0] if isinstance(x, tuple) else x)
            return body(carry, x)

        return body_with_progress

    return decorator
