"""Run a ROM without a window, then dump a screenshot and a disassembly.

Usage: python examples/headless_run.py path/to/game.ch8 [num_steps]
"""

import sys
import time

import jax

from chip8vm import create_state, load_rom, run
from chip8vm.disassembler import disassemble_program
from chip8vm.rendering import save_screenshot


if __name__ == "__main__":
    rom_path = sys.argv[1]
    num_steps = int(sys.argv[2]) if len(sys.argv) > 2 else 10000

    state = load_rom(create_state(jax.random.PRNGKey(0)), rom_path)

    with open(rom_path, "rb") as f:
        for line in disassemble_program(f.read())[:20]:
            print(line)

    # Measure compilation time
    start_compile = time.perf_counter()
    compiled = jax.block_until_ready(run.lower(state, num_steps=num_steps).compile())
    end_compile = time.perf_counter()
    print("Compilation time (s):", end_compile - start_compile)

    # Measure execution time
    start_exec = time.perf_counter()
    final_state = jax.block_until_ready(compiled(state))
    end_exec = time.perf_counter()
    print("Execution time (s):", end_exec - start_exec)
    print(f"PC: 0x{int(final_state.pc):03X}  I: 0x{int(final_state.I):03X}")

    save_screenshot(final_state.display, "screenshot.png", scale=8, color_scheme="chip8vm")
    print("Saved screenshot.png")
