"""Run many machines with different random seeds in parallel with ``jax.vmap``.

Usage: python examples/demo_vmap.py path/to/game.ch8
"""

import sys
import time

import jax
import jax.numpy as jnp

from chip8vm import create_state, load_rom, run


if __name__ == "__main__":
    rom_path = sys.argv[1]
    num_machines = 1000
    num_steps = 1000

    template = load_rom(create_state(jax.random.PRNGKey(0)), rom_path)
    rngs = jax.random.split(jax.random.PRNGKey(0), num_machines)
    states = jax.vmap(lambda rng: template.replace(rng=rng))(rngs)

    batched_run = jax.jit(jax.vmap(lambda state: run(state, num_steps)))

    # Measure compilation time
    start_compile = time.perf_counter()
    compiled = jax.block_until_ready(batched_run.lower(states).compile())
    end_compile = time.perf_counter()
    print("Compilation time (s):", end_compile - start_compile)

    # Measure execution time
    start_exec = time.perf_counter()
    final_states = jax.block_until_ready(compiled(states))
    end_exec = time.perf_counter()
    elapsed = end_exec - start_exec
    print("Execution time (s):", elapsed)
    print(f"Steps per second: {num_machines * num_steps / elapsed:,.0f}")

    distinct = jnp.unique(final_states.display.reshape(num_machines, -1), axis=0).shape[0]
    print(f"Distinct final screens: {distinct}")
