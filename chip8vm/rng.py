"""Random byte source for the CXNN instruction."""

import time

import jax
import jax.numpy as jnp


def default_key() -> jax.Array:
    """PRNG key seeded from the wall clock."""
    return jax.random.PRNGKey(time.time_ns() & 0xFFFFFFFF)


def next_byte(key: jax.Array) -> tuple[jax.Array, jnp.ndarray]:
    """Draw a uniform byte in 0..255 and return it with the advanced key."""
    key, subkey = jax.random.split(key)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return key, jnp.astype(value, jnp.uint8)
