"""Test configuration and fixtures for interpreter tests."""

import pytest
import jax
import jax.numpy as jnp
from nibble8 import create_state


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state(rng=jax.random.PRNGKey(42))


@pytest.fixture
def exclusive_state():
    """Provide a fresh state with the original exclusive LDV/LDRM range."""
    return create_state(rng=jax.random.PRNGKey(42), inclusive_transfers=False)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*words):
    """Assemble instruction words into ROM bytes."""
    rom = bytearray()
    for word in words:
        rom += bytes([(word >> 8) & 0xFF, word & 0xFF])
    return bytes(rom)
