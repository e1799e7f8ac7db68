"""Test configuration and fixtures for CHIP-8 machine tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Machine


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return create_state()


@pytest.fixture
def machine():
    """Provide a quiet machine instance."""
    return Machine(log_level="CRITICAL")


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **values):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x10)."""
    V = state.V
    for name, value in values.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def pixel(state, x, y):
    """Read one framebuffer cell by coordinate."""
    return int(state.display[y * 64 + x])


def program(*instructions):
    """Assemble instruction words into big-endian program bytes."""
    return b"".join(word.to_bytes(2, "big") for word in instructions)
