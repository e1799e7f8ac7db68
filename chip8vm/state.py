"""CHIP-8 machine state structures."""

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode

from chip8vm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, DISPLAY_SIZE,
    STACK_SIZE, NUM_REGISTERS, NUM_KEYS,
)


class StackState(PyTreeNode):
    """Return-address stack for subroutine calls."""
    data: jnp.ndarray
    pointer: jnp.ndarray


class MachineState(PyTreeNode):
    """Main CHIP-8 machine state.

    Attributes:
        rng: PRNG key consumed by the random instruction
        memory: 4096 bytes, glyph table at FONT_START, program at PROGRAM_START
        pc: Program counter
        display: Flat row-major framebuffer of 0/1 cells (y * width + x)
        stack: Return-address stack
        delay_timer: Delay countdown, decremented by the caller
        sound_timer: Sound countdown, decremented by the caller
        keys: Press state of the 16 hex keys, nonzero means pressed
        V: General purpose registers V0-VF
        I: Index register, 16 bits wide so overflow past 0xFFF stays visible
    """
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keys: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray


def create_stack() -> StackState:
    """Create an empty stack."""
    return StackState(
        data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16),
        pointer=jnp.zeros((), dtype=jnp.int32),
    )


def create_state(rng: jax.Array | None = None) -> MachineState:
    """Create initial machine state with the glyph table loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    return MachineState(
        rng=rng,
        memory=memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA),
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        display=jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8),
        stack=create_stack(),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keys=jnp.zeros(NUM_KEYS, dtype=jnp.uint8),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
    )
