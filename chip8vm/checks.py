"""Bounds checks for memory accessed through the index register."""

import jax.numpy as jnp
from jax.experimental import checkify

from chip8vm.constants import MEMORY_SIZE, INDEX_MAX
from chip8vm.state import MachineState


def check_index_range(state: MachineState, length) -> None:
    """Fail unless memory[I:I + length] lies inside memory.

    ``length`` is either a Python int or a traced row count.
    """
    if isinstance(length, int) and length <= 0:
        return
    length = jnp.asarray(length, dtype=jnp.int32)
    end = jnp.astype(state.I, jnp.int32) + length
    checkify.check(
        end <= MEMORY_SIZE,
        f"Index register out of bounds: I={{index}} + {{length}} bytes exceeds memory size {MEMORY_SIZE}",
        index=state.I,
        length=length,
    )


def check_index_value(index) -> None:
    """Fail when a computed index no longer fits the 16-bit index register."""
    checkify.check(
        index <= INDEX_MAX,
        f"Index register overflow: I={{index}} exceeds 0x{INDEX_MAX:X}",
        index=index,
    )
