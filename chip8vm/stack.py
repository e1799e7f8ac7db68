"""CHIP-8 stack operations."""

import jax.numpy as jnp
from jax.experimental import checkify

from chip8vm.constants import STACK_SIZE
from chip8vm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    checkify.check(
        stack.pointer < STACK_SIZE,
        f"Stack overflow: more than {STACK_SIZE} nested calls",
    )
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    checkify.check(stack.pointer > 0, "Stack underflow: return with empty stack")
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
