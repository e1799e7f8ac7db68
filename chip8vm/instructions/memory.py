"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chip8vm.state import MachineState
from chip8vm.operations import SetImmediate, AddImmediate, SetIndex, Random


def execute_set(state: MachineState, operation: SetImmediate) -> MachineState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[operation.x].set(operation.nn))


def execute_add(state: MachineState, operation: AddImmediate) -> MachineState:
    """7XNN - Add NN to VX, wrapping at 256. VF is not affected."""
    total = jnp.astype(state.V[operation.x], jnp.int32) + operation.nn
    total = jnp.where(total > 0xFF, total - 0x100, total)
    return state.replace(V=state.V.at[operation.x].set(jnp.astype(total, jnp.uint8)))


def execute_set_index(state: MachineState, operation: SetIndex) -> MachineState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.asarray(operation.nnn, dtype=jnp.uint16))


def execute_random(state: MachineState, operation: Random) -> MachineState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    masked = jnp.astype(random_value & operation.nn, jnp.uint8)
    return state.replace(V=state.V.at[operation.x].set(masked), rng=key)


HANDLERS = {
    SetImmediate: execute_set,
    AddImmediate: execute_add,
    SetIndex: execute_set_index,
    Random: execute_random,
}
