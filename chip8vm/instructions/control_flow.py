"""CHIP-8 control flow instructions."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import MachineState
from chip8vm.operations import (
    Jump, Call, JumpWithOffset,
    SkipIfEqualImmediate, SkipIfNotEqualImmediate,
    SkipIfRegistersEqual, SkipIfRegistersNotEqual,
    SkipIfKeyPressed, SkipIfKeyNotPressed,
)
from chip8vm.stack import push


def execute_jump(state: MachineState, operation: Jump) -> MachineState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(operation.nnn, dtype=jnp.uint16))


def execute_call(state: MachineState, operation: Call) -> MachineState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return state.replace(pc=jnp.asarray(operation.nnn, dtype=jnp.uint16))


def execute_jump_with_offset(state: MachineState, operation: JumpWithOffset) -> MachineState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = jnp.astype(state.V[0], jnp.uint16) + operation.nnn
    return state.replace(pc=jump_address)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: MachineState, operation) -> MachineState:
        condition = condition_fn(state, operation)
        return jax.lax.cond(
            condition,
            lambda s: s.replace(pc=s.pc + 2),
            lambda s: s,
            state
        )
    return skip_instruction


def _key_pressed(state: MachineState, register: int) -> jnp.ndarray:
    key_index = state.V[register] & 0xF
    return state.keys[key_index] != 0


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, op: state.V[op.x] == op.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, op: state.V[op.x] != op.nn
)

execute_skip_if_registers_equal = make_skip_instruction(
    lambda state, op: state.V[op.x] == state.V[op.y]
)

execute_skip_if_registers_not_equal = make_skip_instruction(
    lambda state, op: state.V[op.x] != state.V[op.y]
)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, op: _key_pressed(state, op.x)
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, op: ~_key_pressed(state, op.x)
)


HANDLERS = {
    Jump: execute_jump,
    Call: execute_call,
    JumpWithOffset: execute_jump_with_offset,
    SkipIfEqualImmediate: execute_skip_if_equal_immediate,
    SkipIfNotEqualImmediate: execute_skip_if_not_equal_immediate,
    SkipIfRegistersEqual: execute_skip_if_registers_equal,
    SkipIfRegistersNotEqual: execute_skip_if_registers_not_equal,
    SkipIfKeyPressed: execute_skip_if_key_pressed,
    SkipIfKeyNotPressed: execute_skip_if_key_not_pressed,
}
