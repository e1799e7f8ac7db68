"""CHIP-8 ALU operations (8xxx)."""

import jax.numpy as jnp
from chip8vm.state import MachineState
from chip8vm.constants import FLAG_REGISTER
from chip8vm.operations import (
    SetRegister, Or, And, Xor, Add, SubtractAB, ShiftRight, SubtractBA, ShiftLeft,
)


def alu_set(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY0 - Set: VX = VY."""
    return vy


def alu_or(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy


def alu_and(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy


def alu_xor(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy


def alu_add(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = jnp.astype(vx, jnp.int32) + jnp.astype(vy, jnp.int32)
    carry = result > 0xFF
    result = jnp.where(carry, result - 0x100, result)
    return result, carry


def _subtract(minuend: jnp.ndarray, subtrahend: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    # VF = 1 means no borrow
    minuend = jnp.astype(minuend, jnp.int32)
    subtrahend = jnp.astype(subtrahend, jnp.int32)
    no_borrow = minuend >= subtrahend
    result = jnp.where(no_borrow, minuend, minuend + 0x100) - subtrahend
    return result, no_borrow


def alu_sub_xy(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY5 - Subtract: VX -= VY, set borrow flag."""
    return _subtract(vx, vy)


def alu_sub_yx(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY7 - Subtract: VX = VY - VX, set borrow flag."""
    return _subtract(vy, vx)


def make_logic_instruction(alu_fn):
    """Factory for 8XYN operations that leave VF alone."""
    def logic_instruction(state: MachineState, operation) -> MachineState:
        result = alu_fn(state.V[operation.x], state.V[operation.y])
        return state.replace(V=state.V.at[operation.x].set(result))
    return logic_instruction


def make_arithmetic_instruction(alu_fn):
    """Factory for 8XYN operations reporting carry/borrow in VF.

    The flag is written after the result, so it wins when X or Y is VF.
    """
    def arithmetic_instruction(state: MachineState, operation) -> MachineState:
        result, flag = alu_fn(state.V[operation.x], state.V[operation.y])
        new_V = state.V.at[operation.x].set(jnp.astype(result, jnp.uint8))
        new_V = new_V.at[FLAG_REGISTER].set(jnp.astype(flag, jnp.uint8))
        return state.replace(V=new_V)
    return arithmetic_instruction


def execute_shift_right(state: MachineState, operation: ShiftRight) -> MachineState:
    """8XY6 - Shift right: VX >>= 1, VF = old bit 0."""
    shifted_bit = state.V[operation.x] & 1
    new_V = state.V.at[FLAG_REGISTER].set(shifted_bit)
    new_V = new_V.at[operation.x].set(new_V[operation.x] >> 1)
    return state.replace(V=new_V)


def execute_shift_left(state: MachineState, operation: ShiftLeft) -> MachineState:
    """8XYE - Shift left: VX <<= 1, VF = old bit 7."""
    shifted_bit = (state.V[operation.x] & 0x80) >> 7
    new_V = state.V.at[FLAG_REGISTER].set(shifted_bit)
    shifted = (jnp.astype(new_V[operation.x], jnp.int32) << 1) & 0xFF
    new_V = new_V.at[operation.x].set(jnp.astype(shifted, jnp.uint8))
    return state.replace(V=new_V)


HANDLERS = {
    SetRegister: make_logic_instruction(alu_set),
    Or: make_logic_instruction(alu_or),
    And: make_logic_instruction(alu_and),
    Xor: make_logic_instruction(alu_xor),
    Add: make_arithmetic_instruction(alu_add),
    SubtractAB: make_arithmetic_instruction(alu_sub_xy),
    SubtractBA: make_arithmetic_instruction(alu_sub_yx),
    ShiftRight: execute_shift_right,
    ShiftLeft: execute_shift_left,
}
