"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import MachineState
from chip8vm.constants import FONT_START, GLYPH_SIZE, FLAG_REGISTER, ADDRESS_MASK
from chip8vm.operations import (
    ReadDelay, GetKey, WriteDelay, WriteSound, AddToIndex,
    SetIndexToGlyph, StoreBCD, StoreRegisters, LoadRegisters,
)
from chip8vm.checks import check_index_range, check_index_value


def execute_get_delay_timer(state: MachineState, operation: ReadDelay) -> MachineState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[operation.x].set(state.delay_timer))


def execute_set_delay_timer(state: MachineState, operation: WriteDelay) -> MachineState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[operation.x])


def execute_set_sound_timer(state: MachineState, operation: WriteSound) -> MachineState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[operation.x])


def execute_add_to_index(state: MachineState, operation: AddToIndex) -> MachineState:
    """FX1E - Add VX to I register.

    VF is set to 1 when I passes 0xFFF and left untouched otherwise.
    A sum that no longer fits the 16-bit register is a fault.
    """
    new_i = jnp.astype(state.I, jnp.int32) + state.V[operation.x]
    check_index_value(new_i)
    new_V = jnp.where(new_i > ADDRESS_MASK, state.V.at[FLAG_REGISTER].set(1), state.V)
    return state.replace(I=jnp.astype(new_i, jnp.uint16), V=new_V)


def execute_wait_for_key(state: MachineState, operation: GetKey) -> MachineState:
    """FX0A - Wait for key press (blocking).

    With no key down the program counter is moved back onto this instruction,
    so the next step runs it again.
    """
    pressed = state.keys != 0

    def key_pressed_action(state):
        pressed_key = jnp.astype(jnp.argmax(pressed), jnp.uint8)
        return state.replace(V=state.V.at[operation.x].set(pressed_key))

    def wait_action(state):
        return state.replace(pc=state.pc - 2)

    return jax.lax.cond(jnp.any(pressed), key_pressed_action, wait_action, state)


def execute_font_character(state: MachineState, operation: SetIndexToGlyph) -> MachineState:
    """FX29 - Set I to location of glyph for digit VX."""
    digit = jnp.astype(state.V[operation.x] & 0xF, jnp.uint16)
    return state.replace(I=FONT_START + digit * GLYPH_SIZE)


def execute_bcd_conversion(state: MachineState, operation: StoreBCD) -> MachineState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    check_index_range(state, 3)
    value = state.V[operation.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = jnp.arange(3) + jnp.astype(state.I, jnp.int32)
    return state.replace(memory=state.memory.at[indices].set(digits))


def execute_store_registers(state: MachineState, operation: StoreRegisters) -> MachineState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = operation.x + 1
    check_index_range(state, count)
    start = jnp.astype(state.I, jnp.int32)
    new_memory = jax.lax.dynamic_update_slice(state.memory, state.V[:count], (start,))
    return state.replace(memory=new_memory)


def execute_load_registers(state: MachineState, operation: LoadRegisters) -> MachineState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = operation.x + 1
    check_index_range(state, count)
    start = jnp.astype(state.I, jnp.int32)
    values = jax.lax.dynamic_slice(state.memory, (start,), (count,))
    return state.replace(V=state.V.at[:count].set(values))


HANDLERS = {
    ReadDelay: execute_get_delay_timer,
    GetKey: execute_wait_for_key,
    WriteDelay: execute_set_delay_timer,
    WriteSound: execute_set_sound_timer,
    AddToIndex: execute_add_to_index,
    SetIndexToGlyph: execute_font_character,
    StoreBCD: execute_bcd_conversion,
    StoreRegisters: execute_store_registers,
    LoadRegisters: execute_load_registers,
}
