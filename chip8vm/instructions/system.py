"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8vm.state import MachineState
from chip8vm.operations import NoOp, ClearScreen, Return
from chip8vm.stack import pop


def no_op(state: MachineState, operation: NoOp) -> MachineState:
    """0000 - No operation."""
    return state


def execute_clear_screen(state: MachineState, operation: ClearScreen) -> MachineState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: MachineState, operation: Return) -> MachineState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


HANDLERS = {
    NoOp: no_op,
    ClearScreen: execute_clear_screen,
    Return: execute_return,
}
