"""Main CHIP-8 execution engine."""

import functools
from typing import Optional

import jax
import jax.numpy as jnp
from jax.experimental import checkify

from chip8vm.state import MachineState
from chip8vm.decode import decode
from chip8vm.constants import MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE
from chip8vm.errors import MemoryAccessError, ProgramTooLargeError, UnrecognizedInstructionError
from chip8vm.operations import Operation, Unrecognized
from chip8vm.instructions import system, control_flow, memory, alu, display, misc

HANDLERS = {
    **system.HANDLERS,
    **control_flow.HANDLERS,
    **memory.HANDLERS,
    **alu.HANDLERS,
    **display.HANDLERS,
    **misc.HANDLERS,
}


@functools.lru_cache(maxsize=4096)
def compile_operation(operation: Operation):
    """JIT-compile the executor for one operation value.

    Operands are closed over, so they stay Python ints at trace time.
    The compiled function returns ``(error, state)`` from checkify.
    """
    handler = HANDLERS[type(operation)]
    return jax.jit(checkify.checkify(lambda state: handler(state, operation)))


def execute(state: MachineState, operation: Operation, address: Optional[int] = None) -> MachineState:
    """Execute a single decoded CHIP-8 operation.

    Args:
        state: Machine state after the instruction was fetched
        operation: Decoded operation to run
        address: Where the instruction was fetched from, used in error
            reports. Defaults to ``pc - 2``, which holds right after a fetch.
    """
    if isinstance(operation, Unrecognized):
        if address is None:
            address = int(state.pc) - 2
        raise UnrecognizedInstructionError(address, operation.high, operation.low)

    error, state = compile_operation(operation)(state)
    message = error.get()
    if message is not None:
        raise MemoryAccessError(message)
    return state


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into a 16-bit word."""
    return (high << 8) | low


def fetch(state: MachineState) -> tuple[MachineState, int]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise MemoryAccessError(f"Program counter out of bounds: 0x{pc:04X}")
    instruction = _pack_u16(int(state.memory[pc]), int(state.memory[pc + 1]))
    return state.replace(pc=state.pc + 2), instruction


def step(state: MachineState) -> MachineState:
    """Run one fetch-decode-execute cycle."""
    address = int(state.pc)
    state, instruction = fetch(state)
    return execute(state, decode(instruction), address)


def load_program(state: MachineState, program: bytes) -> MachineState:
    """Load program bytes into memory starting at 0x200 and point pc at them."""
    if len(program) > MAX_PROGRAM_SIZE:
        raise ProgramTooLargeError(len(program), MAX_PROGRAM_SIZE)
    new_memory = state.memory
    if len(program):
        program_array = jnp.array(list(program), dtype=jnp.uint8)
        new_memory = new_memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(program_array)
    return state.replace(memory=new_memory, pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
