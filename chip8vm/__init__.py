"""CHIP-8 virtual machine package."""

from chip8vm.state import MachineState, StackState, create_state
from chip8vm.emulator import execute, fetch, step, load_program
from chip8vm.decode import InstructionFields, split_fields, decode, decode_bytes
from chip8vm import operations
from chip8vm.operations import *
from chip8vm.constants import *
from chip8vm.errors import (
    MachineError, UnrecognizedInstructionError, MemoryAccessError, ProgramTooLargeError,
)
from chip8vm.machine import Machine
from chip8vm.disassemble import format_operation, disassemble, format_listing, format_registers

__all__ = [
    "MachineState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_program",
    "InstructionFields",
    "split_fields",
    "decode",
    "decode_bytes",
    "Machine",
    "MachineError",
    "UnrecognizedInstructionError",
    "MemoryAccessError",
    "ProgramTooLargeError",
    "format_operation",
    "disassemble",
    "format_listing",
    "format_registers",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "MAX_PROGRAM_SIZE",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "STACK_SIZE",
] + operations.__all__
