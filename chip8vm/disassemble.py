"""Human readable listings of CHIP-8 operations, memory and registers."""

from typing import Optional

import numpy as np

from chip8vm.constants import MEMORY_SIZE, NUM_REGISTERS
from chip8vm.decode import decode
from chip8vm.state import MachineState
from chip8vm.operations import (
    Operation, NoOp, ClearScreen, Return, Unrecognized,
    Jump, Call, JumpWithOffset,
    SkipIfEqualImmediate, SkipIfNotEqualImmediate,
    SkipIfRegistersEqual, SkipIfRegistersNotEqual,
    SkipIfKeyPressed, SkipIfKeyNotPressed,
    SetImmediate, AddImmediate, SetIndex, Random,
    SetRegister, Or, And, Xor, Add, SubtractAB, ShiftRight, SubtractBA, ShiftLeft,
    Draw,
    ReadDelay, GetKey, WriteDelay, WriteSound, AddToIndex,
    SetIndexToGlyph, StoreBCD, StoreRegisters, LoadRegisters,
)


def reg(num: int) -> str:
    return f"V{num:X}"


MNEMONICS = {
    NoOp: lambda op: "NOP",
    ClearScreen: lambda op: "CLS",
    Return: lambda op: "RET",
    Unrecognized: lambda op: f"DATA 0x{op.high:02X} 0x{op.low:02X}",
    Jump: lambda op: f"JP 0x{op.nnn:03X}",
    Call: lambda op: f"CALL 0x{op.nnn:03X}",
    JumpWithOffset: lambda op: f"JP V0, 0x{op.nnn:03X}",
    SkipIfEqualImmediate: lambda op: f"SE {reg(op.x)}, 0x{op.nn:02X}",
    SkipIfNotEqualImmediate: lambda op: f"SNE {reg(op.x)}, 0x{op.nn:02X}",
    SkipIfRegistersEqual: lambda op: f"SE {reg(op.x)}, {reg(op.y)}",
    SkipIfRegistersNotEqual: lambda op: f"SNE {reg(op.x)}, {reg(op.y)}",
    SkipIfKeyPressed: lambda op: f"SKP {reg(op.x)}",
    SkipIfKeyNotPressed: lambda op: f"SKNP {reg(op.x)}",
    SetImmediate: lambda op: f"LD {reg(op.x)}, 0x{op.nn:02X}",
    AddImmediate: lambda op: f"ADD {reg(op.x)}, 0x{op.nn:02X}",
    SetIndex: lambda op: f"LD I, 0x{op.nnn:03X}",
    Random: lambda op: f"RND {reg(op.x)}, 0x{op.nn:02X}",
    SetRegister: lambda op: f"LD {reg(op.x)}, {reg(op.y)}",
    Or: lambda op: f"OR {reg(op.x)}, {reg(op.y)}",
    And: lambda op: f"AND {reg(op.x)}, {reg(op.y)}",
    Xor: lambda op: f"XOR {reg(op.x)}, {reg(op.y)}",
    Add: lambda op: f"ADD {reg(op.x)}, {reg(op.y)}",
    SubtractAB: lambda op: f"SUB {reg(op.x)}, {reg(op.y)}",
    ShiftRight: lambda op: f"SHR {reg(op.x)}",
    SubtractBA: lambda op: f"SUBN {reg(op.x)}, {reg(op.y)}",
    ShiftLeft: lambda op: f"SHL {reg(op.x)}",
    Draw: lambda op: f"DRW {reg(op.x)}, {reg(op.y)}, {op.n}",
    ReadDelay: lambda op: f"LD {reg(op.x)}, DT",
    GetKey: lambda op: f"LD {reg(op.x)}, K",
    WriteDelay: lambda op: f"LD DT, {reg(op.x)}",
    WriteSound: lambda op: f"LD ST, {reg(op.x)}",
    AddToIndex: lambda op: f"ADD I, {reg(op.x)}",
    SetIndexToGlyph: lambda op: f"LD F, {reg(op.x)}",
    StoreBCD: lambda op: f"LD B, {reg(op.x)}",
    StoreRegisters: lambda op: f"LD [I], {reg(op.x)}",
    LoadRegisters: lambda op: f"LD {reg(op.x)}, [I]",
}


def format_operation(operation: Operation) -> str:
    """Assembler-style mnemonic for an operation, e.g. ``ADD V1, V2``."""
    return MNEMONICS[type(operation)](operation)


def disassemble(
    memory,
    start: int = 0,
    end: Optional[int] = None,
    include_noops: bool = False,
) -> list[tuple[int, Operation]]:
    """Decode every aligned instruction word in ``memory[start:end]``.

    Args:
        memory: Byte sequence or array holding the machine memory
        start: First address to decode
        end: Address to stop at (exclusive), defaults to the end of memory
        include_noops: Whether to keep zero words in the listing

    Returns:
        List of (address, operation) pairs in address order
    """
    if isinstance(memory, (bytes, bytearray)):
        data = np.frombuffer(memory, dtype=np.uint8)
    else:
        data = np.asarray(memory, dtype=np.uint8)
    if end is None:
        end = min(len(data), MEMORY_SIZE)
    listing = []
    for address in range(start, end - 1, 2):
        operation = decode((int(data[address]) << 8) | int(data[address + 1]))
        if isinstance(operation, NoOp) and not include_noops:
            continue
        listing.append((address, operation))
    return listing


def format_listing(memory, start: int = 0, end: Optional[int] = None, include_noops: bool = False) -> list[str]:
    """Disassembly as printable lines."""
    return [
        f"{address:#08x}:\t{format_operation(operation)}"
        for address, operation in disassemble(memory, start, end, include_noops)
    ]


def format_registers(state: MachineState) -> list[str]:
    """One line per general register, followed by the index register."""
    registers = np.asarray(state.V)
    lines = [f"{reg(r)}: {int(registers[r])}" for r in range(NUM_REGISTERS)]
    lines.append(f"I: {int(state.I)}")
    return lines
