"""Tagged CHIP-8 operations produced by the decoder.

Each instruction form is its own frozen dataclass carrying only the operand
fields it uses. Operations compare structurally and are hashable, so they can
key caches of compiled executors.
"""

from typing import Union

from flax.struct import dataclass


@dataclass
class NoOp:
    """0000 - No operation."""


@dataclass
class ClearScreen:
    """00E0 - Clear display."""


@dataclass
class Return:
    """00EE - Return from subroutine."""


@dataclass
class Unrecognized:
    """Instruction word matching no known pattern."""
    high: int
    low: int


@dataclass
class Jump:
    """1NNN - Jump to address NNN."""
    nnn: int


@dataclass
class Call:
    """2NNN - Call subroutine at NNN."""
    nnn: int


@dataclass
class SkipIfEqualImmediate:
    """3XNN - Skip next instruction if VX == NN."""
    x: int
    nn: int


@dataclass
class SkipIfNotEqualImmediate:
    """4XNN - Skip next instruction if VX != NN."""
    x: int
    nn: int


@dataclass
class SkipIfRegistersEqual:
    """5XY0 - Skip next instruction if VX == VY."""
    x: int
    y: int


@dataclass
class SetImmediate:
    """6XNN - Set VX = NN."""
    x: int
    nn: int


@dataclass
class AddImmediate:
    """7XNN - Add NN to VX, no carry."""
    x: int
    nn: int


@dataclass
class SetRegister:
    """8XY0 - Set VX = VY."""
    x: int
    y: int


@dataclass
class Or:
    """8XY1 - Binary OR: VX |= VY."""
    x: int
    y: int


@dataclass
class And:
    """8XY2 - Binary AND: VX &= VY."""
    x: int
    y: int


@dataclass
class Xor:
    """8XY3 - Logical XOR: VX ^= VY."""
    x: int
    y: int


@dataclass
class Add:
    """8XY4 - Add: VX += VY, VF = carry."""
    x: int
    y: int


@dataclass
class SubtractAB:
    """8XY5 - Subtract: VX -= VY, VF = not borrow."""
    x: int
    y: int


@dataclass
class ShiftRight:
    """8XY6 - Shift right: VX >>= 1, VF = shifted out bit. VY unused."""
    x: int
    y: int


@dataclass
class SubtractBA:
    """8XY7 - Subtract: VX = VY - VX, VF = not borrow."""
    x: int
    y: int


@dataclass
class ShiftLeft:
    """8XYE - Shift left: VX <<= 1, VF = shifted out bit. VY unused."""
    x: int
    y: int


@dataclass
class SkipIfRegistersNotEqual:
    """9XY0 - Skip next instruction if VX != VY."""
    x: int
    y: int


@dataclass
class SetIndex:
    """ANNN - Set I = NNN."""
    nnn: int


@dataclass
class JumpWithOffset:
    """BNNN - Jump to address NNN + V0."""
    nnn: int


@dataclass
class Random:
    """CXNN - Set VX = random & NN."""
    x: int
    nn: int


@dataclass
class Draw:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    x: int
    y: int
    n: int


@dataclass
class SkipIfKeyPressed:
    """EX9E - Skip next instruction if key VX is pressed."""
    x: int


@dataclass
class SkipIfKeyNotPressed:
    """EXA1 - Skip next instruction if key VX is not pressed."""
    x: int


@dataclass
class ReadDelay:
    """FX07 - Set VX to delay timer value."""
    x: int


@dataclass
class GetKey:
    """FX0A - Wait for key press, store it in VX."""
    x: int


@dataclass
class WriteDelay:
    """FX15 - Set delay timer to VX."""
    x: int


@dataclass
class WriteSound:
    """FX18 - Set sound timer to VX."""
    x: int


@dataclass
class AddToIndex:
    """FX1E - Add VX to I register."""
    x: int


@dataclass
class SetIndexToGlyph:
    """FX29 - Set I to location of glyph for digit VX."""
    x: int


@dataclass
class StoreBCD:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    x: int


@dataclass
class StoreRegisters:
    """FX55 - Store V0 through VX in memory starting at I."""
    x: int


@dataclass
class LoadRegisters:
    """FX65 - Load V0 through VX from memory starting at I."""
    x: int


Operation = Union[
    NoOp, ClearScreen, Return, Unrecognized,
    Jump, Call, JumpWithOffset,
    SkipIfEqualImmediate, SkipIfNotEqualImmediate,
    SkipIfRegistersEqual, SkipIfRegistersNotEqual,
    SkipIfKeyPressed, SkipIfKeyNotPressed,
    SetImmediate, AddImmediate, SetIndex, Random,
    SetRegister, Or, And, Xor, Add, SubtractAB, ShiftRight, SubtractBA, ShiftLeft,
    Draw,
    ReadDelay, GetKey, WriteDelay, WriteSound, AddToIndex,
    SetIndexToGlyph, StoreBCD, StoreRegisters, LoadRegisters,
]

__all__ = [
    "Operation",
    "NoOp", "ClearScreen", "Return", "Unrecognized",
    "Jump", "Call", "JumpWithOffset",
    "SkipIfEqualImmediate", "SkipIfNotEqualImmediate",
    "SkipIfRegistersEqual", "SkipIfRegistersNotEqual",
    "SkipIfKeyPressed", "SkipIfKeyNotPressed",
    "SetImmediate", "AddImmediate", "SetIndex", "Random",
    "SetRegister", "Or", "And", "Xor", "Add", "SubtractAB", "ShiftRight", "SubtractBA", "ShiftLeft",
    "Draw",
    "ReadDelay", "GetKey", "WriteDelay", "WriteSound", "AddToIndex",
    "SetIndexToGlyph", "StoreBCD", "StoreRegisters", "LoadRegisters",
]
