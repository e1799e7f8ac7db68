"""CHIP-8 instruction decoding."""

from chex import dataclass

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


@dataclass(frozen=True)
class InstructionFields:
    """Raw CHIP-8 instruction split into its operand fields."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)

    @property
    def high(self) -> int:
        return self.raw >> 8

    @property
    def low(self) -> int:
        return self.nn


def split_fields(instruction: int) -> InstructionFields:
    """Split 16-bit instruction into components."""
    return InstructionFields(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


def unrecognized(fields: InstructionFields) -> Unrecognized:
    return Unrecognized(high=fields.high, low=fields.low)


def decode_system(fields: InstructionFields) -> Operation:
    """00E0 / 00EE / 0000; any other 0NNN is opaque data."""
    if fields.raw == 0x00E0:
        return ClearScreen()
    if fields.raw == 0x00EE:
        return Return()
    if fields.raw == 0x0000:
        return NoOp()
    return unrecognized(fields)


# 8XYN, keyed by N
ALU_OPERATIONS = {
    0x0: SetRegister,
    0x1: Or,
    0x2: And,
    0x3: Xor,
    0x4: Add,
    0x5: SubtractAB,
    0x6: ShiftRight,
    0x7: SubtractBA,
    0xE: ShiftLeft,
}


def decode_alu(fields: InstructionFields) -> Operation:
    operation = ALU_OPERATIONS.get(fields.n)
    if operation is None:
        return unrecognized(fields)
    return operation(x=fields.x, y=fields.y)


# EXNN, keyed by NN
KEY_OPERATIONS = {
    0x9E: SkipIfKeyPressed,
    0xA1: SkipIfKeyNotPressed,
}

# FXNN, keyed by NN
MISC_OPERATIONS = {
    0x07: ReadDelay,
    0x0A: GetKey,
    0x15: WriteDelay,
    0x18: WriteSound,
    0x1E: AddToIndex,
    0x29: SetIndexToGlyph,
    0x33: StoreBCD,
    0x55: StoreRegisters,
    0x65: LoadRegisters,
}


def make_register_decoder(table: dict):
    """Factory for families selected by the low byte and operating on VX."""
    def decode_family(fields: InstructionFields) -> Operation:
        operation = table.get(fields.nn)
        if operation is None:
            return unrecognized(fields)
        return operation(x=fields.x)
    return decode_family


PRIMARY_DECODERS = [
    decode_system,
    lambda f: Jump(nnn=f.nnn),
    lambda f: Call(nnn=f.nnn),
    lambda f: SkipIfEqualImmediate(x=f.x, nn=f.nn),
    lambda f: SkipIfNotEqualImmediate(x=f.x, nn=f.nn),
    lambda f: SkipIfRegistersEqual(x=f.x, y=f.y),
    lambda f: SetImmediate(x=f.x, nn=f.nn),
    lambda f: AddImmediate(x=f.x, nn=f.nn),
    decode_alu,
    lambda f: SkipIfRegistersNotEqual(x=f.x, y=f.y),
    lambda f: SetIndex(nnn=f.nnn),
    lambda f: JumpWithOffset(nnn=f.nnn),
    lambda f: Random(x=f.x, nn=f.nn),
    lambda f: Draw(x=f.x, y=f.y, n=f.n),
    make_register_decoder(KEY_OPERATIONS),
    make_register_decoder(MISC_OPERATIONS),
]


def decode(instruction: int) -> Operation:
    """Decode 16-bit big-endian instruction word into a tagged operation.

    Never raises: words that match no instruction decode to ``Unrecognized``
    carrying both raw bytes.
    """
    fields = split_fields(instruction & 0xFFFF)
    return PRIMARY_DECODERS[fields.opcode](fields)


def decode_bytes(high: int, low: int) -> Operation:
    """Decode an instruction given as its two bytes, most significant first."""
    return decode(((high & 0xFF) << 8) | (low & 0xFF))
