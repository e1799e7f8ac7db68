"""Errors raised by the CHIP-8 interpreter."""


class MachineError(RuntimeError):
    """Fatal fault while executing a program. The machine cannot continue."""


class UnrecognizedInstructionError(MachineError):
    """An instruction word that decodes to no known operation was executed."""

    def __init__(self, address: int, high: int, low: int):
        self.address = address
        self.high = high
        self.low = low
        super().__init__(
            f"Unrecognized instruction 0x{high:02X}{low:02X} at address 0x{address:03X}"
        )


class MemoryAccessError(MachineError):
    """Program counter, index register or stack pointer left its fixed range."""


class ProgramTooLargeError(ValueError):
    """Program does not fit between PROGRAM_START and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"Program size {size} exceeds maximum {capacity}")
