"""Console logging for the CHIP-8 machine.

Prints program loads, resets and fatal faults to stdout, filtered by level,
with an elapsed-time stamp and optional ANSI colours.
"""

import time
import sys
from typing import Optional

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "CRITICAL": "\033[35m",
}
RESET_COLOR = "\033[0m"


class MachineLogger:
    """Level-filtered console logger for machine lifecycle events."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        level = log_level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.name = name
        self.threshold = LEVELS.index(level)
        self.use_colors = use_colors and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _emit(self, level: str, message: str):
        if LEVELS.index(level) < self.threshold:
            return
        prefix = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{LEVEL_COLORS[level]}{tag}{RESET_COLOR}"
        print(f"{prefix}{tag}[{self.name}] {message}", flush=True)

    def debug(self, message: str):
        self._emit("DEBUG", message)

    def info(self, message: str):
        self._emit("INFO", message)

    def critical(self, message: str):
        self._emit("CRITICAL", message)

    def log_load(self, size: int, pc: int):
        self.info(f"Loaded {size} bytes into memory")
        self.info(f"PC set to 0x{pc:03X}")

    def log_reset(self, seed: int):
        self.debug(f"Machine reset (seed={seed})")

    def log_fault(self, error: Exception, pc: Optional[int] = None):
        """Report a fatal fault, with the program counter when known."""
        where = f" (pc=0x{pc:03X})" if pc is not None else ""
        self.critical(f"{type(error).__name__}{where}: {error}")
