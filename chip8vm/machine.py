"""Owned CHIP-8 machine wrapping the functional emulator state."""

from typing import Optional, Sequence

import jax
import jax.numpy as jnp
import numpy as np
from tqdm import tqdm

from chip8vm.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT, NUM_KEYS
from chip8vm.decode import decode
from chip8vm.emulator import fetch, step, load_program
from chip8vm.errors import MachineError
from chip8vm.logging import MachineLogger
from chip8vm.operations import Operation
from chip8vm.state import MachineState, create_state


class Machine:
    """A single CHIP-8 machine instance.

    The machine owns its state. Callers drive it by calling :meth:`step` at
    their own cadence, may read the display and timers, and may write the key
    state and timers between steps. Registers, memory and the program counter
    only change through :meth:`step`.
    """

    def __init__(
        self,
        seed: int = 0,
        log_level: str = "INFO",
        logger: Optional[MachineLogger] = None,
    ):
        """Create a machine with zeroed state and the glyph table loaded.

        Args:
            seed: Seed for the PRNG key used by the random instruction
            log_level: Level for the default console logger
            logger: Logger to use instead of the default one
        """
        self.seed = seed
        self.logger = logger if logger is not None else MachineLogger(log_level=log_level)
        self.state: MachineState = create_state(jax.random.PRNGKey(seed))

    def reset(self):
        """Discard all state, as if freshly constructed."""
        self.state = create_state(jax.random.PRNGKey(self.seed))
        self.logger.log_reset(self.seed)

    def load(self, program: bytes):
        """Copy program bytes to 0x200 and point the program counter there."""
        try:
            self.state = load_program(self.state, program)
        except ValueError as e:
            self.logger.log_fault(e)
            raise
        self.logger.log_load(len(program), self.pc)

    def step(self):
        """Execute exactly one instruction."""
        try:
            self.state = step(self.state)
        except MachineError as e:
            self.logger.log_fault(e, self.pc)
            raise

    def run(self, num_steps: int, progress: bool = False):
        """Execute ``num_steps`` instructions back to back."""
        for _ in tqdm(range(num_steps), desc="Executing", unit="step", disable=not progress):
            self.step()

    def current_operation(self) -> Operation:
        """Decode the instruction at the program counter without running it."""
        _, instruction = fetch(self.state)
        return decode(instruction)

    # Timers

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @delay_timer.setter
    def delay_timer(self, value: int):
        self.state = self.state.replace(delay_timer=jnp.asarray(value, dtype=jnp.uint8))

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @sound_timer.setter
    def sound_timer(self, value: int):
        self.state = self.state.replace(sound_timer=jnp.asarray(value, dtype=jnp.uint8))

    def tick_timers(self):
        """Decrement both timers by one, stopping at zero."""
        if self.delay_timer > 0:
            self.delay_timer = self.delay_timer - 1
        if self.sound_timer > 0:
            self.sound_timer = self.sound_timer - 1

    # Display

    @property
    def display(self) -> np.ndarray:
        """Flat row-major framebuffer copy, one 0/1 byte per pixel."""
        return np.array(self.state.display, dtype=np.uint8)

    def frame(self) -> np.ndarray:
        """Framebuffer copy shaped (height, width)."""
        return self.display.reshape(DISPLAY_HEIGHT, DISPLAY_WIDTH)

    # Keys

    @property
    def keys(self) -> np.ndarray:
        return np.array(self.state.keys, dtype=np.uint8)

    @keys.setter
    def keys(self, values: Sequence[int]):
        values = np.asarray(values, dtype=np.uint8)
        if values.shape != (NUM_KEYS,):
            raise ValueError(f"Expected {NUM_KEYS} key states, got shape {values.shape}")
        self.state = self.state.replace(keys=jnp.asarray(values))

    def _set_key(self, key: int, value: int):
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key must be in range 0x0-0xF, got {key}")
        self.state = self.state.replace(keys=self.state.keys.at[key].set(value))

    def press(self, key: int):
        """Mark a hex key as held down."""
        self._set_key(key, 1)

    def release(self, key: int):
        """Mark a hex key as released."""
        self._set_key(key, 0)

    # Inspection

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def index(self) -> int:
        return int(self.state.I)

    @property
    def registers(self) -> np.ndarray:
        return np.array(self.state.V, dtype=np.uint8)
