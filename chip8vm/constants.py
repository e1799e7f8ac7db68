"""CHIP-8 machine constants."""

import jax.numpy as jnp

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
DISPLAY_SIZE = DISPLAY_WIDTH * DISPLAY_HEIGHT

NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG_REGISTER = 0xF
STACK_SIZE = 48

ADDRESS_MASK = 0xFFF
INDEX_MAX = 0xFFFF

FONT_START = 0x50
GLYPH_SIZE = 5
FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)

__all__ = [
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "DISPLAY_SIZE",
    "NUM_REGISTERS",
    "NUM_KEYS",
    "FLAG_REGISTER",
    "STACK_SIZE",
    "ADDRESS_MASK",
    "INDEX_MAX",
    "FONT_START",
    "GLYPH_SIZE",
    "FONT_DATA",
]
