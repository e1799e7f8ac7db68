"""CHIP-8 instruction executors, one module per instruction family."""
