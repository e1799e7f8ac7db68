"""Tests for listings and dumps."""

import pytest
from chip8vm import (
    decode, format_operation, disassemble, format_listing, format_registers,
    load_program, Jump, Unrecognized,
)
from chip8vm.decode import ALU_OPERATIONS, MISC_OPERATIONS
from conftest import program, set_registers


@pytest.mark.parametrize("instruction, text", [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1228, "JP 0x228"),
    (0x2300, "CALL 0x300"),
    (0x8124, "ADD V1, V2"),
    (0x834E, "SHL V3"),
    (0xA300, "LD I, 0x300"),
    (0xD015, "DRW V0, V1, 5"),
    (0xF50A, "LD V5, K"),
    (0xF265, "LD V2, [I]"),
    (0x0123, "DATA 0x01 0x23"),
])
def test_format_operation(instruction, text):
    assert format_operation(decode(instruction)) == text


def test_every_operation_has_a_mnemonic():
    for instruction in [0x00E0, 0x00EE, 0x0000, 0x0123] + list(range(0x1000, 0x10000, 0x1000)):
        format_operation(decode(instruction))
    for n in ALU_OPERATIONS:
        format_operation(decode(0x8120 | n))
    for nn in MISC_OPERATIONS:
        format_operation(decode(0xF000 | nn))


def test_disassemble_skips_noops(fresh_state):
    state = load_program(fresh_state, program(0x1204, 0x0000, 0x0123))
    listing = disassemble(state.memory, start=0x200, end=0x206)
    assert listing == [(0x200, Jump(nnn=0x204)), (0x204, Unrecognized(high=0x01, low=0x23))]


def test_disassemble_with_noops():
    listing = disassemble(bytes(program(0x1204, 0x0000)), include_noops=True)
    assert [address for address, _ in listing] == [0, 2]


def test_format_listing():
    lines = format_listing(program(0x00E0, 0x1200))
    assert lines == ["0x000000:\tCLS", "0x000002:\tJP 0x200"]


def test_format_registers(fresh_state):
    state = set_registers(fresh_state, V0=1, VF=255)
    lines = format_registers(state.replace(I=state.I + 0x300))
    assert lines[0] == "V0: 1"
    assert lines[15] == "VF: 255"
    assert lines[16] == "I: 768"
