"""Tests for ALU operations (8xxx)."""

import chex
from chip8vm import execute, decode
from conftest import set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, decode(0x8120))  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, decode(0x8121))  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xF1)

        state = execute(state, decode(0x8122))  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = set_registers(fresh_state, V1=0xFF, V2=0xF0)

        state = execute(state, decode(0x8123))  # V1 ^= V2

        assert state.V[1] == 0x0F

    def test_logic_leaves_flag_alone(self, fresh_state):
        """8XY0-8XY3 never touch VF."""
        for instruction in (0x8120, 0x8121, 0x8122, 0x8123):
            state = set_registers(fresh_state, V1=0x0F, V2=0xF0, VF=0x42)
            state = execute(state, decode(instruction))
            assert state.V[15] == 0x42, f"{instruction:04X} changed VF"

    def test_alu_only_touches_registers(self, fresh_state):
        """An ALU operation changes nothing outside the register file."""
        state = set_registers(fresh_state, V1=0x10, V2=0x20)
        new_state = execute(state, decode(0x8124))
        chex.assert_trees_all_equal(new_state.replace(V=state.V), state)


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = set_registers(fresh_state, V1=0x10, V2=0x20, VF=1)

        state = execute(state, decode(0x8124))  # V1 += V2

        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - Add with carry."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x01)

        state = execute(state, decode(0x8124))  # V1 += V2

        assert state.V[1] == 0x00  # 256 wraps to 0
        assert state.V[15] == 1  # Carry set

    def test_alu_add_boundary(self, fresh_state):
        """8XY4 - Sum of exactly 255 does not carry."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, decode(0x8124))

        assert state.V[1] == 0xFF
        assert state.V[15] == 0

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = set_registers(fresh_state, V1=5, V2=3)

        state = execute(state, decode(0x8125))  # V1 -= V2

        assert state.V[1] == 2
        assert state.V[15] == 1  # No borrow (VX >= VY)

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, with borrow."""
        state = set_registers(fresh_state, V1=3, V2=5)

        state = execute(state, decode(0x8125))  # V1 -= V2

        assert state.V[1] == 254  # 3 - 5 + 256
        assert state.V[15] == 0  # Borrow (VX < VY)

    def test_alu_sub_xy_equal(self, fresh_state):
        """8XY5 - Equal operands give zero without borrow."""
        state = set_registers(fresh_state, V1=7, V2=7)

        state = execute(state, decode(0x8125))

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = set_registers(fresh_state, V1=0x10, V2=0x30)

        state = execute(state, decode(0x8127))  # V1 = V2 - V1

        assert state.V[1] == 0x20  # 48 - 16 = 32
        assert state.V[15] == 1  # No borrow (VY >= VX)

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, with borrow."""
        state = set_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, decode(0x8127))  # V1 = V2 - V1

        assert state.V[1] == 0xE0  # 16 - 48 = -32 → 224
        assert state.V[15] == 0


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - Shift right captures bit 0."""
        state = set_registers(fresh_state, V3=0b00000011, V4=0xFF)  # V4 ignored

        state = execute(state, decode(0x8346))  # V3 >>= 1

        assert state.V[3] == 1
        assert state.V[15] == 1
        assert state.V[4] == 0xFF

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Shift right, even number."""
        state = set_registers(fresh_state, V1=0x04, V2=0xFF)

        state = execute(state, decode(0x8126))  # V1 >>= 1

        assert state.V[1] == 0x02
        assert state.V[15] == 0

    def test_shift_left_overflow(self, fresh_state):
        """8XYE - Shift left captures bit 7 and truncates."""
        state = set_registers(fresh_state, V3=0b10000001, V4=0xFF)

        state = execute(state, decode(0x834E))  # V3 <<= 1

        assert state.V[3] == 0b00000010  # 129 << 1 = 258 → 2
        assert state.V[15] == 1

    def test_shift_left_no_overflow(self, fresh_state):
        """8XYE - Shift left without losing a bit."""
        state = set_registers(fresh_state, V3=0x41)

        state = execute(state, decode(0x834E))

        assert state.V[3] == 0x82
        assert state.V[15] == 0

    def test_shift_ignores_vy(self, fresh_state):
        """The Y operand of both shifts is decoded but unused."""
        state = set_registers(fresh_state, V1=0x08, V2=0x03)

        state = execute(state, decode(0x8126))

        assert state.V[1] == 0x04  # Shifted V1, not V2


class TestALUEdgeCases:
    """Test edge cases and register aliasing."""

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = set_registers(fresh_state, V5=0xAA)

        # V5 ^= V5 (should become 0)
        state = execute(state, decode(0x8553))
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        # Reset and test self ADD
        state = set_registers(state, V5=0x80)
        state = execute(state, decode(0x8554))  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_as_source(self, fresh_state):
        """VF used as an operand is read before the flag is written."""
        state = set_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, decode(0x81F4))  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"

    def test_vf_as_destination(self, fresh_state):
        """With VF as destination the flag is the final value."""
        state = set_registers(fresh_state, VF=0xFF, V1=0x02)

        state = execute(state, decode(0x8F14))  # VF += V1, carries

        assert state.V[15] == 1

    def test_sub_vf_as_destination(self, fresh_state):
        state = set_registers(fresh_state, VF=0x01, V1=0x02)

        state = execute(state, decode(0x8F15))  # VF -= V1, borrows

        assert state.V[15] == 0
