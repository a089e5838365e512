"""Tests for control flow instructions."""

import pytest
from nibble8 import execute, step, create_state, UnknownInstructionError
from conftest import program


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_jump_full_address(self, fresh_state):
        state = execute(fresh_state, 0x1ABC)
        assert state.pc == 0xABC

    def test_jump_loop(self):
        """A jump to itself keeps PC in place cycle after cycle."""
        state = create_state(program(0x1200))
        for _ in range(3):
            state = step(state)
            assert state.pc == 0x200


class TestCall:
    """Test subroutine calls."""

    def test_call_pushes_advanced_pc(self):
        state = create_state(program(0x2300))

        state = step(state)

        assert state.pc == 0x300
        assert state.stack.data == (0x202,)

    def test_nested_calls_grow_stack(self, fresh_state):
        state = fresh_state
        for depth in range(1, 21):
            state = execute(state, 0x2400)
            assert len(state.stack) == depth


class TestSkipInstructions:
    """Test skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XKK - Should skip when VX == KK."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XKK - Should not skip when VX != KK."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XKK - Should skip when VX != KK."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XKK - Should not skip when VX == KK."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc

    def test_skip_jumps_over_next_word(self):
        """A taken skip steps over exactly one instruction."""
        state = create_state(program(
            0x3000,  # 0x200: skip if V0 == 0
            0x6101,  # 0x202: V1 = 1 (skipped)
            0x6202,  # 0x204: V2 = 2
        ))

        state = step(state)
        assert state.pc == 0x204
        state = step(state)

        assert state.V[1] == 0
        assert state.V[2] == 2


class TestUnsupportedControlFlow:
    """Register compares, key skips and offset jumps are not part of the set."""

    @pytest.mark.parametrize("instruction", [0x5120, 0x9120, 0xB123, 0xE19E, 0xE1A1])
    def test_unsupported(self, fresh_state, instruction):
        with pytest.raises(UnknownInstructionError):
            execute(fresh_state, instruction)
