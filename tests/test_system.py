"""Tests for system instructions (0xxx)."""

import jax.numpy as jnp
import pytest
from nibble8 import (
    execute, step, create_state, MemoryAccessError,
    StackUnderflowError, UnknownInstructionError,
)
from nibble8.constants import MAX_ROM_SIZE
from conftest import program


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(1))
    state = state.replace(display=state.display.at[63, 31].set(1))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0
    assert state.display.shape == (64, 32)


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[-1] == initial_pc

    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert len(state.stack) == 0


def test_call_then_return_resumes_after_call():
    """CALL fetched at 0x200 returns to 0x202."""
    rom = bytearray(program(0x2300, 0x6105))
    rom += bytes(0x100 - len(rom))
    rom += program(0x00EE)
    state = create_state(bytes(rom))

    state = step(state)  # CALL 0x300
    assert state.pc == 0x300
    state = step(state)  # RET
    assert state.pc == 0x202
    state = step(state)  # V1 = 5
    assert state.V[1] == 5


def test_nested_return_order(fresh_state):
    state = fresh_state.replace(pc=jnp.asarray(0x210, dtype=jnp.uint16))
    state = execute(state, 0x2300)
    state = state.replace(pc=state.pc + 4)
    state = execute(state, 0x2400)

    state = execute(state, 0x00EE)
    assert state.pc == 0x304
    state = execute(state, 0x00EE)
    assert state.pc == 0x210


def test_return_on_empty_stack(fresh_state):
    with pytest.raises(StackUnderflowError):
        execute(fresh_state, 0x00EE)


@pytest.mark.parametrize("instruction", [0x0000, 0x0123, 0x00E1, 0x00FF])
def test_other_system_words_are_unknown(fresh_state, instruction):
    with pytest.raises(UnknownInstructionError):
        execute(fresh_state, instruction)


def test_return_past_end_of_memory_faults():
    """CALL in the last word pushes 0x1000; the fetch after RET is out of range."""
    rom = bytearray(MAX_ROM_SIZE)
    rom[0x100:0x102] = program(0x00EE)  # 0x300
    rom[-2:] = program(0x2300)  # 0xFFE
    state = create_state(bytes(rom))
    state = state.replace(pc=jnp.asarray(0xFFE, dtype=jnp.uint16))

    state = step(state)  # CALL 0x300
    assert state.stack.data[-1] == 0x1000
    state = step(state)  # RET
    assert state.pc == 0x1000

    with pytest.raises(MemoryAccessError):
        step(state)
