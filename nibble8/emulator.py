"""Main execution engine: fetch, decode, execute."""

from typing import Union

import jax.numpy as jnp
from tqdm import tqdm

from nibble8.state import EmulatorState, dump_registers
from nibble8.decode import DecodedInstruction, Opcode, decode, decode_word
from nibble8.constants import MAX_ROM_SIZE, PROGRAM_START
from nibble8.errors import ROMLoadError, ROMTooLargeError
from nibble8.logging import get_logger
from nibble8.memory import read, write_block
from nibble8.instructions.system import execute_clear_screen, execute_return, execute_unknown
from nibble8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
)
from nibble8.instructions.alu import execute_alu_operation
from nibble8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from nibble8.instructions.display import execute_display
from nibble8.instructions.misc import execute_misc_instruction

logger = get_logger("nibble8.emulator")

# Eager dispatch rather than jax.lax.switch: unknown opcodes and RET underflow raise.
DISPATCH = {
    Opcode.CLS: execute_clear_screen,
    Opcode.RET: execute_return,
    Opcode.JP: execute_jump,
    Opcode.CALL: execute_call,
    Opcode.SE: execute_skip_if_equal_immediate,
    Opcode.SNE: execute_skip_if_not_equal_immediate,
    Opcode.LD: execute_set,
    Opcode.ADD: execute_add,
    Opcode.LDR: execute_alu_operation,
    Opcode.AND: execute_alu_operation,
    Opcode.XOR: execute_alu_operation,
    Opcode.ADDC: execute_alu_operation,
    Opcode.SUB: execute_alu_operation,
    Opcode.LDI: execute_set_index,
    Opcode.RND: execute_random,
    Opcode.DRW: execute_display,
    Opcode.DTLD: execute_misc_instruction,
    Opcode.LDDT: execute_misc_instruction,
    Opcode.LDST: execute_misc_instruction,
    Opcode.ADDI: execute_misc_instruction,
    Opcode.LDF: execute_misc_instruction,
    Opcode.LDB: execute_misc_instruction,
    Opcode.LDRM: execute_misc_instruction,
    Opcode.LDV: execute_misc_instruction,
    Opcode.UNKNOWN: execute_unknown,
}


def _decrement(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)


def decrement_timers(state: EmulatorState) -> EmulatorState:
    """Tick both timers once, stopping at zero."""
    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def execute(state: EmulatorState, instruction: Union[DecodedInstruction, int]) -> EmulatorState:
    """Execute a single instruction, given decoded or as a raw 16-bit word."""
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode_word(instruction)
    state = decrement_timers(state)
    return DISPATCH[instruction.op](state, instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, tuple[int, int]]:
    """Fetch next instruction bytes from memory."""
    high = read(state.memory, state.pc)
    low = read(state.memory, int(state.pc) + 1)
    return state.replace(pc=state.pc + 2), (high, low)


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch, decode, execute cycle."""
    state, (high, low) = fetch(state)
    instruction = decode(high, low)
    if logger.is_enabled_for("DEBUG"):
        logger.debug(f"Fetched 0x{high:02X}{low:02X} -> {instruction}")
    state = execute(state, instruction)
    if logger.is_enabled_for("DEBUG"):
        logger.debug(dump_registers(state))
    return state


def run(state: EmulatorState, cycles: int, progress: bool = False) -> EmulatorState:
    """Run `cycles` instructions."""
    for _ in tqdm(range(cycles), desc="Running", unit="cycle", disable=not progress):
        state = step(state)
    return state


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into memory starting at 0x200."""
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as e:
        raise ROMLoadError(f"Could not read ROM '{filename}': {e}") from e
    if len(rom_data) > MAX_ROM_SIZE:
        raise ROMTooLargeError(len(rom_data), MAX_ROM_SIZE)
    logger.info(f"Loaded {len(rom_data)} bytes from {filename}")
    return state.replace(memory=write_block(state.memory, PROGRAM_START, list(rom_data)))
