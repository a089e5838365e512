"""Miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from nibble8.state import EmulatorState
from nibble8.decode import DecodedInstruction, Opcode
from nibble8.constants import FONT_START, GLYPH_SIZE
from nibble8.memory import read_block, write_block


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register (16-bit wrap, VF untouched)."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    return state.replace(I=jnp.asarray(new_i, dtype=jnp.uint16))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + int(state.V[instruction.x]) * GLYPH_SIZE
    return state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_block(state.memory, state.I, digits))


def _transfer_count(state: EmulatorState, instruction: DecodedInstruction) -> int:
    return instruction.x + 1 if state.inclusive_transfers else instruction.x


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = _transfer_count(state, instruction)
    return state.replace(memory=write_block(state.memory, state.I, state.V[:count]))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = _transfer_count(state, instruction)
    values = read_block(state.memory, state.I, count)
    return state.replace(V=state.V.at[:count].set(values))


MISC_OPERATIONS = {
    Opcode.DTLD: execute_get_delay_timer,
    Opcode.LDDT: execute_set_delay_timer,
    Opcode.LDST: execute_set_sound_timer,
    Opcode.ADDI: execute_add_to_index,
    Opcode.LDF: execute_font_character,
    Opcode.LDB: execute_bcd_conversion,
    Opcode.LDRM: execute_store_registers,
    Opcode.LDV: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the decoded tag."""
    return MISC_OPERATIONS[instruction.op](state, instruction)
