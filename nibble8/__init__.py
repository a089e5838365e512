"""nibble8: interpreter for an 8-bit CHIP-8 instruction subset."""

from nibble8.constants import *
from nibble8.errors import (
    Nibble8Error, ROMLoadError, ROMTooLargeError, MemoryAccessError,
    StackUnderflowError, UnknownInstructionError,
)
from nibble8.state import (
    EmulatorState, create_state, set_key, clear_key, should_play_sound, framebuffer, dump_registers,
)
from nibble8.decode import DecodedInstruction, Opcode, decode, decode_word
from nibble8.emulator import execute, fetch, step, run, load_rom
from nibble8.rendering import framebuffer_to_rgb, create_color_scheme, save_frame

__all__ = [
    "EmulatorState",
    "create_state",
    "set_key",
    "clear_key",
    "should_play_sound",
    "framebuffer",
    "dump_registers",
    "fetch",
    "execute",
    "step",
    "run",
    "load_rom",
    "DecodedInstruction",
    "Opcode",
    "decode",
    "decode_word",
    "Nibble8Error",
    "ROMLoadError",
    "ROMTooLargeError",
    "MemoryAccessError",
    "StackUnderflowError",
    "UnknownInstructionError",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "framebuffer_to_rgb",
    "create_color_scheme",
    "save_frame",
]
