"""Flat 4 KiB memory with bound-checked access."""

import jax.numpy as jnp

from nibble8.constants import FONT_DATA, FONT_START, MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_START
from nibble8.errors import MemoryAccessError, ROMTooLargeError


def _check_range(address: int, length: int = 1) -> None:
    if address < 0 or length < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(address, length)


def create_memory(rom: bytes = b"") -> jnp.ndarray:
    """Build memory with the glyph font at FONT_START and `rom` at PROGRAM_START."""
    if len(rom) > MAX_ROM_SIZE:
        raise ROMTooLargeError(len(rom), MAX_ROM_SIZE)

    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    memory = memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(jnp.array(FONT_DATA, dtype=jnp.uint8))
    if rom:
        rom_array = jnp.array(list(rom), dtype=jnp.uint8)
        memory = memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    return memory


def read(memory: jnp.ndarray, address: int) -> int:
    """Return the byte stored at `address`."""
    address = int(address)
    _check_range(address)
    return int(memory[address])


def write(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    """Store `value` at `address`."""
    address = int(address)
    _check_range(address)
    return memory.at[address].set(int(value) & 0xFF)


def read_block(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Return `length` bytes starting at `address`."""
    address = int(address)
    _check_range(address, length)
    return memory[address:address + length]


def write_block(memory: jnp.ndarray, address: int, values) -> jnp.ndarray:
    """Store a run of bytes starting at `address`."""
    address = int(address)
    values = jnp.asarray(values, dtype=jnp.uint8)
    _check_range(address, values.shape[0])
    return memory.at[address:address + values.shape[0]].set(values)
