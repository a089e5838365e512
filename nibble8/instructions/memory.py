"""Register load and immediate instructions."""

import jax
import jax.numpy as jnp
from nibble8.state import EmulatorState
from nibble8.decode import DecodedInstruction
from nibble8.logging import get_logger

logger = get_logger("nibble8.emulator")


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XKK - Set VX = KK."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.kk))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XKK - Add KK to VX, wrapping, VF untouched."""
    result = (int(state.V[instruction.x]) + instruction.kk) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(result))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.asarray(instruction.addr, dtype=jnp.uint16))


def random_byte(key: jax.Array) -> tuple[jax.Array, int]:
    """Draw one uniform byte, returning the advanced key with it."""
    key, subkey = jax.random.split(key)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return key, int(value)


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXKK - Set VX = random & KK."""
    key, value = random_byte(state.rng)
    logger.debug(f"Random 0x{value:02X} & 0x{instruction.kk:02X}")
    return state.replace(V=state.V.at[instruction.x].set(value & instruction.kk), rng=key)
