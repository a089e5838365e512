"""System instructions (0x0xxx) and the unknown-instruction fault."""

import time

import jax.numpy as jnp
from nibble8.state import EmulatorState
from nibble8.decode import DecodedInstruction
from nibble8.errors import UnknownInstructionError
from nibble8.logging import get_logger
from nibble8.stack import pop

logger = get_logger("nibble8.emulator")


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=jnp.asarray(address, dtype=jnp.uint16))


def execute_unknown(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Halt on an instruction outside the supported set."""
    logger.critical(
        f"Unknown instruction 0x{instruction.raw:04X} at 0x{int(state.pc) - 2:03X}, halting"
    )
    if state.fatal_delay > 0:
        time.sleep(state.fatal_delay)
    raise UnknownInstructionError(instruction.high, instruction.low)
