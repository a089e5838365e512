"""Machine state and its collaborator-facing accessors."""

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import PyTreeNode, field

from nibble8.constants import NUM_KEYS, NUM_REGISTERS, PROGRAM_START, SCREEN_HEIGHT, SCREEN_WIDTH
from nibble8.memory import create_memory
from nibble8.stack import StackState


class EmulatorState(PyTreeNode):
    """Complete machine state.

    Attributes:
        rng: ``jax.random`` key consumed by RND
        memory: 4096 bytes, font at 0x000, program at 0x200
        pc: address of the next instruction word
        display: (64, 32) framebuffer indexed ``[x, y]``, one byte per pixel
        stack: return addresses pushed by CALL
        delay_timer: decremented once per executed instruction
        sound_timer: decremented once per executed instruction
        keypad: 16 key flags set by the driver
        V: general purpose registers, VF doubles as flag register
        I: index register
        inclusive_transfers: LDV/LDRM copy V0..VX inclusive when True, V0..VX-1 otherwise
        fatal_delay: seconds to stall before an unknown instruction is raised
    """
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray
    inclusive_transfers: bool = field(pytree_node=False, default=True)
    fatal_delay: float = field(pytree_node=False, default=0.0)


def create_state(
    rom: bytes = b"",
    rng: jax.Array = None,
    inclusive_transfers: bool = True,
    fatal_delay: float = 0.0,
) -> EmulatorState:
    """Create initial state with font data and `rom` loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    return EmulatorState(
        rng=rng,
        memory=create_memory(rom),
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        display=jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.uint8),
        stack=StackState(),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        inclusive_transfers=inclusive_transfers,
        fatal_delay=fatal_delay,
    )


def _check_key(index: int) -> int:
    index = int(index)
    if not 0 <= index < NUM_KEYS:
        raise ValueError(f"Key index must be in [0, {NUM_KEYS}), got {index}")
    return index


def set_key(state: EmulatorState, index: int) -> EmulatorState:
    """Mark key `index` as pressed."""
    return state.replace(keypad=state.keypad.at[_check_key(index)].set(True))


def clear_key(state: EmulatorState, index: int) -> EmulatorState:
    """Mark key `index` as released."""
    return state.replace(keypad=state.keypad.at[_check_key(index)].set(False))


def should_play_sound(state: EmulatorState) -> bool:
    return bool(state.sound_timer > 0)


def framebuffer(state: EmulatorState) -> np.ndarray:
    """Read-only (64, 32) snapshot of the display."""
    pixels = np.array(state.display, dtype=np.uint8)
    pixels.flags.writeable = False
    return pixels


def dump_registers(state: EmulatorState) -> str:
    """Human readable table of registers, I, PC and timers."""
    header = "|".join(f"V{i:<2X}" for i in range(NUM_REGISTERS)) + "|I    |PC   |"
    values = "|".join(f"{int(v):<3d}" for v in state.V) + f"|{int(state.I):#05x}|{int(state.pc):#05x}|"
    lines = [
        "Registers:",
        "-" * len(header),
        header,
        values,
        f"Sound: {int(state.sound_timer):#04x} | Delay: {int(state.delay_timer):#04x} | Stack depth: {len(state.stack)}",
    ]
    return "\n".join(lines)
