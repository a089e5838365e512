"""Display operations."""

import jax.numpy as jnp
from nibble8.state import EmulatorState
from nibble8.decode import DecodedInstruction
from nibble8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER
from nibble8.memory import read_block

# Bit positions within a sprite row, most significant first
bit_offsets = jnp.arange(8)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    VF is cleared before the coordinates are read, so DFYN and DXFN draw at 0
    on that axis. Sprite bits are XORed into the framebuffer, wrapping at the
    screen edges. VF then holds the collision of the last bit drawn (row N-1,
    least significant bit), not an OR over the whole sprite. N = 0 only clears VF.
    """
    V = state.V.at[FLAG_REGISTER].set(0)
    height = instruction.n
    if height == 0:
        return state.replace(V=V)

    sprite_rows = read_block(state.memory, state.I, height).astype(jnp.int32)
    sprite = (sprite_rows[:, None] >> (7 - bit_offsets[None, :])) & 1

    origin_x = int(V[instruction.x])
    origin_y = int(V[instruction.y])
    xx = jnp.broadcast_to((origin_x + bit_offsets[None, :]) % SCREEN_WIDTH, sprite.shape)
    yy = jnp.broadcast_to((origin_y + jnp.arange(height)[:, None]) % SCREEN_HEIGHT, sprite.shape)

    before = state.display[xx, yy].astype(jnp.int32)
    collision = int(sprite[-1, -1] & before[-1, -1])

    return state.replace(
        display=state.display.at[xx, yy].set((before ^ sprite).astype(jnp.uint8)),
        V=V.at[FLAG_REGISTER].set(collision),
    )
