"""Assemble a tiny program that prints 156 with the built-in font, then save the screen."""

import jax

from nibble8 import create_state, run, dump_registers, save_frame

PROGRAM = [
    0x639C,  # V3 = 156
    0xA300,  # I = 0x300
    0xF333,  # BCD of V3 at 0x300..0x302
    0xF265,  # V0..V2 = digits
    0x6A00,  # VA = x
    0x6B00,  # VB = y
    0xF029,  # I = glyph for V0
    0xDAB5,  # draw
    0x7A05,  # x += 5
    0xF129,  # I = glyph for V1
    0xDAB5,
    0x7A05,
    0xF229,  # I = glyph for V2
    0xDAB5,
    0x121C,  # loop forever
]


def assemble(words):
    return bytes(b for word in words for b in (word >> 8, word & 0xFF))


if __name__ == "__main__":
    state = create_state(assemble(PROGRAM), rng=jax.random.PRNGKey(0))
    state = run(state, len(PROGRAM), progress=True)

    print(dump_registers(state))
    save_frame(state.display, "bcd_demo.png", scale=8)
    print("Saved bcd_demo.png")
