"""pygame window driver: paints the framebuffer and feeds the keypad."""

import pygame

from nibble8.state import EmulatorState, set_key, clear_key, should_play_sound, framebuffer
from nibble8.emulator import step
from nibble8.logging import get_logger
from nibble8.rendering import framebuffer_to_rgb, create_color_scheme
from nibble8.constants import SCREEN_WIDTH, SCREEN_HEIGHT

logger = get_logger("nibble8.driver")

# Physical key -> keypad index
KEY_MAP = {
    pygame.K_0: 0x0, pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3,
    pygame.K_4: 0x4, pygame.K_5: 0x5, pygame.K_6: 0x6, pygame.K_7: 0x7,
    pygame.K_8: 0x8, pygame.K_9: 0x9,
    pygame.K_a: 0xA, pygame.K_b: 0xB,
    pygame.K_UP: 0xC, pygame.K_DOWN: 0xD,
    pygame.K_e: 0xE, pygame.K_f: 0xF,
}


def poll_keypad(state: EmulatorState, pressed) -> EmulatorState:
    """Copy the pressed state of every bound key into the keypad."""
    for key, index in KEY_MAP.items():
        state = set_key(state, index) if pressed[key] else clear_key(state, index)
    return state


def run_window(
    state: EmulatorState,
    scale: int = 10,
    fps: int = 60,
    cycles_per_frame: int = 1,
    color_scheme: str = "classic",
) -> EmulatorState:
    """Main window loop; returns the state when the window is closed."""
    on_color, off_color = create_color_scheme(color_scheme)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
    pygame.display.set_caption("nibble8")
    clock = pygame.time.Clock()

    running = True
    sounding = False
    try:
        while running:
            clock.tick(fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False

            for _ in range(cycles_per_frame):
                state = poll_keypad(state, pygame.key.get_pressed())
                state = step(state)

            if should_play_sound(state) != sounding:
                sounding = not sounding
                logger.debug(f"Sound {'on' if sounding else 'off'}")

            rgb = framebuffer_to_rgb(framebuffer(state), scale, on_color, off_color)
            # surfarray expects (width, height, 3)
            pygame.surfarray.blit_array(screen, rgb.swapaxes(0, 1))
            pygame.display.flip()
    finally:
        pygame.quit()

    return state
