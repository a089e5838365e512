"""Turn the framebuffer into RGB images for the window and for snapshots."""

import numpy as np
from typing import Tuple
from PIL import Image

Color = Tuple[int, int, int]

# (on, off) pairs
COLOR_SCHEMES = {
    "classic": ((255, 255, 255), (0, 0, 0)),
    "green": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
}


def framebuffer_to_rgb(
    display,
    scale: int = 8,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Map a (64, 32) framebuffer indexed [x, y] to a (32*scale, 64*scale, 3) image.

    Any nonzero pixel is drawn in `on_color`.
    """
    palette = np.array([off_color, on_color], dtype=np.uint8)
    lit = (np.asarray(display) != 0).astype(np.intp)
    rgb_frame = palette[lit.T]
    if scale > 1:
        rgb_frame = rgb_frame.repeat(scale, axis=0).repeat(scale, axis=1)
    return rgb_frame


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Return the (on_color, off_color) pair registered under `scheme`."""
    try:
        return COLOR_SCHEMES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES)}"
        ) from None


def save_frame(display, filename: str, scale: int = 8, color_scheme: str = "classic") -> None:
    """Write the framebuffer to an image file (format from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    Image.fromarray(framebuffer_to_rgb(display, scale, on_color, off_color)).save(filename)
