"""Command line entry point."""

import sys

import hydra
import jax
from omegaconf import DictConfig

from nibble8.state import EmulatorState, create_state, dump_registers
from nibble8.emulator import load_rom, run
from nibble8.errors import Nibble8Error
from nibble8.logging import get_logger, set_log_level
from nibble8.rendering import save_frame

logger = get_logger("nibble8.cli")


def build_state(cfg: DictConfig) -> EmulatorState:
    state = create_state(
        rng=jax.random.PRNGKey(cfg.seed),
        inclusive_transfers=cfg.inclusive_transfers,
        fatal_delay=cfg.fatal_delay,
    )
    return load_rom(state, cfg.rom)


def run_headless(cfg: DictConfig) -> EmulatorState:
    """Run `cfg.cycles` instructions without a window."""
    state = run(build_state(cfg), cfg.cycles, progress=cfg.progress)
    if cfg.snapshot:
        save_frame(state.display, cfg.snapshot, cfg.display.scale, cfg.display.color_scheme)
        logger.info(f"Framebuffer saved to {cfg.snapshot}")
    if cfg.dump:
        print(dump_registers(state))
    return state


def run_windowed(cfg: DictConfig) -> EmulatorState:
    # pygame is only imported when a window is requested
    from nibble8.driver import run_window

    return run_window(
        build_state(cfg),
        scale=cfg.display.scale,
        fps=cfg.display.fps,
        cycles_per_frame=cfg.display.cycles_per_frame,
        color_scheme=cfg.display.color_scheme,
    )


MODES = {"headless": run_headless, "window": run_windowed}


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    set_log_level(cfg.log_level)

    if cfg.mode not in MODES:
        logger.error(f"Unknown mode '{cfg.mode}'. Available: {list(MODES.keys())}")
        sys.exit(2)

    try:
        MODES[cfg.mode](cfg)
    except Nibble8Error as e:
        logger.critical(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
