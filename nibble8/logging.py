"""Console logging utilities for the interpreter and its drivers.

Loggers are shared per name so that the command line can change the level of
every component at once with :func:`set_log_level`.
"""

import time
import sys
from typing import Dict

LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConsoleLogger:
    """Flexible console logger with level filtering, colors and timestamps."""

    def __init__(
        self,
        name: str = "nibble8",
        log_level: str = "WARNING",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in LEVELS + ["RESET"]}
        )

        self.level_order = {level: i for i, level in enumerate(LEVELS)}

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def set_level(self, log_level: str):
        log_level = log_level.upper()
        if log_level not in self.level_order:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {LEVELS}")
        self.log_level = log_level

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}
_default_level = "WARNING"


def get_logger(name: str) -> ConsoleLogger:
    """Return the shared logger registered under `name`, creating it if needed."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name, log_level=_default_level)
    return _loggers[name]


def set_log_level(log_level: str):
    """Set the level of every logger, including ones created later."""
    global _default_level
    if log_level.upper() not in LEVELS:
        raise ValueError(f"Unknown log level '{log_level}'. Available: {LEVELS}")
    for logger in _loggers.values():
        logger.set_level(log_level)
    _default_level = log_level.upper()
