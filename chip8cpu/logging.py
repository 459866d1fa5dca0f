"""Console logging utilities for the CHIP-8 core.

Messages are printed with an elapsed-time stamp, a level tag and the logger
name. Colors are only used when stdout is a terminal.
"""

import sys
import time


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConsoleLogger:
    """Console logger with level filtering and optional colors."""

    def __init__(
        self,
        name: str = "chip8cpu",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = self._validate_level(log_level)
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
                "RESET": "\033[0m",
            }
            if self.use_colors
            else {k: "" for k in LEVELS + ("RESET",)}
        )

        self.level_order = {level: rank for rank, level in enumerate(LEVELS)}

    @staticmethod
    def _validate_level(level: str) -> str:
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{level}'. Available: {list(LEVELS)}")
        return level

    def set_level(self, level: str):
        """Change the minimum level that gets printed."""
        self.log_level = self._validate_level(level)

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            level_str = f"{color}{level_str}{self.colors['RESET']}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            print(self._format_message(level.upper(), message), flush=True)

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


# Shared by the instruction executors.
logger = ConsoleLogger()


def set_log_level(level: str):
    """Set the level of the package-wide logger."""
    logger.set_level(level)
