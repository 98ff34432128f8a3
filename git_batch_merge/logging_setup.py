"""Logging configuration for git-batch-merge."""

import logging
import sys

from .colors import Colors

LOGGER_NAME = "git-batch-merge"


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name, and the whole message from WARNING up."""

    def level_color(self, levelno: int) -> str:
        # Looked up per record so Colors.init() after import still applies.
        if levelno >= logging.CRITICAL:
            return Colors.BG_RED + Colors.WHITE
        if levelno >= logging.ERROR:
            return Colors.RED
        if levelno >= logging.WARNING:
            return Colors.YELLOW
        if levelno >= logging.INFO:
            return Colors.CYAN
        return Colors.DIM

    def format(self, record):
        color = self.level_color(record.levelno)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        if record.levelno >= logging.WARNING:
            record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


def get_logger() -> logging.Logger:
    """Return the tool's logger without touching its handlers."""
    return logging.getLogger(LOGGER_NAME)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the tool's logger.

    Args:
        verbose: If True, emit DEBUG records (including every git command
                 that runs) with a level prefix. Otherwise INFO and above,
                 message only.

    Returns:
        The configured logger.
    """
    logger = get_logger()
    logger.handlers.clear()

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    # stdout keeps log lines in order with the menus printed by print()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    fmt = "%(levelname)s %(message)s" if verbose else "%(message)s"
    handler.setFormatter(ColoredFormatter(fmt))

    logger.addHandler(handler)
    return logger
