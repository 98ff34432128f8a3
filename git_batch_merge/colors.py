"""ANSI styling for menus, banners and log output."""

import sys


class Colors:
    """ANSI escape codes used by the console output.

    Codes are class attributes so they can be dropped into f-strings.
    ``Colors.init()`` is called once by the CLI and blanks every code when
    stdout is not a terminal, so piped output stays plain text.
    """

    _CODE_ATTRS = (
        "RESET",
        "BOLD",
        "DIM",
        "RED",
        "GREEN",
        "YELLOW",
        "MAGENTA",
        "CYAN",
        "WHITE",
        "BG_RED",
    )

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BG_RED = "\033[41m"

    @classmethod
    def disable(cls):
        """Blank every escape code."""
        for attr in cls._CODE_ATTRS:
            setattr(cls, attr, "")

    @classmethod
    def init(cls):
        """Turn styling off when stdout is not a TTY."""
        if not sys.stdout.isatty():
            cls.disable()
