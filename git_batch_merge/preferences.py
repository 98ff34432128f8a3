"""Remembered selections, kept between runs in a properties file."""

import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from .logging_setup import get_logger

DEFAULT_PATH = os.path.join("~", ".gitbatch", "config.properties")
HEADER = "GitBatch Preferences"

LOCAL_KEY = "lastSelectedLocalBranch"
MERGE_KEY = "lastSelectedMergeBranch"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_UNICODE_ESCAPE = re.compile(r"u([0-9a-fA-F]{4})")


def default_path() -> str:
    """Per-user preferences file, ``~/.gitbatch/config.properties``."""
    return os.path.expanduser(DEFAULT_PATH)


def _unescape(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 == len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        match = _UNICODE_ESCAPE.match(text, i + 1)
        if match:
            out.append(chr(int(match.group(1), 16)))
            i = match.end()
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _escape(text: str) -> str:
    out = []
    for position, ch in enumerate(text):
        if ch == "\\" or ch in "=:#!":
            out.append("\\" + ch)
        elif ch == " " and position == 0:
            out.append("\\ ")
        elif ch in "\t\n\r\f":
            out.append("\\" + {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}[ch])
        else:
            out.append(ch)
    return "".join(out)


def _split_entry(line: str):
    """Split a logical properties line into key and raw value."""
    index = 0
    while index < len(line):
        ch = line[index]
        if ch == "\\":
            index += 2
            continue
        if ch in "=:" or ch.isspace():
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip()
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip()
    return key, rest


def parse_properties(text: str) -> Dict[str, str]:
    """Parse the subset of the Java properties format the tool writes.

    Handles comments (``#``/``!``), ``=``, ``:`` or whitespace separators,
    backslash line continuations and ``\\uXXXX`` escapes.
    """
    entries = {}
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        line = pending + line
        pending = ""
        key, value = _split_entry(line)
        entries[_unescape(key)] = _unescape(value)
    if pending:
        key, value = _split_entry(pending)
        entries[_unescape(key)] = _unescape(value)
    return entries


def format_properties(entries: Dict[str, str], comment: Optional[str] = None) -> str:
    """Render entries as properties text with a header and timestamp comment."""
    lines = []
    if comment:
        lines.append(f"#{comment}")
    lines.append(f"#{datetime.now().astimezone().strftime('%a %b %d %H:%M:%S %Z %Y')}")
    for key, value in entries.items():
        lines.append(f"{_escape(key)}={_escape(value)}")
    return "\n".join(lines) + "\n"


@dataclass
class Preferences:
    """Last target and source selections.

    ``last_merge_branch`` holds the sources joined with commas.
    """
    last_local_branch: Optional[str] = None
    last_merge_branch: Optional[str] = None

    @classmethod
    def load(cls, path: str) -> "Preferences":
        """Load preferences, falling back to empty ones on any read problem.

        A missing file is normal on the first run and is not reported.
        """
        logger = get_logger()
        if not os.path.exists(path):
            logger.debug(f"No preferences at {path}")
            return cls()

        try:
            with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
                entries = parse_properties(f.read())
        except OSError as e:
            logger.warning(f"Warning: Could not load preferences. {e}")
            return cls()

        logger.info("Preferences loaded.")
        return cls(
            last_local_branch=entries.get(LOCAL_KEY) or None,
            last_merge_branch=entries.get(MERGE_KEY) or None,
        )

    def save(self, path: str) -> bool:
        """Write preferences, creating the parent directory if needed.

        Returns:
            True when the file was written. Failures are logged, not raised.
        """
        entries = {}
        if self.last_local_branch is not None:
            entries[LOCAL_KEY] = self.last_local_branch
        if self.last_merge_branch is not None:
            entries[MERGE_KEY] = self.last_merge_branch

        try:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(path, "w", encoding="utf-8", errors="surrogateescape") as f:
                f.write(format_properties(entries, HEADER))
        except OSError as e:
            get_logger().warning(f"Warning: Could not save preferences. {e}")
            return False

        get_logger().debug(f"Preferences saved to: {path}")
        return True

    def remember(self, session) -> None:
        """Take the target and sources of a finished session."""
        self.last_local_branch = session.target
        self.last_merge_branch = ",".join(session.sources)
