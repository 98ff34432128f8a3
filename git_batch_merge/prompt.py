"""Interactive branch selection.

Each prompt is a small state machine: read a line, resolve it against the
numbered branch list, and either finish (``VALID``/``DONE``) or print the
problem and ask again (``INVALID``). Resolution is kept in pure functions so
it can be tested without a console.
"""

import enum
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from .colors import Colors
from .git import printable
from .ranges import RangeParseError, parse_ranges
from .tree import build_branch_tree, render_branch_tree

MULTI_SEPARATOR = ","


class SelectionRangeError(ValueError):
    """A well-formed number that does not match any listed branch."""
    pass


class PromptState(enum.Enum):
    PROMPT = "prompt"
    VALID = "valid"
    INVALID = "invalid"
    DONE = "done"


@dataclass
class Resolution:
    """Outcome of resolving one input line."""
    state: PromptState
    value: Union[str, List[str], None] = None
    message: Optional[str] = None


def _branch_at(index: int, selectable: Sequence[str]) -> str:
    if not 1 <= index <= len(selectable):
        raise SelectionRangeError(f"Index {index} is out of range")
    return selectable[index - 1]


def resolve_single(
    line: str,
    selectable: Sequence[str],
    default: Optional[str] = None,
) -> Resolution:
    """Resolve a single-branch answer."""
    if not line:
        if default is not None:
            return Resolution(PromptState.VALID, default, f"Using default: {default}")
        return Resolution(PromptState.DONE, None, "No selection made.")

    try:
        return Resolution(PromptState.VALID, _branch_at(int(line.strip()), selectable))
    except SelectionRangeError:
        return Resolution(
            PromptState.INVALID,
            message=f"Invalid number. Please enter a number between 1 and {len(selectable)}.",
        )
    except ValueError:
        return Resolution(
            PromptState.INVALID,
            message="Invalid input. Please enter a single number.",
        )


def resolve_multiple(
    line: str,
    selectable: Sequence[str],
    default: Optional[List[str]] = None,
) -> Resolution:
    """Resolve a ``1,3-5,8`` style answer.

    One index outside the list rejects the whole answer.
    """
    if not line:
        if default:
            shown = MULTI_SEPARATOR.join(default)
            return Resolution(PromptState.VALID, list(default), f"Using default: {shown}")
        return Resolution(PromptState.DONE, [], "No selection made.")

    try:
        indices = parse_ranges(line, limit=len(selectable))
        branches = [_branch_at(index, selectable) for index in indices]
    except (RangeParseError, SelectionRangeError) as e:
        return Resolution(
            PromptState.INVALID,
            message=(
                f"Invalid input: {e}. Please use numbers, commas, "
                f"and hyphens (e.g., 1,3-5)."
            ),
        )
    return Resolution(PromptState.VALID, branches)


def split_remembered(value: Optional[str]) -> List[str]:
    """Split a stored comma-joined selection into branch names."""
    if not value:
        return []
    return [name for name in value.split(MULTI_SEPARATOR) if name]


class BranchSelector:
    """Shows branch menus and reads the user's choice.

    Args:
        read_line: Called with the prompt text, returns one line without the
            newline. Raises EOFError when input is exhausted.
        write: Called with one line of output.
    """

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self.read_line = read_line
        self.write = write

    def _show_menu(self, kind: str, branches: Sequence[str]) -> List[str]:
        rendered = render_branch_tree(build_branch_tree(branches))
        self.write("")
        self.write(f"{Colors.BOLD}Please select a {kind} branch:{Colors.RESET}")
        for line in rendered.lines:
            self.write(printable(line))
        return rendered.selectable

    def _loop(self, prompt: str, resolve: Callable[[str], Resolution]) -> Resolution:
        prompt = printable(prompt)
        state = PromptState.PROMPT
        resolution = Resolution(state)
        while state in (PromptState.PROMPT, PromptState.INVALID):
            try:
                line = self.read_line(prompt)
            except EOFError:
                self.write("")
                return Resolution(PromptState.DONE, message="Input closed.")
            resolution = resolve(line)
            state = resolution.state
            if resolution.message:
                self.write(printable(resolution.message))
        return resolution

    def select_branch(
        self,
        kind: str,
        branches: Sequence[str],
        last_selected: Optional[str] = None,
    ) -> Optional[str]:
        """Prompt for one branch.

        Returns:
            The chosen branch name, or None when the answer was empty and
            no remembered branch is currently listed.
        """
        selectable = self._show_menu(kind, branches)
        default = last_selected if last_selected in selectable else None

        prompt = f"Enter number (1-{len(selectable)})"
        prompt += f" [default: {default}]: " if default else ": "

        resolution = self._loop(
            prompt, lambda line: resolve_single(line, selectable, default)
        )
        return resolution.value if resolution.state == PromptState.VALID else None

    def select_branches(
        self,
        kind: str,
        branches: Sequence[str],
        last_selected: Optional[str] = None,
    ) -> List[str]:
        """Prompt for any number of branches using ``1,3-5,8`` syntax.

        ``last_selected`` is the stored comma-joined selection. It becomes
        the default only when every branch in it is listed.

        Returns:
            The chosen branch names in the order given, or an empty list.
        """
        selectable = self._show_menu(kind, branches)
        remembered = split_remembered(last_selected)
        default = None
        if remembered and all(name in selectable for name in remembered):
            default = remembered

        prompt = f"Enter number (1-{len(selectable)}) (e.g., 1,3-5,8)"
        if default:
            prompt += f" [default: {MULTI_SEPARATOR.join(default)}]: "
        else:
            prompt += ": "

        resolution = self._loop(
            prompt, lambda line: resolve_multiple(line, selectable, default)
        )
        return resolution.value if resolution.state == PromptState.VALID else []
