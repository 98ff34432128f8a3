"""Tree view of slash-delimited branch names.

``feature/login`` and ``feature/signup`` share a ``feature/`` folder in the
menu; every real branch gets a number that the prompt maps back to the
branch name.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

SEPARATOR = "/"

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


@dataclass
class BranchNode:
    """One path segment of a branch name.

    ``children`` keeps insertion order. ``full_name`` is set when a branch
    ends exactly at this node.
    """
    children: Dict[str, "BranchNode"] = field(default_factory=dict)
    full_name: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return self.full_name is not None and not self.children

    @property
    def is_folder(self) -> bool:
        return bool(self.children)

    def child(self, segment: str) -> "BranchNode":
        """Return the child for ``segment``, creating it if needed."""
        node = self.children.get(segment)
        if node is None:
            node = self.children[segment] = BranchNode()
        return node


@dataclass
class RenderedTree:
    """Display lines plus the branch names in the order they were numbered.

    ``selectable[n - 1]`` is the branch shown as ``[n]``.
    """
    lines: List[str]
    selectable: List[str]

    def __len__(self) -> int:
        return len(self.selectable)


def build_branch_tree(branches: Iterable[str]) -> BranchNode:
    """Build a tree keyed by the ``/``-separated segments of each branch."""
    root = BranchNode()
    for branch in branches:
        node = root
        for segment in branch.split(SEPARATOR):
            node = node.child(segment)
        node.full_name = branch
    return root


def render_branch_tree(root: BranchNode) -> RenderedTree:
    """Walk the tree depth first, drawing it and numbering every branch.

    Children are visited in insertion order, so the same branch list always
    yields the same numbers. A branch that is also the prefix of other
    branches (``release`` next to ``release/v1``) is drawn as a numbered
    folder with its children below it.
    """
    rendered = RenderedTree(lines=[], selectable=[])
    _render(root, "", rendered)
    return rendered


def _render(node: BranchNode, prefix: str, out: RenderedTree):
    segments = list(node.children)
    for position, segment in enumerate(segments):
        child = node.children[segment]
        is_last = position == len(segments) - 1
        connector = LAST_BRANCH if is_last else BRANCH

        label = segment
        if child.full_name is not None:
            out.selectable.append(child.full_name)
            label = f"[{len(out.selectable)}] {segment}"

        if child.is_folder:
            out.lines.append(f"{prefix}{connector}{label}{SEPARATOR}")
            _render(child, prefix + (SPACE if is_last else PIPE), out)
        else:
            out.lines.append(f"{prefix}{connector}{label}")
