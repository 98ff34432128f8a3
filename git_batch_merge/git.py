"""Git command wrapper with logging."""

import logging
import subprocess
import sys
from typing import List, Optional, Sequence

from .logging_setup import get_logger

HEAD_POINTER = "->"
# "* " current branch, "+ " checked out in another worktree
BRANCH_MARKERS = ("* ", "+ ")

# git output is kept byte-exact so odd branch names survive into argv
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def printable(text: str) -> str:
    """Copy of git output that any UTF-8 console can print."""
    return text.encode(ENCODING, ERRORS).decode(ENCODING, "replace")


class GitError(Exception):
    """Exception for git command failures."""
    pass


class CommandError(GitError):
    """A git command exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], exit_code: int, message: str = ""):
        self.argv = list(argv)
        self.exit_code = exit_code
        detail = f"\n{printable(message.strip())}" if message and message.strip() else ""
        super().__init__(
            f"Git command failed with exit code {exit_code}: "
            f"{printable(' '.join(self.argv))}{detail}"
        )


class Git:
    """Git command wrapper with logging."""

    def __init__(self, repo_path: str, logger: Optional[logging.Logger] = None):
        """Initialize Git wrapper.

        Args:
            repo_path: Path to the git repository.
            logger: Optional logger instance. If not provided, uses the tool logger.
        """
        self.repo_path = repo_path
        self.logger = logger or get_logger()

    def command(self, *args) -> List[str]:
        """Full argument vector for a git subcommand."""
        return ["git", "-C", self.repo_path] + list(args)

    def run(
        self,
        *args,
        capture_output: bool = True,
        check: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run a git command.

        Args:
            *args: Git command arguments.
            capture_output: Whether to capture stdout/stderr.
            check: Whether to raise on non-zero exit.

        Returns:
            CompletedProcess instance with command results.

        Raises:
            CommandError: If the command fails and check=True.
        """
        cmd = self.command(*args)
        self.logger.debug(f"Running: {printable(' '.join(cmd))}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=capture_output,
                encoding=ENCODING,
                errors=ERRORS,
                check=check,
            )
        except subprocess.CalledProcessError as e:
            self.logger.debug(f"stderr: {printable(e.stderr or '')}")
            raise CommandError(cmd, e.returncode, e.stderr or "")
        except OSError as e:
            raise GitError(f"Could not run git: {e}")

        if result.stdout:
            self.logger.debug(f"stdout: {printable(result.stdout.strip())}")
        return result

    def relay(self, *args) -> int:
        """Run a git command and pass its output through to the console.

        Standard output is printed first, then standard error, and only
        then is the exit code reported.

        Returns:
            The command's exit code.
        """
        result = self.run(*args, check=False)
        self._print_stream(result.stdout, sys.stdout, "Output")
        self._print_stream(result.stderr, sys.stderr, "Error")
        self.logger.info(
            f"Command '{printable(' '.join(['git'] + list(args)))}' "
            f"finished with exit code {result.returncode}"
        )
        return result.returncode

    def _print_stream(self, text: Optional[str], stream, label: str):
        if not text:
            return
        self.logger.debug(f"{label}:")
        for line in text.splitlines():
            print(printable(line), file=stream)
        stream.flush()

    def list_branches(self, remote: bool = False) -> List[str]:
        """List local (or remote-tracking) branch names in git's order.

        The ``* `` (current branch) and ``+ `` (other worktree) markers are
        removed, and symbolic entries such as ``origin/HEAD -> origin/main``
        are skipped.

        Raises:
            CommandError: If ``git branch`` fails.
        """
        args = ["branch", "-r"] if remote else ["branch"]
        result = self.run(*args)

        branches = []
        for line in result.stdout.splitlines():
            name = line.strip()
            if name.startswith(BRANCH_MARKERS):
                name = name[2:].strip()
                if name.startswith("(") and name.endswith(")"):
                    # detached HEAD, e.g. "(HEAD detached at 1a2b3c4)"
                    continue
            if not name or HEAD_POINTER in name:
                continue
            branches.append(name)
        return branches

    def checkout(self, ref: str) -> int:
        """Checkout a branch, returning git's exit code."""
        return self.relay("checkout", ref)

    def pull(self) -> int:
        """Pull into the current branch, returning git's exit code."""
        return self.relay("pull")

    def merge(self, ref: str) -> int:
        """Merge ``ref`` into the current branch, returning git's exit code."""
        return self.relay("merge", ref)
