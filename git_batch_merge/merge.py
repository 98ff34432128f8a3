"""Batch merge orchestration."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .colors import Colors
from .git import CommandError, Git, GitError, printable
from .logging_setup import setup_logging
from .preferences import Preferences, default_path
from .prompt import BranchSelector

EXIT_OK = 0
EXIT_ABORTED = 1
EXIT_NO_REPO = 2


@dataclass
class MergeSession:
    """Choices made during one run."""
    target: str
    sources: List[str] = field(default_factory=list)


@dataclass
class MergeStep:
    """One git invocation of the per-source sequence."""
    description: str
    args: List[str]
    failure: str


def local_name(branch: str, remote: str = "origin") -> str:
    """Name to checkout for ``branch``: ``origin/feature`` -> ``feature``."""
    prefix = f"{remote}/"
    if remote and branch.startswith(prefix):
        return branch[len(prefix):]
    return branch


def plan_steps(source: str, target: str) -> List[MergeStep]:
    """The four git steps that bring ``source`` into ``target``."""
    return [
        MergeStep(
            f"Checking out source branch: {source}",
            ["checkout", source],
            f"Failed to checkout branch {source}.",
        ),
        MergeStep(
            f"Pulling latest changes for {source}",
            ["pull"],
            f"Failed to pull latest changes for {source}.",
        ),
        MergeStep(
            f"Checking out target branch: {target}",
            ["checkout", target],
            f"Failed to checkout branch {target}.",
        ),
        MergeStep(
            f"Merging branch {source} into {target}",
            ["merge", source],
            f"Merge conflicts occurred while merging {source} into {target}. "
            f"Please resolve them manually.",
        ),
    ]


class BatchMergeRunner:
    """Selects a target and sources, then merges every source into the target.

    The run stops at the first git step that exits non-zero. Merges that
    already went through stay in place and preferences are only written
    after every source merged cleanly.
    """

    def __init__(
        self,
        repo_path: str = ".",
        prefs_path: Optional[str] = None,
        single_source: bool = False,
        remote: str = "origin",
        dry_run: bool = False,
        verbose: bool = False,
        selector: Optional[BranchSelector] = None,
    ):
        """Initialize the runner.

        Args:
            repo_path: Path to the git repository.
            prefs_path: Preferences file (default: ~/.gitbatch/config.properties).
            single_source: Ask for exactly one source branch.
            remote: Remote whose prefix is stripped to get a local branch name.
            dry_run: If True, print the git commands instead of running them.
            verbose: If True, enable verbose logging.
            selector: Prompt implementation, mainly for tests.
        """
        self.logger = setup_logging(verbose)
        self.verbose = verbose

        self.repo_path = os.path.abspath(repo_path)
        self.git = Git(self.repo_path, self.logger)
        self.prefs_path = prefs_path or default_path()
        self.single_source = single_source
        self.remote = remote
        self.dry_run = dry_run
        self.selector = selector or BranchSelector()

        self.preferences = Preferences()
        self.session: Optional[MergeSession] = None
        self.exit_code = EXIT_OK

    def print_banner(self):
        """Print the tool banner."""
        print(f"\n{Colors.BOLD}{Colors.CYAN}╔══════════════════════════════════════════════════════════════╗{Colors.RESET}")
        print(f"{Colors.BOLD}{Colors.CYAN}║                      Git Batch Merge                         ║{Colors.RESET}")
        print(f"{Colors.BOLD}{Colors.CYAN}╚══════════════════════════════════════════════════════════════╝{Colors.RESET}", flush=True)

    def select(self) -> Optional[MergeSession]:
        """Ask for the target and source branches.

        Returns:
            The session, or None when the user picked nothing. Sets
            ``self.exit_code`` to explain why.
        """
        local_branches = self.git.list_branches(remote=False)
        if not local_branches:
            self.logger.error("No local branches found. Make sure you are in a git repository.")
            self.exit_code = EXIT_NO_REPO
            return None

        target = self.selector.select_branch(
            "local", local_branches, self.preferences.last_local_branch
        )
        if not target:
            self.logger.warning("No local branch selected. Aborting.")
            self.exit_code = EXIT_ABORTED
            return None

        candidates = [b for b in local_branches if b != target]
        candidates.extend(self.git.list_branches(remote=True))
        if not candidates:
            self.logger.warning("No other branches available to merge.")
            self.exit_code = EXIT_ABORTED
            return None

        kind = "source (to merge from)"
        remembered = self.preferences.last_merge_branch
        if self.single_source:
            source = self.selector.select_branch(kind, candidates, remembered)
            sources = [source] if source else []
        else:
            sources = self.selector.select_branches(kind, candidates, remembered)

        if not sources:
            self.logger.warning("No source branches selected. Aborting.")
            self.exit_code = EXIT_ABORTED
            return None

        return MergeSession(target=target, sources=sources)

    def run_step(self, step: MergeStep):
        """Run one git step, raising CommandError if it fails."""
        print(f"\n{Colors.BOLD}--- {printable(step.description)} ---{Colors.RESET}", flush=True)
        exit_code = self.git.relay(*step.args)
        if exit_code != 0:
            raise CommandError(
                self.git.command(*step.args), exit_code, f"{step.failure} Aborting."
            )

    def merge_source(self, source: str, target: str):
        """Checkout and pull ``source``, then merge it into ``target``."""
        print(f"\n{Colors.BOLD}{Colors.MAGENTA}>>> Processing source branch: {printable(source)} <<<{Colors.RESET}")
        for step in plan_steps(local_name(source, self.remote), target):
            self.run_step(step)

    def print_plan(self, session: MergeSession):
        """Print the git commands a real run would execute."""
        print(f"\n{Colors.BOLD}Planned commands:{Colors.RESET}")
        for source in session.sources:
            print(f"  {Colors.MAGENTA}{printable(source)}{Colors.RESET}")
            for step in plan_steps(local_name(source, self.remote), session.target):
                print(f"    git {printable(' '.join(step.args))}")
        print(flush=True)

    def run(self) -> int:
        """Main entry point.

        Returns:
            Exit code: 0 when every source merged, 1 when aborted or a git
            step failed, 2 when there is no repository to work on.
        """
        self.print_banner()
        self.preferences = Preferences.load(self.prefs_path)
        self.exit_code = EXIT_OK

        try:
            session = self.select()
            if session is None:
                return self.exit_code
            self.session = session

            if self.dry_run:
                self.print_plan(session)
                print(f"{Colors.YELLOW}Dry run mode - no git commands were run{Colors.RESET}")
                return EXIT_OK

            for source in session.sources:
                self.merge_source(source, session.target)

        except KeyboardInterrupt:
            print()
            self.logger.warning("Interrupted by user")
            return EXIT_ABORTED

        except GitError as e:
            self.logger.error(str(e))
            return EXIT_ABORTED

        print(f"\n{Colors.BOLD}{Colors.GREEN}Batch operation completed.{Colors.RESET}")
        self.preferences.remember(session)
        self.preferences.save(self.prefs_path)
        return EXIT_OK
