"""Command line interface for git-batch-merge."""

import argparse
import sys

from . import __version__
from .colors import Colors
from .merge import BatchMergeRunner


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="git-batch-merge",
        description="Git Batch Merge - pull several branches and merge them into one target branch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pick a target, then any number of sources (e.g. 1,3-5,8)
  git-batch-merge

  # Merge exactly one source branch
  git-batch-merge --single

  # Show the git commands without running them
  git-batch-merge --dry-run

Press Enter at a prompt to reuse the branch(es) picked last time.

Exit Codes:
  0 - All source branches merged
  1 - Aborted, or a git step failed
  2 - No branches found (not a git repository?)
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--repo", "-r",
        metavar="PATH",
        default=".",
        help="Path to git repository (default: current directory)"
    )
    parser.add_argument(
        "--prefs", "-p",
        metavar="FILE",
        help="Preferences file (default: ~/.gitbatch/config.properties)"
    )
    parser.add_argument(
        "--remote",
        metavar="NAME",
        default="origin",
        help="Remote prefix stripped from remote source branches (default: origin)"
    )
    parser.add_argument(
        "--single", "-1",
        action="store_true",
        help="Select a single source branch instead of a list"
    )
    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Show the git commands without running them"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (default: sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    Colors.init()

    runner = BatchMergeRunner(
        repo_path=args.repo,
        prefs_path=args.prefs,
        single_source=args.single,
        remote=args.remote,
        dry_run=args.dry_run,
        verbose=args.verbose,
    )

    return runner.run()


if __name__ == "__main__":
    sys.exit(main())
