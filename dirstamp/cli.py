"""Command-line interface for dirstamp.

Usage:
    dirstamp [PATH] [OPTIONS]

    dirstamp photos           # Show what would change (dry run)
    dirstamp photos -C        # Apply changes
    dirstamp photos -C -D     # Apply and show from/to dates
"""

import argparse
import sys
from typing import List, Optional

from . import __version__, __git_hash__, __build_date__
from .adapters.filesystem import FileSystemAdapter
from .config import StampConfig, ReconcileMode, DEFAULT_TOLERANCE_SECONDS
from .planning import ExecutionPlan, CapabilityMismatchError, FatalPreconditionError
from .report import Reporter


EXIT_OK = 0
EXIT_ABORTED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def format_version(version: str,
                   git_hash: Optional[str] = None,
                   build_date: Optional[str] = None) -> str:
    """Build the ``--version`` line.

    Build metadata is only shown when a non-empty git hash is known.
    """
    if git_hash:
        if build_date:
            return f"dirstamp {version} ({git_hash} {build_date})"
        return f"dirstamp {version} ({git_hash})"
    return f"dirstamp {version}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirstamp",
        description="Set each directory's mtime to match its newest immediate child. "
                    "Priority: newest file; if no files, newest immediate subdirectory. "
                    "Empty directories are left unchanged.",
    )
    parser.add_argument("path", nargs="?", default=".", metavar="PATH",
                        help="Root directory (default: current directory)")
    parser.add_argument("-C", "--confirm", action="store_true",
                        help="Apply changes (default is dry run)")
    parser.add_argument("-D", "--show-dates", action="store_true",
                        help="Show from -> to timestamps and +/-days for each change")
    parser.add_argument("-V", "--version", action="version",
                        version=format_version(__version__, __git_hash__, __build_date__),
                        help="Show version information")
    parser.add_argument("--follow-symlinks", action="store_true",
                        help="Let symbolic links count towards their parent's newest child "
                             "(linked directories are always walked)")
    parser.add_argument("--tolerance", type=float, default=DEFAULT_TOLERANCE_SECONDS,
                        metavar="SECONDS",
                        help="Ignore differences up to this many seconds (default: %(default)s)")

    errors = parser.add_mutually_exclusive_group()
    errors.add_argument("--strict", action="store_true",
                        help="Abort on the first error")
    errors.add_argument("--max-errors", type=int, default=None, metavar="N",
                        help="Abort once more than N errors occurred")

    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print a warning for every error, including unreadable files")
    return parser


def config_from_args(args: argparse.Namespace) -> StampConfig:
    return StampConfig(
        root=args.path,
        mode=ReconcileMode.CONFIRM if args.confirm else ReconcileMode.DRY_RUN,
        show_dates=args.show_dates,
        verbose=args.verbose,
        tolerance_seconds=args.tolerance,
        follow_symlinks=args.follow_symlinks,
        strict=args.strict,
        max_errors=args.max_errors,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run dirstamp.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    adapter = FileSystemAdapter()

    try:
        plan = ExecutionPlan(config, adapter)
    except (FatalPreconditionError, CapabilityMismatchError) as e:
        print(e, file=sys.stderr)
        return EXIT_USAGE

    reporter = Reporter(mode=config.mode, show_dates=config.show_dates)
    try:
        for decision in plan.execute():
            reporter.emit(decision)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except (OSError, RuntimeError) as e:
        print(f"Aborted: {e}", file=sys.stderr)
        return EXIT_ABORTED

    reporter.finish(plan.changed)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
