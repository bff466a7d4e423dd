"""Human-readable output for dirstamp runs.

Formats one line per changed directory, inline error lines and the
closing summary.
"""

import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

from .config import ReconcileMode
from .core.reconciler import Action, Decision


DATE_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
BAD_TIME = "<bad time>"
SECONDS_PER_DAY = 86_400.0

NOTHING_TO_DO = "No folder timestamps needed updating."
DRY_RUN_NOTE = "Note: this was a dry run. Use -C to confirm and apply changes."


def format_timestamp(timestamp: Optional[float]) -> str:
    """Format POSIX seconds as a UTC date, or ``<bad time>``."""
    if timestamp is None:
        return BAD_TIME
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(DATE_FORMAT)
    except (OverflowError, OSError, ValueError):
        return BAD_TIME


def format_delta_days(delta: float) -> str:
    """Format a delta in seconds as signed days, e.g. ``-49.0 days``."""
    return f"{delta / SECONDS_PER_DAY:+.1f} days"


def format_decision(decision: Decision, show_dates: bool = False) -> Optional[str]:
    """Format the stdout line for a decision.

    Returns:
        The line, or None for skipped directories
    """
    if decision.action is Action.UPDATED:
        line = f'updated "{decision.path}"'
    elif decision.action is Action.WOULD_UPDATE:
        line = f'would update "{decision.path}"'
    else:
        return None

    if show_dates:
        line += (f" (from {format_timestamp(decision.previous_mtime)}"
                 f" to {format_timestamp(decision.target_mtime)}"
                 f", {format_delta_days(decision.delta)})")
    return line


def format_error(decision: Decision) -> Optional[str]:
    """Format the stderr line for a failed decision, or None."""
    if not decision.failed:
        return None
    line = f'skipped ({decision.error}): "{decision.path}"'
    if decision.exception is not None:
        line += f" ({decision.exception})"
    return line


class Reporter:
    """Prints decisions as they arrive and a summary at the end."""

    def __init__(self,
                 mode: ReconcileMode = ReconcileMode.DRY_RUN,
                 show_dates: bool = False,
                 out: Optional[TextIO] = None,
                 err: Optional[TextIO] = None):
        self.mode = mode
        self.show_dates = show_dates
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    def emit(self, decision: Decision) -> None:
        error_line = format_error(decision)
        if error_line is not None:
            print(error_line, file=self.err)

        line = format_decision(decision, self.show_dates)
        if line is not None:
            print(line, file=self.out)

    def finish(self, changed: int) -> None:
        """Print the closing summary.

        Args:
            changed: Number of directories updated or due for update
        """
        if changed == 0:
            print(NOTHING_TO_DO, file=self.out)
        elif self.mode is ReconcileMode.DRY_RUN:
            print(f"\n{DRY_RUN_NOTE}", file=self.out)
