"""Timestamp reconciliation for dirstamp.

Given a directory, the mtimes of its immediate files and the resolved
mtimes of its immediate subdirectories, the reconciler decides whether
the directory's own mtime should change and, in confirm mode, applies it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

from ..config import ReconcileMode, DEFAULT_TOLERANCE_SECONDS
from ..error_policies import ErrorPolicy, ContinueOnErrorsPolicy
from .adapter import MetadataAdapter
from .node import PathLike


# Content scan results
#
# Scanning a directory's children has three outcomes. Modelling them as
# separate types keeps "no content" from being confused with a timestamp.

@dataclass(frozen=True)
class NoContent:
    """No file and no subdirectory with a usable timestamp."""
    source = None


@dataclass(frozen=True)
class NewestFile:
    """Newest mtime among the immediate files."""
    timestamp: float
    source = "file"


@dataclass(frozen=True)
class NewestSubdir:
    """Newest resolved mtime among the immediate subdirectories."""
    timestamp: float
    source = "subdirectory"


ContentScan = Union[NoContent, NewestFile, NewestSubdir]


def scan_content(file_mtimes: Sequence[float],
                 subdir_mtimes: Sequence[float]) -> ContentScan:
    """Pick the timestamp a directory should carry.

    Files always win when any file exists, even if a subdirectory is
    newer. Subdirectories are only consulted when there are no files.
    """
    if file_mtimes:
        return NewestFile(max(file_mtimes))
    if subdir_mtimes:
        return NewestSubdir(max(subdir_mtimes))
    return NoContent()


class Action(Enum):
    """Outcome of reconciling one directory."""
    SKIP = "skip"
    WOULD_UPDATE = "would_update"
    UPDATED = "updated"


@dataclass(frozen=True)
class Decision:
    """Output record for one directory.

    ``delta`` is ``target_mtime - previous_mtime`` in seconds and is only
    set when both are known. ``error`` carries a short reason (such as
    "set mtime failed") when the directory was skipped because something
    failed, and ``exception`` the underlying error.
    """

    path: PathLike
    previous_mtime: Optional[float]
    target_mtime: Optional[float]
    action: Action
    delta: Optional[float] = None
    source: Optional[str] = None
    error: Optional[str] = None
    exception: Optional[BaseException] = field(default=None, compare=False)

    @property
    def changed(self) -> bool:
        """True for WOULD_UPDATE and UPDATED."""
        return self.action is not Action.SKIP

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def resolved_mtime(self) -> Optional[float]:
        """The mtime a parent should see for this directory.

        Only an applied update moves it. A dry run leaves every directory
        on disk as it was, so parents see the current value.
        """
        if self.action is Action.UPDATED:
            return self.target_mtime
        return self.previous_mtime

    @classmethod
    def failure(cls, path: PathLike, previous_mtime: Optional[float],
                error: str, exception: Optional[BaseException] = None) -> 'Decision':
        """Skip decision carrying an error note."""
        return cls(
            path=path,
            previous_mtime=previous_mtime,
            target_mtime=previous_mtime,
            action=Action.SKIP,
            error=error,
            exception=exception,
        )


class TimestampReconciler:
    """Decides, and in confirm mode applies, a directory's new mtime.

    Example:
        reconciler = TimestampReconciler(FileSystemAdapter(), ReconcileMode.CONFIRM)
        decision = reconciler.reconcile(path, current, [f1, f2], [])
    """

    def __init__(self,
                 adapter: MetadataAdapter,
                 mode: ReconcileMode = ReconcileMode.DRY_RUN,
                 tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS,
                 policy: Optional[ErrorPolicy] = None):
        """
        Args:
            adapter: Provides set_mtime for confirm mode
            mode: Default mode for reconcile()
            tolerance_seconds: Differences up to and including this are ignored
            policy: Handles write failures (defaults to ContinueOnErrorsPolicy)
        """
        self.adapter = adapter
        self.mode = mode
        self.tolerance_seconds = tolerance_seconds
        self.policy = policy if policy is not None else ContinueOnErrorsPolicy(verbose=False)

    def needs_update(self, delta: float) -> bool:
        """True when ``delta`` is outside the tolerance window."""
        return abs(delta) > self.tolerance_seconds

    def reconcile(self,
                  directory_path: PathLike,
                  current_mtime: float,
                  file_mtimes: Sequence[float],
                  subdir_resolved_mtimes: Sequence[float],
                  mode: Optional[ReconcileMode] = None) -> Decision:
        """Reconcile one directory.

        Args:
            directory_path: Directory being reconciled
            current_mtime: Its mtime as read from the OS
            file_mtimes: mtimes of its immediate files
            subdir_resolved_mtimes: resolved mtimes of its immediate subdirectories
            mode: Overrides the reconciler's mode for this call

        Returns:
            Decision for the directory
        """
        mode = mode or self.mode
        scan = scan_content(file_mtimes, subdir_resolved_mtimes)

        if isinstance(scan, NoContent):
            return Decision(
                path=directory_path,
                previous_mtime=current_mtime,
                target_mtime=current_mtime,
                action=Action.SKIP,
            )

        target = scan.timestamp
        delta = target - current_mtime

        if not self.needs_update(delta):
            return Decision(
                path=directory_path,
                previous_mtime=current_mtime,
                target_mtime=target,
                action=Action.SKIP,
                delta=delta,
                source=scan.source,
            )

        if mode is ReconcileMode.DRY_RUN:
            return Decision(
                path=directory_path,
                previous_mtime=current_mtime,
                target_mtime=target,
                action=Action.WOULD_UPDATE,
                delta=delta,
                source=scan.source,
            )

        try:
            self.adapter.set_mtime(directory_path, target)
        except OSError as e:
            self.policy.handle(e, 'set_mtime', directory_path)
            return Decision(
                path=directory_path,
                previous_mtime=current_mtime,
                target_mtime=target,
                action=Action.SKIP,
                delta=delta,
                source=scan.source,
                error="set mtime failed",
                exception=e,
            )

        return Decision(
            path=directory_path,
            previous_mtime=current_mtime,
            target_mtime=target,
            action=Action.UPDATED,
            delta=delta,
            source=scan.source,
        )
