"""High-level API for dirstamp.

This module provides simple, functional interfaces for the common cases.
These functions wrap the ExecutionPlan for callers that don't need to
build configs and adapters themselves.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Union

from .adapters.filesystem import FileSystemAdapter
from .config import StampConfig, ReconcileMode, DEFAULT_TOLERANCE_SECONDS
from .core.adapter import MetadataAdapter
from .core.reconciler import Decision
from .error_policies import ErrorPolicy
from .planning import ExecutionPlan


def iter_decisions(
    root: Union[str, Path] = ".",
    confirm: bool = False,
    tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS,
    follow_symlinks: bool = False,
    adapter: Optional[MetadataAdapter] = None,
    policy: Optional[ErrorPolicy] = None,
) -> Iterator[Decision]:
    """Walk ``root`` and yield one Decision per directory in post-order.

    Nothing is written unless ``confirm`` is True.

    Args:
        root: Root directory
        confirm: Apply changes instead of only reporting them
        tolerance_seconds: Differences up to this are ignored
        follow_symlinks: Count links towards their parent like their targets
        adapter: Metadata adapter (defaults to FileSystemAdapter)
        policy: Error policy (defaults to silent ContinueOnErrorsPolicy)

    Raises:
        FatalPreconditionError: If ``root`` is missing or not a directory

    Example:
        >>> for decision in iter_decisions("/srv/archive"):
        ...     if decision.changed:
        ...         print(decision.path, decision.delta)
    """
    config = StampConfig(
        root=root,
        mode=ReconcileMode.CONFIRM if confirm else ReconcileMode.DRY_RUN,
        tolerance_seconds=tolerance_seconds,
        follow_symlinks=follow_symlinks,
    )
    if adapter is None:
        adapter = FileSystemAdapter()

    plan = ExecutionPlan(config, adapter, policy)
    return plan.execute()


def stamp_tree(root: Union[str, Path] = ".", confirm: bool = False, **kwargs) -> List[Decision]:
    """Walk ``root`` and return every Decision as a list.

    Takes the same options as iter_decisions().

    Example:
        >>> decisions = stamp_tree("/srv/archive", confirm=True)
        >>> updated = [d.path for d in decisions if d.changed]
    """
    return list(iter_decisions(root, confirm=confirm, **kwargs))
