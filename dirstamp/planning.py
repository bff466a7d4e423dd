"""Execution planning for dirstamp.

The ExecutionPlan validates that a StampConfig can be satisfied by a
MetadataAdapter, checks the root path, and coordinates the walk.
Nothing on disk is touched until every check has passed.
"""

from typing import Any, Dict, Iterator, Optional

from .config import StampConfig, ReconcileMode
from .core.adapter import MetadataAdapter
from .core.reconciler import Action, Decision, TimestampReconciler
from .core.walker import TreeWalker
from .error_policies import ErrorPolicy


class CapabilityMismatchError(Exception):
    """Raised when configuration requirements can't be met by adapter."""
    pass


class FatalPreconditionError(Exception):
    """Raised when the root path is missing or is not a directory."""

    def __init__(self, message: str, path: Any = None):
        super().__init__(message)
        self.path = path


class ExecutionPlan:
    """Validated execution plan for one dirstamp run.

    The ExecutionPlan is the bridge between user intent (StampConfig) and
    execution. It assembles the reconciler, walker and error policy and
    keeps simple counters while decisions stream through it.
    """

    def __init__(self,
                 config: StampConfig,
                 adapter: MetadataAdapter,
                 policy: Optional[ErrorPolicy] = None):
        """Create and validate an execution plan.

        Args:
            config: Run configuration
            adapter: Metadata primitives for the tree
            policy: Error policy; built from the config when omitted

        Raises:
            CapabilityMismatchError: If the config is invalid or the adapter
                can't satisfy it
            FatalPreconditionError: If the root is missing or not a directory
        """
        self.config = config
        self.adapter = adapter

        config_errors = config.validate()
        if config_errors:
            raise CapabilityMismatchError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        if config.mode is ReconcileMode.CONFIRM and not adapter.supports_modification():
            raise CapabilityMismatchError(
                "Adapter limitations: confirm mode requested but adapter cannot write timestamps"
            )

        self._check_root()

        self.policy = policy if policy is not None else config.create_error_policy()
        self.reconciler = TimestampReconciler(
            adapter,
            mode=config.mode,
            tolerance_seconds=config.tolerance_seconds,
            policy=self.policy,
        )
        self.walker = TreeWalker(adapter, self.reconciler, self.policy,
                                 count_links=config.follow_symlinks)

        # Track execution state
        self.counts: Dict[Action, int] = {}
        self.failures = 0

    def _check_root(self) -> None:
        root = self.config.root
        if not self.adapter.exists(root):
            raise FatalPreconditionError(f"Path does not exist: {root}", root)
        if not self.adapter.is_directory(root):
            raise FatalPreconditionError(f"Not a directory: {root}", root)

    def execute(self) -> Iterator[Decision]:
        """Execute the walk.

        Yields:
            Decisions in post-order
        """
        self.counts = {action: 0 for action in Action}
        self.failures = 0

        for decision in self.walker.walk(self.config.root):
            self.counts[decision.action] += 1
            if decision.failed:
                self.failures += 1
            yield decision

    @property
    def changed(self) -> int:
        """Directories updated, or due for update in a dry run, so far."""
        return self.counts.get(Action.WOULD_UPDATE, 0) + self.counts.get(Action.UPDATED, 0)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the plan and what it has done so far.

        Returns:
            Dictionary with plan details and counters
        """
        return {
            'root': str(self.config.root),
            'mode': self.config.mode.value,
            'tolerance_seconds': self.config.tolerance_seconds,
            'adapter': self.adapter.__class__.__name__,
            'policy': self.policy.__class__.__name__,
            'decisions': {action.value: count for action, count in self.counts.items()},
            'failures': self.failures,
        }
