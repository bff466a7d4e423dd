"""Configuration system for dirstamp.

This module defines how callers specify a run: which tree to walk, whether
changes are applied or only reported, and how errors are treated.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    ThresholdPolicy,
)


DEFAULT_TOLERANCE_SECONDS = 1.0


class ReconcileMode(Enum):
    """Whether computed timestamps are applied.

    Dry-run is the default everywhere.
    """
    DRY_RUN = "dry_run"     # Report only
    CONFIRM = "confirm"     # Write timestamps


@dataclass
class StampConfig:
    """Complete configuration for one dirstamp run.

    The ExecutionPlan validates this against the adapter before any
    directory is touched.
    """

    root: Union[str, Path] = "."
    mode: ReconcileMode = ReconcileMode.DRY_RUN

    # Output
    show_dates: bool = False
    verbose: bool = False

    # Comparison
    tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS

    # Links: linked directories are always walked; this lets links count
    # towards their parent's newest child
    follow_symlinks: bool = False

    # Error handling
    strict: bool = False                 # Abort on first error
    max_errors: Optional[int] = None     # Abort once this many are exceeded

    @classmethod
    def dry_run(cls, root: Union[str, Path] = ".", **kwargs) -> 'StampConfig':
        """Create config that only reports what would change."""
        return cls(root=root, mode=ReconcileMode.DRY_RUN, **kwargs)

    @classmethod
    def confirm(cls, root: Union[str, Path] = ".", **kwargs) -> 'StampConfig':
        """Create config that applies changes."""
        return cls(root=root, mode=ReconcileMode.CONFIRM, **kwargs)

    @property
    def is_dry_run(self) -> bool:
        return self.mode is ReconcileMode.DRY_RUN

    def create_error_policy(self) -> ErrorPolicy:
        """Build the error policy this configuration asks for."""
        if self.strict:
            return FailFastPolicy()
        if self.max_errors is not None:
            return ThresholdPolicy(max_errors=self.max_errors, verbose=self.verbose)
        return ContinueOnErrorsPolicy(verbose=self.verbose)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.mode, ReconcileMode):
            errors.append(f"mode must be a ReconcileMode, got {self.mode!r}")

        if self.tolerance_seconds < 0:
            errors.append("tolerance_seconds cannot be negative")

        if self.max_errors is not None and self.max_errors < 0:
            errors.append("max_errors cannot be negative")

        if self.strict and self.max_errors is not None:
            errors.append("strict and max_errors are mutually exclusive")

        return errors
