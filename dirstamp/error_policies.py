"""
Error handling policies for dirstamp.

This module provides a flexible error handling system through the Policy pattern,
allowing callers to decide what happens when a directory cannot be listed or a
timestamp cannot be read or written during a walk.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import sys


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors
    that occur during metadata operations. A policy either records the
    error and returns so the walk can continue, or raises to stop it.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    @abstractmethod
    def handle(self, error: Exception, method_name: str, path: Any) -> None:
        """
        Handle an error that occurred during a metadata operation.

        Args:
            error: The exception that was raised
            method_name: Name of the primitive that failed (e.g., 'list_entries')
            path: The path being processed when the error occurred

        Raises:
            The original error (or a wrapping error) to stop the walk.
        """
        pass

    def _record(self, error: Exception, method_name: str, path: Any) -> Dict[str, Any]:
        error_record = {
            'path': path,
            'method': method_name,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        self.errors.append(error_record)
        return error_record

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors if e['error_type'] == 'PermissionError'),
            'os_errors': sum(1 for e in self.errors if isinstance(e['error'], OSError)),
            'listing_errors': sum(1 for e in self.errors if e['method'] == 'list_entries'),
            'read_errors': sum(1 for e in self.errors if e['method'] == 'get_mtime'),
            'write_errors': sum(1 for e in self.errors if e['method'] == 'set_mtime'),
            'errors': self.errors,
        }


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the walk.

    Useful when a partially stamped tree is not acceptable.
    """

    def handle(self, error: Exception, method_name: str, path: Any) -> None:
        """Record and re-raise the error immediately."""
        self._record(error, method_name, path)
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that records errors and continues the walk.

    This is the default: one inaccessible folder should not abort a
    walk over thousands of others.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: Exception, method_name: str, path: Any) -> None:
        self._record(error, method_name, path)

        if self.verbose:
            if isinstance(error, PermissionError):
                print(f"WARNING: Skipping inaccessible path '{path}': {error}", file=sys.stderr)
            else:
                print(f"WARNING: Error in {method_name} for '{path}': {error}", file=sys.stderr)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails fast.

    Useful when some errors are expected but too many indicate
    a systemic problem that should halt processing.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, print warnings for errors
        """
        super().__init__()
        self.max_errors = max_errors
        self.verbose = verbose

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def handle(self, error: Exception, method_name: str, path: Any) -> None:
        """Record the error if under threshold, otherwise raise."""
        self._record(error, method_name, path)

        if self.error_count > self.max_errors:
            raise RuntimeError(f"Error threshold exceeded ({self.max_errors} errors)") from error

        if self.verbose:
            print(f"WARNING [{self.error_count}/{self.max_errors}]: Error in {method_name} for '{path}': {error}",
                  file=sys.stderr)
