"""Node types for dirstamp traversal.

Nodes are intentionally kept simple - they are data containers.
Reading and writing metadata is delegated to the MetadataAdapter, which
is what lets the walker run against the real filesystem or an in-memory
tree in tests.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Optional, Union


PathLike = Union[str, PurePath]


class EntryKind(Enum):
    """What kind of direct child an Entry is."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Entry:
    """A direct child of a directory.

    Entries only carry identity and kind. The timestamp that matters for a
    file is read through the adapter; for a subdirectory it is the
    resolved mtime produced by the recursive step.

    ``kind`` describes what a symbolic link points to; ``is_link`` marks
    that the entry itself is a link.
    """

    path: PathLike
    kind: EntryKind
    is_link: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        return PurePath(self.path).name


@dataclass
class DirectoryNode:
    """One directory during traversal.

    ``current_mtime`` is what the OS reported when the directory was
    visited (None if it could not be read). ``resolved_mtime`` is the
    value the parent sees and is set exactly once, after every child of
    this directory has been resolved.
    """

    path: PathLike
    current_mtime: Optional[float] = None
    _resolved_mtime: Optional[float] = field(default=None, repr=False)
    _is_resolved: bool = field(default=False, repr=False)

    @property
    def is_resolved(self) -> bool:
        return self._is_resolved

    @property
    def resolved_mtime(self) -> Optional[float]:
        """Timestamp this directory ends up with after reconciliation.

        Raises:
            RuntimeError: If read before the directory was resolved
        """
        if not self._is_resolved:
            raise RuntimeError(f"Directory not resolved yet: {self.path}")
        return self._resolved_mtime

    def resolve(self, mtime: Optional[float]) -> None:
        """Finalize the resolved mtime.

        Args:
            mtime: Final timestamp, or None if the directory has no usable one

        Raises:
            RuntimeError: If the node was already resolved
        """
        if self._is_resolved:
            raise RuntimeError(f"Directory already resolved: {self.path}")
        self._resolved_mtime = mtime
        self._is_resolved = True

    def __str__(self) -> str:
        return str(self.path)
