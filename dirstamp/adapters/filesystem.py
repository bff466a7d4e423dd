"""Filesystem adapter for dirstamp.

Implements the metadata primitives on top of ``os.scandir``, ``os.stat``
and ``os.utime``.
"""

import os
from pathlib import Path
from typing import Iterator, Optional, Union

from ..core.adapter import MetadataAdapter
from ..core.node import Entry, EntryKind


class FileSystemAdapter(MetadataAdapter):
    """Adapter for the local filesystem.

    Symbolic links are listed as whatever they point to and marked with
    ``is_link``; whether they count towards a parent's timestamp is up to
    the walker. Broken links and special files (sockets, fifos, devices)
    are never yielded.
    """

    def __init__(self, read_only: bool = False):
        """Initialize filesystem adapter.

        Args:
            read_only: Refuse to write timestamps
        """
        self.read_only = read_only

    def list_entries(self, path: Union[str, Path]) -> Iterator[Entry]:
        """Yield files and subdirectories of ``path`` in scandir order."""
        with os.scandir(path) as it:
            for dir_entry in it:
                kind = self._classify(dir_entry)
                if kind is None:
                    continue
                yield Entry(Path(dir_entry.path), kind, dir_entry.is_symlink())

    def _classify(self, dir_entry: os.DirEntry) -> Optional[EntryKind]:
        try:
            if dir_entry.is_dir():
                return EntryKind.DIRECTORY
            if dir_entry.is_file():
                return EntryKind.FILE
        except OSError:
            # Entry vanished between listing and classification
            return None
        return None

    def get_mtime(self, path: Union[str, Path]) -> float:
        return os.stat(path).st_mtime

    def set_mtime(self, path: Union[str, Path], mtime: float) -> None:
        """Set mtime, keeping the current access time."""
        if self.read_only:
            raise PermissionError(f"Adapter is read-only: {path}")
        st = os.stat(path)
        os.utime(path, ns=(st.st_atime_ns, int(round(mtime * 1e9))))

    def exists(self, path: Union[str, Path]) -> bool:
        return os.path.exists(path)

    def is_directory(self, path: Union[str, Path]) -> bool:
        return os.path.isdir(path)

    def identifier(self, path: Union[str, Path]) -> str:
        """Return the real path, so a link back to an ancestor is recognised."""
        return os.path.realpath(path)

    def supports_modification(self) -> bool:
        """Filesystem supports writing timestamps unless read-only."""
        return not self.read_only

    def __repr__(self) -> str:
        return f"FileSystemAdapter(read_only={self.read_only!r})"
