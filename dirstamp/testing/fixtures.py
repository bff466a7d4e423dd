"""Test fixtures for dirstamp and its consumers.

Two helpers:

- MemoryTreeAdapter: an in-memory tree implementing the metadata
  primitives, with injectable failures and a log of every write.
- build_tree(): creates a real directory tree on disk with given mtimes.

Layouts are nested dicts: a dict value is a directory, a number is a
file with that mtime.

Example:
    adapter = MemoryTreeAdapter.from_layout(
        {"docs": {"a.txt": 1000.0}, "empty": {}},
        dir_mtime=5000.0,
    )
"""

import os
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple, Union

from ..core.adapter import MetadataAdapter
from ..core.node import Entry, EntryKind


Layout = Mapping[str, Any]


class MemoryTreeAdapter(MetadataAdapter):
    """In-memory tree for exercising the walker and reconciler.

    Paths are POSIX strings rooted at ``root``. Listing order follows the
    layout's insertion order. Links added with add_link() resolve like
    symbolic links; failure sets and the write log use real paths.
    """

    def __init__(self, root: str = "root", read_only: bool = False):
        self.root = root
        self.read_only = read_only
        self.mtimes: Dict[str, float] = {}
        self.children: Dict[str, List[str]] = {}
        self.kinds: Dict[str, EntryKind] = {}
        self.links: Dict[str, str] = {}

        # Failure injection
        self.fail_listing: Set[str] = set()
        self.fail_read: Set[str] = set()
        self.fail_write: Set[str] = set()

        # Call log
        self.writes: List[Tuple[str, float]] = []

    @classmethod
    def from_layout(cls,
                    layout: Layout,
                    dir_mtime: float = 0.0,
                    root: str = "root",
                    dir_mtimes: Optional[Mapping[str, float]] = None,
                    **kwargs) -> 'MemoryTreeAdapter':
        """Build an adapter from a nested layout.

        Args:
            layout: Contents of the root directory
            dir_mtime: mtime given to every directory (root included)
            root: Name of the root directory
            dir_mtimes: Per-directory overrides, keyed by full path
        """
        adapter = cls(root=root, **kwargs)
        adapter.add_tree(root, layout, dir_mtime)
        for path, mtime in (dir_mtimes or {}).items():
            adapter.mtimes[path] = mtime
        return adapter

    def add_tree(self, path: str, layout: Layout, dir_mtime: float = 0.0) -> None:
        """Add a directory at ``path`` holding ``layout``.

        The path may lie outside the root, as a target for add_link().
        """
        self.kinds[path] = EntryKind.DIRECTORY
        self.mtimes[path] = dir_mtime
        self.children[path] = []
        for name, value in layout.items():
            child = str(PurePosixPath(path) / name)
            self.children[path].append(child)
            if isinstance(value, Mapping):
                self.add_tree(child, value, dir_mtime)
            else:
                self.kinds[child] = EntryKind.FILE
                self.mtimes[child] = float(value)

    def path(self, *parts: str) -> str:
        """Join ``parts`` onto the root, e.g. ``path("media", "photos")``."""
        return str(PurePosixPath(self.root, *parts))

    def add_link(self, path: str, target: str) -> None:
        """Add a symbolic link at ``path`` pointing to ``target``."""
        parent = str(PurePosixPath(path).parent)
        self.children[parent].append(path)
        self.links[path] = target

    def _resolve(self, path) -> str:
        """Follow links in ``path`` to the real entry it names."""
        path = str(path)
        for link, target in self.links.items():
            if path == link or path.startswith(link + "/"):
                return self._resolve(target + path[len(link):])
        return path

    def list_entries(self, path) -> Iterator[Entry]:
        path = str(path)
        real = self._resolve(path)
        if real in self.fail_listing:
            raise PermissionError(f"Permission denied: '{path}'")
        if self.kinds.get(real) is not EntryKind.DIRECTORY:
            raise NotADirectoryError(f"Not a directory: '{path}'")
        for child in self.children[real]:
            kind = self.kinds.get(self._resolve(child))
            if kind is None:
                # Broken link
                continue
            name = PurePosixPath(child).name
            yield Entry(str(PurePosixPath(path) / name), kind, child in self.links)

    def get_mtime(self, path) -> float:
        real = self._resolve(path)
        if real in self.fail_read:
            raise PermissionError(f"Permission denied: '{path}'")
        if real not in self.mtimes:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return self.mtimes[real]

    def set_mtime(self, path, mtime: float) -> None:
        real = self._resolve(path)
        if self.read_only or real in self.fail_write:
            raise PermissionError(f"Operation not permitted: '{path}'")
        self.writes.append((real, mtime))
        self.mtimes[real] = mtime

    def exists(self, path) -> bool:
        return self._resolve(path) in self.kinds

    def is_directory(self, path) -> bool:
        return self.kinds.get(self._resolve(path)) is EntryKind.DIRECTORY

    def identifier(self, path) -> str:
        return self._resolve(path)

    def supports_modification(self) -> bool:
        return not self.read_only

    def directories(self) -> List[str]:
        return [p for p, kind in self.kinds.items() if kind is EntryKind.DIRECTORY]

    def snapshot(self) -> Dict[str, float]:
        """Copy of every mtime, for before/after comparisons."""
        return dict(self.mtimes)


def build_tree(root: Union[str, Path], layout: Layout, dir_mtime: Optional[float] = None) -> Path:
    """Create ``layout`` under ``root`` on disk.

    Files get the mtime given in the layout. Directories are stamped with
    ``dir_mtime`` after all content exists, deepest first, since creating
    an entry bumps its parent's mtime.

    Returns:
        The root path
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    directories: List[Path] = [root]
    _write_layout(root, layout, directories)

    if dir_mtime is not None:
        for directory in reversed(directories):
            os.utime(directory, (dir_mtime, dir_mtime))
    return root


def _write_layout(base: Path, layout: Layout, directories: List[Path]) -> None:
    for name, value in layout.items():
        target = base / name
        if isinstance(value, Mapping):
            target.mkdir()
            directories.append(target)
            _write_layout(target, value, directories)
        else:
            target.write_text(name)
            os.utime(target, (float(value), float(value)))
