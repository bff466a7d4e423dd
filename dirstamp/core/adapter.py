"""MetadataAdapter abstraction for dirstamp.

The adapter owns every operating-system call the walker and reconciler
need: listing a directory, reading an mtime and writing an mtime. Keeping
these behind one interface means the core algorithm never touches the
filesystem directly and can be tested against an in-memory tree.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from .node import Entry, PathLike


class MetadataAdapter(ABC):
    """Abstract adapter providing the metadata primitives.

    Implementations raise ``OSError`` (or a subclass) when a primitive
    fails. Error handling is the caller's responsibility; adapters never
    swallow errors themselves.
    """

    @abstractmethod
    def list_entries(self, path: PathLike) -> Iterator[Entry]:
        """Yield the direct children of a directory.

        Only files and directories are yielded. A symbolic link is yielded
        with the kind of its target and ``is_link`` set; broken links are
        left out. Order is whatever the underlying listing returns.

        Args:
            path: Directory to list

        Raises:
            OSError: If the directory cannot be enumerated
        """
        pass

    @abstractmethod
    def get_mtime(self, path: PathLike) -> float:
        """Return the modification time of ``path`` in POSIX seconds.

        Raises:
            OSError: If the metadata cannot be read
        """
        pass

    @abstractmethod
    def set_mtime(self, path: PathLike, mtime: float) -> None:
        """Set the modification time of ``path``.

        The access time is left as it is.

        Raises:
            OSError: If the timestamp cannot be written
        """
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Check whether ``path`` exists."""
        pass

    @abstractmethod
    def is_directory(self, path: PathLike) -> bool:
        """Check whether ``path`` is a directory."""
        pass

    def identifier(self, path: PathLike) -> str:
        """Return a stable identifier for ``path``.

        Used by the walker to stop when a link leads back to a directory
        it is already inside. Adapters that can reach one directory
        through several paths should override this to return a canonical
        form.
        """
        return str(path)

    # Capability flags - adapters declare what they support

    def supports_modification(self) -> bool:
        """Check if adapter can write timestamps.

        Returns:
            True if set_mtime is usable
        """
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
