"""Post-order tree walker for dirstamp.

The walker visits every directory after all of its subdirectories have
been reconciled, so a parent can use the timestamps its children end up
with rather than the ones they started with.
"""

from typing import Generator, Iterator, List, Optional, Set

from ..error_policies import ErrorPolicy
from .adapter import MetadataAdapter
from .node import DirectoryNode, Entry, PathLike
from .reconciler import Decision, TimestampReconciler


class TreeWalker:
    """Depth-first post-order walk that drives a TimestampReconciler.

    Decisions are yielded in traversal order: every descendant of a
    directory before the directory itself, siblings in the order the
    adapter lists them.

    Example:
        adapter = FileSystemAdapter()
        walker = TreeWalker(adapter, TimestampReconciler(adapter))
        for decision in walker.walk(Path("photos")):
            print(decision.path, decision.action)
    """

    def __init__(self,
                 adapter: MetadataAdapter,
                 reconciler: TimestampReconciler,
                 policy: Optional[ErrorPolicy] = None,
                 count_links: bool = False):
        """Initialize walker.

        Args:
            adapter: Provides list_entries and get_mtime
            reconciler: Makes the per-directory decision
            policy: Handles listing and read failures; defaults to the
                reconciler's policy so both record into one place
            count_links: Let symbolic links count towards their parent's
                newest child. Linked directories are walked either way.
        """
        self.adapter = adapter
        self.reconciler = reconciler
        self.policy = policy if policy is not None else reconciler.policy
        self.count_links = count_links
        self._ancestors: Set[str] = set()

    def walk(self, root: PathLike) -> Iterator[Decision]:
        """Walk the tree rooted at ``root``.

        The root is assumed to be an existing directory; ExecutionPlan
        checks that before calling.

        Yields:
            One Decision per directory, in post-order
        """
        self._ancestors = set()
        yield from self._walk(root)

    def _walk(self, path: PathLike) -> Generator[Decision, None, Optional[float]]:
        """Reconcile ``path`` and everything below it.

        Returns (as the generator's return value) the directory's
        resolved mtime, or None if it has none.
        """
        node_id = self.adapter.identifier(path)
        if node_id in self._ancestors:
            # Link loop back to a directory still being walked
            return None

        self._ancestors.add(node_id)
        try:
            return (yield from self._visit(path))
        finally:
            self._ancestors.discard(node_id)

    def _visit(self, path: PathLike) -> Generator[Decision, None, Optional[float]]:
        node = DirectoryNode(path)

        try:
            entries: List[Entry] = list(self.adapter.list_entries(path))
        except OSError as e:
            self.policy.handle(e, 'list_entries', path)
            node.current_mtime = self._read_mtime(path)
            decision = Decision.failure(path, node.current_mtime, "child scan failed", e)
            yield decision
            return self._finish(node, decision)

        # Subdirectories first, so their resolved values are final
        subdir_mtimes: List[float] = []
        for entry in entries:
            if entry.is_dir:
                resolved = yield from self._walk(entry.path)
                if resolved is not None and self._counts(entry):
                    subdir_mtimes.append(resolved)

        file_mtimes: List[float] = []
        for entry in entries:
            if not entry.is_dir and self._counts(entry):
                mtime = self._read_mtime(entry.path)
                if mtime is not None:
                    file_mtimes.append(mtime)

        try:
            node.current_mtime = self.adapter.get_mtime(path)
        except OSError as e:
            self.policy.handle(e, 'get_mtime', path)
            decision = Decision.failure(path, None, "mtime read failed", e)
            yield decision
            return self._finish(node, decision)

        decision = self.reconciler.reconcile(path, node.current_mtime, file_mtimes, subdir_mtimes)
        yield decision
        return self._finish(node, decision)

    def _counts(self, entry: Entry) -> bool:
        return self.count_links or not entry.is_link

    def _finish(self, node: DirectoryNode, decision: Decision) -> Optional[float]:
        node.resolve(decision.resolved_mtime)
        return node.resolved_mtime

    def _read_mtime(self, path: PathLike) -> Optional[float]:
        """Read an mtime, reporting failures to the policy.

        An unreadable entry is treated as absent.
        """
        try:
            return self.adapter.get_mtime(path)
        except OSError as e:
            self.policy.handle(e, 'get_mtime', path)
            return None
