"""Testing utilities for dirstamp consumers."""

from .fixtures import MemoryTreeAdapter, build_tree

__all__ = ['MemoryTreeAdapter', 'build_tree']
