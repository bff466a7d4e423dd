"""Adapters implementing the dirstamp metadata primitives."""

from .filesystem import FileSystemAdapter

__all__ = ['FileSystemAdapter']
