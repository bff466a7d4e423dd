"""Core components of dirstamp: data model, adapter interface, walker and reconciler."""

from .node import Entry, EntryKind, DirectoryNode
from .adapter import MetadataAdapter
from .reconciler import (
    Action,
    Decision,
    NoContent,
    NewestFile,
    NewestSubdir,
    ContentScan,
    scan_content,
    TimestampReconciler,
)
from .walker import TreeWalker

__all__ = [
    'Entry',
    'EntryKind',
    'DirectoryNode',
    'MetadataAdapter',
    'Action',
    'Decision',
    'NoContent',
    'NewestFile',
    'NewestSubdir',
    'ContentScan',
    'scan_content',
    'TimestampReconciler',
    'TreeWalker',
]
