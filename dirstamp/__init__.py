"""dirstamp - set each directory's mtime to match its newest content.

After copies, restores or migrations, directory timestamps usually show when
the operation ran rather than how old the data inside is. dirstamp walks a
tree bottom-up and gives every directory the mtime of its newest immediate
file, or of its newest immediate subdirectory when it holds no files.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from dirstamp import stamp_tree

    decisions = stamp_tree("photos")                 # dry run
    decisions = stamp_tree("photos", confirm=True)   # apply
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

# Filled in by release builds; left empty for source checkouts
__git_hash__ = None
__build_date__ = None

from .config import StampConfig, ReconcileMode, DEFAULT_TOLERANCE_SECONDS
from .core import (
    Entry,
    EntryKind,
    DirectoryNode,
    MetadataAdapter,
    Action,
    Decision,
    NoContent,
    NewestFile,
    NewestSubdir,
    scan_content,
    TimestampReconciler,
    TreeWalker,
)
from .adapters import FileSystemAdapter
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    ThresholdPolicy,
)
from .planning import ExecutionPlan, CapabilityMismatchError, FatalPreconditionError
from .api import iter_decisions, stamp_tree

__all__ = [
    "__version__",
    # Config
    "StampConfig",
    "ReconcileMode",
    "DEFAULT_TOLERANCE_SECONDS",
    # Core
    "Entry",
    "EntryKind",
    "DirectoryNode",
    "MetadataAdapter",
    "Action",
    "Decision",
    "NoContent",
    "NewestFile",
    "NewestSubdir",
    "scan_content",
    "TimestampReconciler",
    "TreeWalker",
    # Adapters
    "FileSystemAdapter",
    # Errors
    "ErrorPolicy",
    "FailFastPolicy",
    "ContinueOnErrorsPolicy",
    "ThresholdPolicy",
    "ExecutionPlan",
    "CapabilityMismatchError",
    "FatalPreconditionError",
    # API
    "iter_decisions",
    "stamp_tree",
]
