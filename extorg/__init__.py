"""
extorg - Extension-based file organizer.

This package sorts files into <root>/assets/<category>/ by extension and
merges stray assets/ folders found elsewhere in the tree into that one.
"""

from .config import Config, DEFAULT_CONFIG
from .operations import (
    OperationResult,
    PendingMove,
    RunResult,
    create_directories,
    find_and_categorize_files,
    find_foreign_roots,
    merge_foreign_roots,
    move_file,
    organize_files,
    organize_tree,
)

__version__ = "1.0.0"
__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "OperationResult",
    "PendingMove",
    "RunResult",
    "create_directories",
    "find_and_categorize_files",
    "find_foreign_roots",
    "merge_foreign_roots",
    "move_file",
    "organize_files",
    "organize_tree",
]
