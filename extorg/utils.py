"""
Pure utility functions for the extension organizer.

These functions are stateless and have no side effects (except reading
directory listings and file metadata). They are easy to unit test in isolation.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .config import Config, DEFAULT_CONFIG


logger = logging.getLogger(__name__)


def get_category(file_path: Path, config: Config = DEFAULT_CONFIG) -> Optional[str]:
    """
    Determine the category for a file based on its extension.

    Args:
        file_path: Path to the file
        config: Configuration to use

    Returns:
        Category name (e.g., "images"), or None for files that stay put
    """
    return config.get_category(file_path.suffix)


def generate_unique_filename(destination: Path) -> Path:
    """
    Generate a free destination by adding a numeric suffix if the file exists.

    ``name.ext`` becomes ``name_1.ext``, then ``name_2.ext`` and so on. Every
    candidate is checked on its own, so the loop always advances.

    Args:
        destination: Proposed destination path

    Returns:
        Original path if it doesn't exist, or the first free suffixed path
    """
    if not _path_taken(destination):
        return destination

    stem = destination.stem
    suffix = destination.suffix
    counter = 1
    while True:
        candidate = destination.with_name(f"{stem}_{counter}{suffix}")
        if not _path_taken(candidate):
            return candidate
        counter += 1


def _path_taken(path: Path) -> bool:
    # exists() follows symlinks; a dangling link still occupies the name
    return path.exists() or path.is_symlink()


def is_within(path: Path, directory: Path) -> bool:
    """Check if path is directory itself or anywhere beneath it."""
    return path == directory or directory in path.parents


def is_foreign_root(directory: Path, canonical_root: Path, config: Config = DEFAULT_CONFIG) -> bool:
    """
    Check if a directory is another instance of the canonical root.

    Matches by exact name, outside the canonical root's own subtree.
    """
    return config.is_root_name(directory.name) and not is_within(directory, canonical_root)


def should_descend(directory: Path, canonical_root: Path, config: Config = DEFAULT_CONFIG) -> bool:
    """
    Check if a traversal may enter a directory.

    This is the one exclusion rule shared by discovery and the classifying
    walk: never enter the canonical root's subtree, never enter anything
    named like the canonical root, never follow a symlinked directory, and
    with ``skip_hidden`` never enter a dot-prefixed directory.

    Args:
        directory: Candidate directory (absolute)
        canonical_root: Absolute path of the canonical root
        config: Configuration to use

    Returns:
        True if the traversal should list this directory
    """
    if directory.is_symlink():
        return False
    if is_within(directory, canonical_root):
        return False
    if config.skip_hidden and config.is_hidden(directory.name):
        return False
    return not config.is_root_name(directory.name)


def list_directory(directory: Path, config: Config = DEFAULT_CONFIG) -> List[Path]:
    """
    List a directory's entries in sorted name order.

    Raises:
        OSError: If the directory cannot be read and
            ``config.skip_unreadable_dirs`` is False
    """
    try:
        return sorted(directory.iterdir())
    except OSError as e:
        if not config.skip_unreadable_dirs:
            raise
        logger.warning("Skipping unreadable directory %s: %s", directory, e)
        return []


def walk_tree(
    root: Path,
    canonical_root: Path,
    config: Config = DEFAULT_CONFIG,
) -> Iterator[Tuple[Path, List[Path]]]:
    """
    Walk the scan tree, yielding (directory, sorted entries) pairs.

    Only directories accepted by ``should_descend`` are listed. The scan root
    itself must be readable; subdirectories follow the unreadable-directory
    policy in ``list_directory``. Uses an explicit stack rather than
    recursion.

    Args:
        root: Absolute scan root
        canonical_root: Absolute path of the canonical root
        config: Configuration to use

    Raises:
        OSError: If the scan root (or, in strict mode, any subdirectory)
            cannot be listed
    """
    stack = [root]
    while stack:
        directory = stack.pop()
        if directory == root:
            entries = sorted(directory.iterdir())
        else:
            entries = list_directory(directory, config)

        yield directory, entries

        subdirs = [
            entry for entry in entries
            if is_real_dir(entry) and should_descend(entry, canonical_root, config)
        ]
        stack.extend(reversed(subdirs))


def is_real_dir(path: Path) -> bool:
    """Directory that is not a symlink."""
    return path.is_dir() and not path.is_symlink()


def iter_files(directory: Path) -> Iterator[Path]:
    """
    Yield every file beneath a directory, depth first, in sorted order.

    Uses an explicit stack so deep trees don't hit the recursion limit.
    Symlinked directories are not followed.
    """
    stack = [directory]
    while stack:
        current = stack.pop()
        entries = sorted(current.iterdir())
        subdirs = []
        for entry in entries:
            if is_real_dir(entry):
                subdirs.append(entry)
            else:
                yield entry
        stack.extend(reversed(subdirs))


def iter_subdirectories(directory: Path) -> List[Path]:
    """All real subdirectories beneath a directory, deepest first."""
    found = []
    stack = [directory]
    while stack:
        current = stack.pop()
        try:
            children = [p for p in current.iterdir() if is_real_dir(p)]
        except OSError as e:
            logger.warning("Could not list %s: %s", current, e)
            continue
        found.extend(children)
        stack.extend(children)
    return sorted(found, key=lambda p: len(p.parts), reverse=True)


def format_destination(destination: Path, scan_root: Path) -> str:
    """Render a destination relative to the scan root for console output."""
    try:
        return str(destination.relative_to(scan_root))
    except ValueError:
        return str(destination)
