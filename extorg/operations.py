"""
Core file operations for the extension organizer.

These functions perform the actual file system operations (mkdir, rename, rmdir).
They use a callback pattern for output to separate concerns from the CLI.

A run goes through the phases in a fixed order:
    1. create_directories   - ensure <root>/assets/<category>/ exists
    2. find_foreign_roots   - locate other assets/ directories in the tree
    3. merge_foreign_roots  - fold them into the canonical assets/
    4. organize_files       - classify loose files and move them into place
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List

from .config import Config, DEFAULT_CONFIG
from .utils import (
    format_destination,
    generate_unique_filename,
    get_category,
    is_foreign_root,
    is_real_dir,
    iter_files,
    iter_subdirectories,
    walk_tree,
)


logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Result of a file operation with statistics."""
    success_count: int = 0
    skip_count: int = 0
    error_count: int = 0
    actions: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PendingMove:
    """A classified file waiting to be relocated."""
    source: Path
    category: str


@dataclass
class RunResult:
    """Statistics for a full organizing run."""
    layout: OperationResult = field(default_factory=OperationResult)
    merge: OperationResult = field(default_factory=OperationResult)
    organize: OperationResult = field(default_factory=OperationResult)
    foreign_roots: List[Path] = field(default_factory=list)

    @property
    def moved_count(self) -> int:
        return self.merge.success_count + self.organize.success_count

    @property
    def error_count(self) -> int:
        return self.merge.error_count + self.organize.error_count


# Type alias for output callback
OutputCallback = Callable[[str], None]


def _default_output(message: str) -> None:
    """Default output callback that prints to stdout."""
    print(message)


def create_directories(
    root: Path,
    dry_run: bool = False,
    config: Config = DEFAULT_CONFIG,
    output: OutputCallback = _default_output,
) -> OperationResult:
    """
    Ensure the canonical root and every category directory exist.

    Directories that already exist are left untouched and counted as skipped,
    so running this twice is harmless.

    Args:
        root: Scan root the canonical root lives in
        dry_run: If True, only report what would be created
        config: Configuration to use
        output: Callback for output messages

    Returns:
        OperationResult; success_count is the number of directories created

    Raises:
        OSError: If a directory cannot be created (permission denied,
            a file in the way, ...)
    """
    result = OperationResult()
    canonical_root = root / config.root_folder

    targets = [(canonical_root, f"{config.root_folder}/")]
    for category in config.category_names:
        targets.append((canonical_root / category, f"{config.root_folder}/{category}/"))

    for path, label in targets:
        if path.is_dir():
            output(f"  [EXISTS] {label}")
            result.skip_count += 1
            continue

        result.actions.append(label)
        if dry_run:
            output(f"  [WOULD CREATE] {label}")
            continue

        path.mkdir()
        logger.debug("Created directory %s", path)
        output(f"  [CREATED] {label}")
        result.success_count += 1

    return result


def find_foreign_roots(
    root: Path,
    canonical_root: Path,
    config: Config = DEFAULT_CONFIG,
    output: OutputCallback = _default_output,
) -> List[Path]:
    """
    Find every other directory named like the canonical root.

    The canonical root's subtree is never entered. A match is recorded and
    not descended into; its contents are the merge engine's business.

    Args:
        root: Absolute scan root
        canonical_root: Absolute path of the canonical root
        config: Configuration to use
        output: Callback for output messages

    Returns:
        Foreign root instances in walk order

    Raises:
        OSError: If the scan root cannot be listed, or a subdirectory
            cannot be listed and config.skip_unreadable_dirs is False
    """
    found: List[Path] = []

    for _, entries in walk_tree(root, canonical_root, config):
        for entry in entries:
            if is_real_dir(entry) and is_foreign_root(entry, canonical_root, config):
                output(f"  [FOUND] {format_destination(entry, root)}/")
                logger.info("Found foreign root %s", entry)
                found.append(entry)

    return found


def move_file(file_path: Path, category: str, canonical_root: Path) -> Path:
    """
    Move a single file into its category directory.

    The destination is canonical_root/category/<name>, suffixed with _1, _2, ...
    when that name is taken. The move is a plain rename, so it either fully
    happens or leaves the source where it was.

    Args:
        file_path: File to move
        category: Target category (a directory under canonical_root)
        canonical_root: Absolute path of the canonical root

    Returns:
        Final destination path

    Raises:
        OSError: If the source is gone, the category directory is missing,
            or the rename crosses a filesystem boundary
    """
    return _move_into(file_path, canonical_root / category)


def _move_into(file_path: Path, target_dir: Path) -> Path:
    destination = generate_unique_filename(target_dir / file_path.name)
    file_path.rename(destination)
    return destination


def _remove_if_empty(directory: Path, scan_root: Path, output: OutputCallback) -> bool:
    """Try to rmdir a directory; failure is reported, never raised."""
    try:
        directory.rmdir()
    except OSError as e:
        output(f"  [KEPT] {format_destination(directory, scan_root)}/ ({e.strerror or e})")
        logger.warning("Could not remove %s: %s", directory, e)
        return False
    output(f"  [REMOVED] {format_destination(directory, scan_root)}/")
    logger.debug("Removed directory %s", directory)
    return True


def _prune_empty_dirs(directory: Path, scan_root: Path, output: OutputCallback) -> None:
    """Remove emptied subdirectories bottom-up, then the directory itself."""
    for subdir in iter_subdirectories(directory):
        _remove_if_empty(subdir, scan_root, output)
    _remove_if_empty(directory, scan_root, output)


def _record_error(result: OperationResult, message: str, output: OutputCallback) -> None:
    output(f"  [ERROR] {message}")
    result.errors.append(message)
    result.error_count += 1


def _merge_file(
    source: Path,
    target_dir: Path,
    scan_root: Path,
    result: OperationResult,
    dry_run: bool,
    output: OutputCallback,
) -> None:
    action = f"{format_destination(source, scan_root)} -> {format_destination(target_dir, scan_root)}/"
    result.actions.append(action)

    if dry_run:
        output(f"  [WOULD MERGE] {action}")
        return

    try:
        destination = _move_into(source, target_dir)
    except OSError as e:
        logger.error("Merge failed: %s -> %s: %s", source, target_dir / source.name, e)
        _record_error(result, f"{format_destination(source, scan_root)}: {e}", output)
    else:
        output(f"  [MERGED] {format_destination(source, scan_root)} -> {format_destination(destination, scan_root)}")
        result.success_count += 1


def merge_foreign_roots(
    canonical_root: Path,
    foreign_roots: List[Path],
    dry_run: bool = False,
    output: OutputCallback = _default_output,
) -> OperationResult:
    """
    Fold foreign root instances into the canonical root.

    Each directory inside a foreign root is a category: its files (at any
    depth) go to the matching category under the canonical root, which is
    created if needed. Files sitting directly in a foreign root go to the
    canonical root itself. Emptied directories are removed afterwards.

    One failing file never stops the rest: errors are counted and reported.

    Args:
        canonical_root: Absolute path of the canonical root
        foreign_roots: Directories returned by find_foreign_roots
        dry_run: If True, only preview the merge
        output: Callback for output messages

    Returns:
        OperationResult; success_count is the number of files merged
    """
    result = OperationResult()
    scan_root = canonical_root.parent

    for foreign_root in foreign_roots:
        output(f"\n  Merging {format_destination(foreign_root, scan_root)}/")

        try:
            children = sorted(foreign_root.iterdir())
        except OSError as e:
            logger.error("Could not list %s: %s", foreign_root, e)
            _record_error(result, f"{format_destination(foreign_root, scan_root)}: {e}", output)
            continue

        for child in children:
            if not is_real_dir(child):
                _merge_file(child, canonical_root, scan_root, result, dry_run, output)
                continue

            target_dir = canonical_root / child.name
            try:
                if not dry_run:
                    target_dir.mkdir(exist_ok=True)
                files = list(iter_files(child))
            except OSError as e:
                logger.error("Could not merge %s into %s: %s", child, target_dir, e)
                _record_error(result, f"{format_destination(child, scan_root)}: {e}", output)
                continue

            for file_path in files:
                _merge_file(file_path, target_dir, scan_root, result, dry_run, output)

            if not dry_run:
                _prune_empty_dirs(child, scan_root, output)

        if not dry_run:
            _remove_if_empty(foreign_root, scan_root, output)

    return result


def find_and_categorize_files(
    root: Path,
    canonical_root: Path,
    config: Config = DEFAULT_CONFIG,
) -> List[PendingMove]:
    """
    Walk the tree and pair each loose file with its category.

    Skips the canonical root's subtree and any directory named like it.
    Files without an extension, or with one missing from the table, are left
    where they are.

    Args:
        root: Absolute scan root
        canonical_root: Absolute path of the canonical root
        config: Configuration to use

    Returns:
        Pending moves in walk order

    Raises:
        OSError: If the scan root cannot be listed, or a subdirectory
            cannot be listed and config.skip_unreadable_dirs is False
    """
    pending: List[PendingMove] = []

    for _, entries in walk_tree(root, canonical_root, config):
        for entry in entries:
            if is_real_dir(entry) or not entry.is_file():
                continue
            if config.skip_hidden and config.is_hidden(entry.name):
                continue
            category = get_category(entry, config)
            if category is not None:
                pending.append(PendingMove(entry, category))

    return pending


def organize_files(
    root: Path,
    dry_run: bool = False,
    config: Config = DEFAULT_CONFIG,
    output: OutputCallback = _default_output,
) -> OperationResult:
    """
    Classify loose files under root and move them into the canonical root.

    Args:
        root: Absolute scan root
        dry_run: If True, only preview changes without moving files
        config: Configuration to use
        output: Callback for output messages

    Returns:
        OperationResult with statistics

    Raises:
        OSError: If the tree cannot be walked (see find_and_categorize_files)
    """
    result = OperationResult()
    canonical_root = root / config.root_folder

    pending = find_and_categorize_files(root, canonical_root, config)

    if not pending:
        output("No files found to organize.")
        return result

    output(f"Found {len(pending)} file(s) to organize:\n")
    for move in pending:
        output(f"  [PLANNED] {format_destination(move.source, root)} -> {config.root_folder}/{move.category}/")

    output("")
    output("-" * 60)

    for move in pending:
        action = f"{format_destination(move.source, root)} -> {config.root_folder}/{move.category}/"
        result.actions.append(action)

        if dry_run:
            output(f"  [WOULD MOVE] {action}")
            continue

        try:
            destination = move_file(move.source, move.category, canonical_root)
        except OSError as e:
            logger.error(
                "Move failed: %s -> %s: %s",
                move.source, canonical_root / move.category / move.source.name, e,
            )
            _record_error(result, f"{format_destination(move.source, root)}: {e}", output)
        else:
            logger.debug("Moved %s -> %s", move.source, destination)
            output(f"  [MOVED] {format_destination(move.source, root)} -> {format_destination(destination, root)}")
            result.success_count += 1

    output("-" * 60)

    return result


def organize_tree(
    root: Path,
    dry_run: bool = False,
    config: Config = DEFAULT_CONFIG,
    output: OutputCallback = _default_output,
) -> RunResult:
    """
    Run every phase against a scan root.

    Layout creation and discovery are preconditions: their errors propagate.
    Per-file failures in the merge and move phases are counted in the
    result instead.

    Args:
        root: Directory to organize
        dry_run: If True, preview every phase without touching the disk
        config: Configuration to use
        output: Callback for output messages

    Returns:
        RunResult with per-phase statistics

    Raises:
        ValueError: If root is not a valid directory
        OSError: If the layout cannot be created or the tree cannot be walked
    """
    if not root.is_dir():
        raise ValueError(f"'{root}' is not a valid directory")

    root = root.resolve()
    canonical_root = root / config.root_folder
    run = RunResult()
    prefix = "[DRY RUN] " if dry_run else ""

    output(f"{prefix}Working directory: {root}\n")

    output("Step 1: Creating directory structure...")
    run.layout = create_directories(root, dry_run=dry_run, config=config, output=output)

    output(f"\nStep 2: Looking for other {config.root_folder}/ directories...")
    run.foreign_roots = find_foreign_roots(root, canonical_root, config=config, output=output)

    if run.foreign_roots:
        output(f"\nStep 3: Merging {len(run.foreign_roots)} {config.root_folder}/ director(ies)...")
        run.merge = merge_foreign_roots(canonical_root, run.foreign_roots, dry_run=dry_run, output=output)
    else:
        output(f"\nStep 3: No other {config.root_folder}/ directories to merge.")

    output("\nStep 4: Scanning for files to organize...")
    run.organize = organize_files(root, dry_run=dry_run, config=config, output=output)

    output("\n=== Summary ===")
    if dry_run:
        planned = len(run.merge.actions) + len(run.organize.actions)
        output(f"[DRY RUN] Would move {planned} file(s)")
        output("Run without --dry-run to apply changes.")
    else:
        output(f"Merged: {run.merge.success_count} file(s)")
        output(f"Moved: {run.organize.success_count} file(s)")
        output(f"Errors: {run.error_count}")

    return run
