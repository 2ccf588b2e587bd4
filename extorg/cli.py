"""
Command-line interface for the extension organizer.

Handles argument parsing, logging setup and orchestrates the run.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config, DEFAULT_CONFIG
from .operations import organize_tree


logger = logging.getLogger(__name__)


def create_parser(config: Config = DEFAULT_CONFIG) -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Args:
        config: Configuration to use for the category list in help text

    Returns:
        Configured ArgumentParser
    """
    table = config.extension_map
    category_lines = []
    for category in config.category_names:
        extensions = sorted(ext.lstrip(".") for ext, cat in table.items() if cat == category)
        category_lines.append(f"  {category:<16} - {', '.join(extensions) or '(no extensions)'}")
    categories_help = "\n".join(category_lines)

    parser = argparse.ArgumentParser(
        prog="extorg",
        description="Organize files by extension into a single categorized folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Layout:
  <root>/{config.root_folder}/<category>/

Categories:
{categories_help}

Other {config.root_folder}/ folders found anywhere in the tree are merged into
<root>/{config.root_folder}/ and removed once empty. Files with other extensions
are left where they are. Name clashes get a numeric suffix (photo_1.jpg).
        """
    )

    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Directory to organize (default: current directory)"
    )

    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Preview changes without creating, moving or removing anything"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on unreadable directories instead of skipping them"
    )

    parser.add_argument(
        "--skip-hidden",
        action="store_true",
        help="Leave dot-prefixed files and folders alone"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Write debug logging to stderr"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write debug logging to this file"
    )

    return parser


def configure_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Set up the package logger.

    Console output is handled by the operations' output callback; logging is
    for diagnostics only, so nothing is emitted unless asked for.

    Args:
        verbose: Log DEBUG and above to stderr
        log_file: Optional file that receives DEBUG and above

    Returns:
        The configured ``extorg`` logger
    """
    package_logger = logging.getLogger("extorg")
    for handler in package_logger.handlers[:]:
        handler.close()
        package_logger.removeHandler(handler)
    package_logger.propagate = False
    package_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(logging.DEBUG)
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    return package_logger


def run(
    args: argparse.Namespace,
    config: Config = DEFAULT_CONFIG,
) -> int:
    """
    Run the organizer with the given arguments.

    Per-file failures are reported in the summary and still exit 0; only a
    failure to set up the layout or walk the tree exits 1.

    Args:
        args: Parsed command-line arguments
        config: Configuration to use

    Returns:
        Exit code (0 for success, 1 for error)
    """
    directory = Path(args.root).expanduser().resolve()

    if not directory.is_dir():
        print(f"Error: '{directory}' is not a valid directory", file=sys.stderr)
        return 1

    configure_logging(
        verbose=args.verbose,
        log_file=Path(args.log_file).expanduser() if args.log_file else None,
    )

    if args.strict:
        config = dataclasses.replace(config, skip_unreadable_dirs=False)
    if args.skip_hidden:
        config = dataclasses.replace(config, skip_hidden=True)

    print("=== extorg - Extension-based File Organizer ===\n")

    try:
        result = organize_tree(directory, dry_run=args.dry_run, config=config)
    except (OSError, ValueError) as e:
        logger.error("Run aborted: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.error_count:
        logger.warning("Finished with %d error(s)", result.error_count)
    print("\nDone!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    config = DEFAULT_CONFIG
    parser = create_parser(config)
    args = parser.parse_args(argv)
    return run(args, config)


if __name__ == "__main__":
    sys.exit(main())
