"""
Configuration for the extension organizer.

Uses a dataclass to make configuration testable and injectable.
Default values match the original tool: everything lands under ``assets/``.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


# (extension, category) registrations, in registration order.
# ".canvas" is claimed twice; the later registration wins.
DEFAULT_EXTENSIONS: List[Tuple[str, str]] = [
    (".webm", "animation"),
    (".gif", "animation"),
    (".canvas", "canvae"),
    (".csv", "datasets"),
    (".pdf", "documents"),
    (".docx", "documents"),
    (".odt", "documents"),
    (".org", "emacs_org_files"),
    (".html", "html_pages"),
    (".svg", "images"),
    (".png", "images"),
    (".jpg", "images"),
    (".jpeg", "images"),
    (".psd", "images"),
    (".json", "json"),
    (".md", "markdown_files"),
    (".canvas", "obsidian_canvae"),
    (".mp3", "sounds"),
    (".m4a", "sounds"),
    (".wav", "sounds"),
    (".txt", "plaintext_files"),
    (".mp4", "video"),
    (".mkv", "video"),
    (".excalidraw", "xcalidrawings"),
]


@dataclass
class Config:
    """
    Configuration for an organizing run.

    The extension table is an ordered list of registrations rather than a
    dict so that a duplicated extension resolves by registration order.

    Example:
        # Use defaults
        config = Config()

        # Small table for testing
        config = Config(extensions=[(".png", "images"), (".txt", "notes")])
    """

    # Name of the canonical root directory created under the scan root
    root_folder: str = "assets"

    # Extension to category registrations (last registration wins)
    extensions: List[Tuple[str, str]] = field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS)
    )

    # Skip unreadable subdirectories instead of aborting the run
    skip_unreadable_dirs: bool = True

    # Leave dot-prefixed files and directories alone
    skip_hidden: bool = False

    def __post_init__(self):
        self._extension_map: Dict[str, str] = {}
        for extension, category in self.extensions:
            self._extension_map[extension.lower()] = category

    @property
    def extension_map(self) -> Dict[str, str]:
        """Lowercased extension -> category, after last-wins resolution."""
        return dict(self._extension_map)

    @property
    def category_names(self) -> List[str]:
        """
        Every category that appears in the table, sorted.

        A category whose only extension was taken over by a later
        registration still gets a directory.
        """
        return sorted({category for _, category in self.extensions})

    def get_category(self, extension: str) -> Optional[str]:
        """
        Get the category for a file extension.

        Args:
            extension: File extension including dot (e.g., ".jpg")

        Returns:
            Category name, or None if the extension is not in the table
        """
        if not extension:
            return None
        return self._extension_map.get(extension.lower())

    def is_root_name(self, name: str) -> bool:
        """Check if a directory name matches the canonical root's name."""
        return name == self.root_folder

    def is_hidden(self, name: str) -> bool:
        """Check if a file/folder name is hidden (starts with dot)."""
        return name.startswith(".")


# Default configuration instance
DEFAULT_CONFIG = Config()
