"""
Pytest fixtures for extorg tests.

Provides reusable test fixtures for creating temporary directory trees,
test files, and a small substitute category table.
"""

import pytest
from pathlib import Path

from extorg.config import Config


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary scan root for testing (resolved, absolute)."""
    return tmp_path.resolve()


@pytest.fixture
def test_config() -> Config:
    """A small table: three categories, one extension claimed twice."""
    return Config(
        extensions=[
            (".png", "images"),
            (".jpg", "images"),
            (".txt", "notes"),
            (".canvas", "drafts"),
            (".canvas", "boards"),
        ],
    )


@pytest.fixture
def sample_files(temp_dir: Path) -> dict:
    """
    Create loose files at the top level and one level down.

    Returns a dict mapping category (or None for unmapped) to created files.
    """
    files = {"images": [], "documents": [], "plaintext_files": [], None: []}

    nested = temp_dir / "projects" / "old"
    nested.mkdir(parents=True)

    for path, category in [
        (temp_dir / "photo.jpg", "images"),
        (temp_dir / "Screenshot.PNG", "images"),
        (nested / "diagram.svg", "images"),
        (temp_dir / "report.pdf", "documents"),
        (nested / "notes.txt", "plaintext_files"),
        (temp_dir / "setup.exe", None),
        (temp_dir / "Makefile", None),
    ]:
        path.write_text(f"content of {path.name}")
        files[category].append(path)

    return files


@pytest.fixture
def foreign_tree(temp_dir: Path) -> Path:
    """
    Create a foreign assets/ folder two levels down.

    Layout:
        old/project/assets/images/a.png
        old/project/assets/images/nested/b.png
        old/project/assets/sounds/c.mp3
        old/project/assets/stray.md
    """
    foreign = temp_dir / "old" / "project" / "assets"
    (foreign / "images" / "nested").mkdir(parents=True)
    (foreign / "sounds").mkdir()

    (foreign / "images" / "a.png").write_text("foreign a")
    (foreign / "images" / "nested" / "b.png").write_text("foreign b")
    (foreign / "sounds" / "c.mp3").write_text("foreign c")
    (foreign / "stray.md").write_text("foreign stray")

    return foreign


@pytest.fixture
def capture_output() -> list:
    """Create a list to capture output from operations."""
    return []


@pytest.fixture
def output_callback(capture_output: list):
    """Create an output callback that captures messages."""
    def callback(message: str) -> None:
        capture_output.append(message)
    return callback
