"""
Unit tests for extorg.config module.

Tests the category table semantics.
"""

import dataclasses

from extorg.config import Config, DEFAULT_CONFIG, DEFAULT_EXTENSIONS


class TestCategoryTable:
    """Tests for extension lookup."""

    def test_lookup_is_case_insensitive(self):
        config = Config()
        assert config.get_category(".PNG") == "images"
        assert config.get_category(".Jpeg") == "images"
        assert config.get_category(".md") == "markdown_files"

    def test_unmapped_extension_returns_none(self):
        config = Config()
        assert config.get_category(".exe") is None
        assert config.get_category(".tar") is None

    def test_empty_extension_returns_none(self):
        assert Config().get_category("") is None

    def test_last_registration_wins(self):
        config = Config()
        assert config.get_category(".canvas") == "obsidian_canvae"

    def test_last_registration_wins_custom_table(self, test_config: Config):
        assert test_config.get_category(".canvas") == "boards"

    def test_extension_map_is_a_copy(self):
        config = Config()
        config.extension_map[".exe"] = "programs"
        assert config.get_category(".exe") is None


class TestCategoryNames:
    """Tests for the category directory list."""

    def test_default_categories(self):
        assert DEFAULT_CONFIG.category_names == [
            "animation",
            "canvae",
            "datasets",
            "documents",
            "emacs_org_files",
            "html_pages",
            "images",
            "json",
            "markdown_files",
            "obsidian_canvae",
            "plaintext_files",
            "sounds",
            "video",
            "xcalidrawings",
        ]

    def test_overridden_category_still_listed(self, test_config: Config):
        # "drafts" lost its only extension but keeps its directory
        assert test_config.category_names == ["boards", "drafts", "images", "notes"]

    def test_default_table_is_not_shared(self):
        config = Config()
        config.extensions.append((".exe", "programs"))
        assert (".exe", "programs") not in DEFAULT_EXTENSIONS


class TestConfigOptions:
    """Tests for the remaining settings."""

    def test_defaults(self):
        config = Config()
        assert config.root_folder == "assets"
        assert config.skip_unreadable_dirs is True
        assert config.skip_hidden is False

    def test_is_root_name_is_exact(self):
        config = Config()
        assert config.is_root_name("assets")
        assert not config.is_root_name("Assets")
        assert not config.is_root_name("assets_old")

    def test_is_hidden(self):
        config = Config()
        assert config.is_hidden(".git")
        assert not config.is_hidden("git")

    def test_replace_rebuilds_table(self, test_config: Config):
        replaced = dataclasses.replace(test_config, skip_hidden=True)
        assert replaced.skip_hidden is True
        assert replaced.get_category(".canvas") == "boards"
