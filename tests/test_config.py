"""Tests for configuration loading."""

from pathlib import Path

import pytest

from comment_studio.config import (
    DEFAULT_MAX_LINE_LENGTH,
    ConfigError,
    ReflowConfig,
    find_pyproject,
    load_settings,
    parse_custom_tags,
    settings_from_mapping,
)


def write_pyproject(directory: Path, content: str) -> Path:
    path = directory / "pyproject.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestReflowConfig:
    """Tests for reflow configuration."""

    def test_defaults(self):
        """Test default values."""
        config = ReflowConfig()

        assert config.max_line_length == DEFAULT_MAX_LINE_LENGTH == 120
        assert config.use_compact_style
        assert config.preserve_blank_lines

    def test_rejects_non_integer(self):
        """Test widths must be integers."""
        with pytest.raises(ConfigError):
            ReflowConfig(max_line_length="80")
        with pytest.raises(ConfigError):
            ReflowConfig(max_line_length=True)


class TestLoadSettings:
    """Tests for reading pyproject.toml."""

    def test_tool_table(self, tmp_path: Path):
        """Test all keys are read."""
        pyproject = write_pyproject(tmp_path, """
[tool.comment-studio]
max-line-length = 80
compact-style = false
preserve-blank-lines = false
custom-tags = ["PERF", "SECURITY"]
""")

        settings = load_settings(tmp_path)

        assert settings.reflow == ReflowConfig(80, False, False)
        assert settings.custom_tags == ("PERF", "SECURITY")
        assert settings.source == pyproject.resolve()

    def test_found_from_subdirectory(self, tmp_path: Path):
        """Test the search walks up the tree."""
        write_pyproject(tmp_path, "[tool.comment-studio]\nmax-line-length = 100\n")
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)

        assert load_settings(nested).reflow.max_line_length == 100
        assert find_pyproject(nested) == (tmp_path / "pyproject.toml").resolve()

    def test_missing_table(self, tmp_path: Path):
        """Test defaults when the tool table is absent."""
        write_pyproject(tmp_path, "[project]\nname = \"demo\"\n")

        settings = load_settings(tmp_path)

        assert settings.reflow == ReflowConfig()
        assert settings.custom_tags == ()
        assert settings.source is None

    def test_invalid_toml(self, tmp_path: Path):
        """Test broken TOML raises ConfigError."""
        write_pyproject(tmp_path, "[tool.comment-studio\n")

        with pytest.raises(ConfigError):
            load_settings(tmp_path)

    def test_invalid_width(self, tmp_path: Path):
        """Test a zero width raises ConfigError."""
        write_pyproject(tmp_path, "[tool.comment-studio]\nmax-line-length = 0\n")

        with pytest.raises(ConfigError):
            load_settings(tmp_path)

    def test_invalid_flag(self):
        """Test flags must be booleans."""
        with pytest.raises(ConfigError):
            settings_from_mapping({"compact-style": "yes"})


class TestParseCustomTags:
    """Tests for custom tag values."""

    def test_comma_string(self):
        """Test a comma-separated string."""
        assert parse_custom_tags("PERF, SECURITY ,") == ("PERF", "SECURITY")

    def test_duplicates_removed(self):
        """Test case-insensitive duplicates."""
        assert parse_custom_tags(["PERF", "perf", " SEC "]) == ("PERF", "SEC")

    def test_none(self):
        """Test a missing value."""
        assert parse_custom_tags(None) == ()

    def test_wrong_type(self):
        """Test other types are rejected."""
        with pytest.raises(ConfigError):
            parse_custom_tags(42)
