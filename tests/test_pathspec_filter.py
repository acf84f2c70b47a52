"""Tests for pathspec filtering."""

from pathlib import Path

from comment_studio.filters import PathspecFilter


class TestPathspecFilter:
    """Tests for .gitignore handling."""

    def test_root_gitignore(self, tmp_path: Path):
        """Test root patterns."""
        (tmp_path / ".gitignore").write_text("*.log\n", encoding="utf-8")

        path_filter = PathspecFilter(tmp_path)

        assert path_filter.should_ignore(tmp_path / "debug.log")
        assert not path_filter.should_ignore(tmp_path / "Program.cs")

    def test_default_excludes(self, tmp_path: Path):
        """Test build output is always skipped."""
        path_filter = PathspecFilter(tmp_path)

        assert path_filter.should_ignore(tmp_path / "bin" / "Debug" / "a.cs")
        assert path_filter.should_ignore(tmp_path / "obj" / "a.cs")
        assert path_filter.should_ignore(tmp_path / "node_modules" / "x" / "index.js")

    def test_nested_gitignore(self, tmp_path: Path):
        """Test nested patterns apply only below their directory."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / ".gitignore").write_text("secret.cs\n", encoding="utf-8")

        path_filter = PathspecFilter(tmp_path)

        assert path_filter.should_ignore(tmp_path / "sub" / "secret.cs")
        assert not path_filter.should_ignore(tmp_path / "secret.cs")

    def test_negation(self, tmp_path: Path):
        """Test ! patterns re-include files."""
        (tmp_path / ".gitignore").write_text("*.cs\n!keep.cs\n", encoding="utf-8")

        path_filter = PathspecFilter(tmp_path)

        assert path_filter.should_ignore(tmp_path / "drop.cs")
        assert not path_filter.should_ignore(tmp_path / "keep.cs")

    def test_extra_patterns(self, tmp_path: Path):
        """Test command-line patterns."""
        path_filter = PathspecFilter(tmp_path, extra_patterns=["*.gen.cs"])

        assert path_filter.should_ignore(tmp_path / "Model.gen.cs")

    def test_outside_root(self, tmp_path: Path):
        """Test paths outside the root are never ignored."""
        (tmp_path / "repo").mkdir()

        path_filter = PathspecFilter(tmp_path / "repo")

        assert not path_filter.should_ignore(tmp_path / "other.cs")

    def test_filter_paths(self, tmp_path: Path):
        """Test list filtering."""
        (tmp_path / ".gitignore").write_text("*.log\n", encoding="utf-8")
        paths = [tmp_path / "a.cs", tmp_path / "b.log"]

        assert PathspecFilter(tmp_path).filter_paths(paths) == [tmp_path / "a.cs"]
