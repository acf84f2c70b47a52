"""Tests for the command line interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from comment_studio.cli.app import app


runner = CliRunner()

EXPANDED = """/// <summary>
/// Gets the name.
/// </summary>
public string Name { get; }
"""

COMPACT = """/// <summary>Gets the name.</summary>
public string Name { get; }
"""


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestVersion:
    """Tests for the version command."""

    def test_version(self):
        """Test the version is printed."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "comment-studio" in result.output


class TestReflowCommand:
    """Tests for the reflow command."""

    def test_write(self, tmp_path: Path):
        """Test --write rewrites the file."""
        source = write(tmp_path / "Person.cs", EXPANDED)

        result = runner.invoke(app, ["reflow", str(source), "--write"])

        assert result.exit_code == 0
        assert source.read_text(encoding="utf-8") == COMPACT

    def test_dry_run_leaves_file(self, tmp_path: Path):
        """Test the default run does not write."""
        source = write(tmp_path / "Person.cs", EXPANDED)

        result = runner.invoke(app, ["reflow", str(tmp_path)])

        assert result.exit_code == 0
        assert "would be reflowed" in result.output
        assert source.read_text(encoding="utf-8") == EXPANDED

    def test_check_fails_on_changes(self, tmp_path: Path):
        """Test --check exits with 1."""
        write(tmp_path / "Person.cs", EXPANDED)

        result = runner.invoke(app, ["reflow", str(tmp_path), "--check"])

        assert result.exit_code == 1

    def test_already_formatted(self, tmp_path: Path):
        """Test nothing to do."""
        write(tmp_path / "Person.cs", COMPACT)

        result = runner.invoke(app, ["reflow", str(tmp_path), "--check"])

        assert result.exit_code == 0
        assert "already formatted" in result.output

    def test_no_compact_option(self, tmp_path: Path):
        """Test --no-compact expands short elements."""
        source = write(tmp_path / "Person.cs", COMPACT)

        result = runner.invoke(app, ["reflow", str(source), "--write", "--no-compact"])

        assert result.exit_code == 0
        assert source.read_text(encoding="utf-8") == EXPANDED

    def test_pyproject_settings(self, tmp_path: Path):
        """Test settings come from pyproject.toml."""
        write(tmp_path / "pyproject.toml", "[tool.comment-studio]\ncompact-style = false\n")
        source = write(tmp_path / "src" / "Person.cs", COMPACT)

        result = runner.invoke(app, ["reflow", str(tmp_path / "src"), "--write"])

        assert result.exit_code == 0
        assert source.read_text(encoding="utf-8") == EXPANDED

    def test_invalid_width(self, tmp_path: Path):
        """Test a zero width is rejected."""
        write(tmp_path / "Person.cs", EXPANDED)

        result = runner.invoke(app, ["reflow", str(tmp_path), "-l", "0"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_path(self, tmp_path: Path):
        """Test a path that does not exist."""
        result = runner.invoke(app, ["reflow", str(tmp_path / "nope")])

        assert result.exit_code == 1
        assert "does not exist" in result.output


class TestTagsCommand:
    """Tests for the tags command."""

    def test_rich_output(self, tmp_path: Path):
        """Test the default table."""
        write(tmp_path / "a.cs", "// TODO(@me): fix it\n")

        result = runner.invoke(app, ["tags", str(tmp_path)])

        assert result.exit_code == 0
        assert "TODO" in result.output
        assert "1 anchor found" in result.output

    def test_csv_output(self, tmp_path: Path):
        """Test CSV on stdout."""
        write(tmp_path / "a.cs", "// TODO: fix it\n")

        result = runner.invoke(app, ["tags", str(tmp_path), "--format", "csv"])

        assert result.exit_code == 0
        assert result.output.startswith("Type,Message,File")
        assert "fix it" in result.output

    def test_json_output(self, tmp_path: Path):
        """Test JSON on stdout."""
        write(tmp_path / "a.cs", "// HACK: quick fix\n")

        result = runner.invoke(app, ["tags", str(tmp_path), "-f", "json"])

        data = json.loads(result.output)
        assert data["count"] == 1
        assert data["anchors"][0]["type"] == "HACK"

    def test_export_to_file(self, tmp_path: Path):
        """Test the format follows the output extension."""
        write(tmp_path / "src" / "a.cs", "// NOTE: remember\n")
        output = tmp_path / "anchors.md"

        result = runner.invoke(app, ["tags", str(tmp_path / "src"), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").startswith("# Code Anchors")

    def test_custom_tag_option(self, tmp_path: Path):
        """Test --tag adds a tag."""
        write(tmp_path / "a.cs", "// PERF: slow\n")

        result = runner.invoke(app, ["tags", str(tmp_path), "--tag", "PERF", "-f", "tsv"])

        assert result.exit_code == 0
        assert "PERF\tslow" in result.output

    def test_unknown_format(self, tmp_path: Path):
        """Test an unsupported format."""
        result = runner.invoke(app, ["tags", str(tmp_path), "-f", "xml"])

        assert result.exit_code == 1


class TestLinksCommand:
    """Tests for the links command."""

    def test_unresolved_is_warning(self, tmp_path: Path):
        """Test a missing target warns without failing."""
        write(tmp_path / "Other.cs", "")
        write(tmp_path / "a.cs", "// LINK: ./Other.cs\n// LINK: ./missing.cs\n")

        result = runner.invoke(app, ["links", str(tmp_path)])

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert "missing.cs" in result.output

    def test_strict(self, tmp_path: Path):
        """Test --strict fails on missing targets."""
        write(tmp_path / "a.cs", "// LINK: ./missing.cs\n")

        result = runner.invoke(app, ["links", str(tmp_path), "--strict"])

        assert result.exit_code == 1

    def test_all_resolved(self, tmp_path: Path):
        """Test no warnings when every target exists."""
        write(tmp_path / "Other.cs", "")
        write(tmp_path / "a.cs", "// LINK: ./Other.cs\n// LINK: #local\n")

        result = runner.invoke(app, ["links", str(tmp_path), "--strict"])

        assert result.exit_code == 0
        assert "Warning" not in result.output

    def test_no_links(self, tmp_path: Path):
        """Test a tree without links."""
        write(tmp_path / "a.cs", "int x;\n")

        result = runner.invoke(app, ["links", str(tmp_path)])

        assert result.exit_code == 0
        assert "No LINK references" in result.output
