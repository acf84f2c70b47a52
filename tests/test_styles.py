"""Tests for comment styles."""

from pathlib import Path

from comment_studio.core.styles import (
    CSHARP,
    CPP,
    FSHARP,
    VISUAL_BASIC,
    get_style,
    is_comment_line,
    style_for_path,
)


class TestGetStyle:
    """Tests for content type lookup."""

    def test_csharp(self):
        """Test C# uses /// and /** */."""
        style = get_style("CSharp")
        assert style is CSHARP
        assert style.line_marker == "///"
        assert style.supports_block_doc

    def test_visual_basic(self):
        """Test VB uses ''' without block comments."""
        style = get_style("Basic")
        assert style is VISUAL_BASIC
        assert style.line_marker == "'''"
        assert not style.supports_block_doc

    def test_cpp(self):
        """Test C/C++ content type."""
        assert get_style("C/C++") is CPP

    def test_fsharp(self):
        """Test F# has no block doc comments."""
        style = get_style("F#")
        assert style is FSHARP
        assert not style.supports_block_doc

    def test_case_insensitive(self):
        """Test lookup ignores case."""
        assert get_style("csharp") is CSHARP

    def test_unsupported(self):
        """Test unknown and empty content types."""
        assert get_style("Python") is None
        assert get_style("") is None
        assert get_style(None) is None


class TestStyleForPath:
    """Tests for extension lookup."""

    def test_known_extensions(self):
        """Test common source extensions."""
        assert style_for_path("Foo.cs") is CSHARP
        assert style_for_path(Path("src/Module.vb")) is VISUAL_BASIC
        assert style_for_path("include/widget.HPP") is CPP

    def test_unknown_extension(self):
        """Test files without a doc-comment style."""
        assert style_for_path("README.md") is None
        assert style_for_path("Makefile") is None


class TestIsCommentLine:
    """Tests for comment line detection."""

    def test_comment_prefixes(self):
        """Test each comment prefix."""
        assert is_comment_line("// note")
        assert is_comment_line("    /* block")
        assert is_comment_line(" * continuation")
        assert is_comment_line("' VB comment")

    def test_code_lines(self):
        """Test code and empty lines."""
        assert not is_comment_line("var x = 1;")
        assert not is_comment_line("")
        assert not is_comment_line(None)
