"""Tests for the XML doc-comment structure model."""

from comment_studio.core.scanner import find_all_blocks
from comment_studio.core.styles import CSHARP
from comment_studio.core.xml_model import (
    BlankLineNode,
    ElementNode,
    TextNode,
    classify_tag,
    parse,
    parse_text,
    serialize,
)


class TestClassifyTag:
    """Tests for tag classification."""

    def test_block_tags(self):
        """Test block-level tags."""
        for name in ["summary", "remarks", "returns", "param", "para", "list", "item"]:
            assert classify_tag(name) == "block"

    def test_inline_tags(self):
        """Test inline tags."""
        for name in ["c", "see", "seealso", "paramref", "typeparamref"]:
            assert classify_tag(name) == "inline"

    def test_code_and_generic(self):
        """Test preformatted and unknown tags."""
        assert classify_tag("code") == "code"
        assert classify_tag("b") == "generic"

    def test_case_insensitive(self):
        """Test tag names ignore case."""
        assert classify_tag("Summary") == "block"


class TestParse:
    """Tests for parsing comment content."""

    def test_empty(self):
        """Test empty content."""
        assert parse_text("") == []

    def test_simple_element(self):
        """Test a summary element with text."""
        nodes = parse_text("<summary>Gets the name.</summary>")

        assert len(nodes) == 1
        element = nodes[0]
        assert isinstance(element, ElementNode)
        assert element.tag_name == "summary"
        assert not element.is_inline
        assert element.children == (TextNode("Gets the name."),)

    def test_attributes(self):
        """Test attribute parsing."""
        element = parse_text('<param name="value">The value.</param>')[0]

        assert element.attributes == {"name": "value"}
        assert element.open_tag == '<param name="value">'
        assert element.close_tag == "</param>"

    def test_self_closing(self):
        """Test a self-closing inline element."""
        nodes = parse_text('Returns <see cref="Foo"/>.')

        assert len(nodes) == 3
        see = nodes[1]
        assert isinstance(see, ElementNode)
        assert see.self_closing
        assert see.is_inline
        assert see.attributes == {"cref": "Foo"}
        assert see.close_tag == ""

    def test_blank_line(self):
        """Test a blank line becomes a BlankLineNode."""
        element = parse_text("<summary>\nA\n\nB\n</summary>")[0]

        assert any(isinstance(child, BlankLineNode) for child in element.children)
        assert element.has_block_children

    def test_nested_block(self):
        """Test a para inside remarks."""
        element = parse_text("<remarks>Intro<para>More</para></remarks>")[0]

        assert element.has_block_children
        assert isinstance(element.children[1], ElementNode)
        assert element.children[1].tag_name == "para"

    def test_inline_children_are_not_block(self):
        """Test inline tags keep an element compactable."""
        element = parse_text("<summary>Uses <c>x</c>.</summary>")[0]

        assert not element.has_block_children

    def test_code_is_preformatted(self):
        """Test code content is kept verbatim."""
        element = parse_text("<code>\n  if (a < b) { }\n</code>")[0]

        assert element.kind == "code"
        assert element.text_content == "\n  if (a < b) { }\n"

    def test_unterminated_tag_becomes_text(self):
        """Test an unclosed tag degrades to text."""
        nodes = parse_text("<summary>Text")

        assert nodes == [TextNode("<summary>"), TextNode("Text")]

    def test_stray_close_tag_becomes_text(self):
        """Test a close tag without an opener."""
        nodes = parse_text("Text</para>")

        assert nodes == [TextNode("Text"), TextNode("</para>")]

    def test_mismatched_nesting(self):
        """Test an unclosed child inside a closed parent."""
        element = parse_text("<summary><para>x</summary>")[0]

        assert element.tag_name == "summary"
        assert element.children == (TextNode("<para>"), TextNode("x"))

    def test_case_insensitive_close(self):
        """Test mixed-case open and close tags match."""
        element = parse_text("<Summary>x</summary>")[0]

        assert isinstance(element, ElementNode)
        assert element.tag_name == "Summary"

    def test_parse_block(self):
        """Test parsing straight from a scanned block."""
        block = find_all_blocks(["/// <summary>", "/// Hi", "/// </summary>"], CSHARP)[0]

        nodes = parse(block)

        assert len(nodes) == 1
        assert nodes[0].tag_name == "summary"


class TestSerialize:
    """Tests for single-line serialization."""

    def test_whitespace_collapsed(self):
        """Test line breaks collapse to spaces."""
        nodes = parse_text("<summary>\nA  b\n</summary>")

        assert serialize(nodes) == "<summary> A b </summary>"

    def test_self_closing(self):
        """Test self-closing tags serialize once."""
        assert serialize(parse_text('<see cref="Foo" />')) == '<see cref="Foo" />'

    def test_blank_line_inside_element(self):
        """Test a blank line and its neighbouring whitespace become one space."""
        nodes = parse_text("<c>a\n\nb</c>")

        assert serialize(nodes) == "<c>a b</c>"
        assert serialize(parse_text(serialize(nodes))) == "<c>a b</c>"
