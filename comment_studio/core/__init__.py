"""
Core Layer - 核心层

包含注释风格表、文档注释扫描器、XML 结构模型和重排引擎。
"""

from comment_studio.core.styles import (
    CommentStyle,
    get_style,
    style_for_path,
    is_comment_line,
)
from comment_studio.core.scanner import (
    CommentBlock,
    split_lines,
    find_all_blocks,
    find_block_at_position,
    find_blocks_in_range,
)
from comment_studio.core.xml_model import (
    TextNode,
    ElementNode,
    BlankLineNode,
    XmlNode,
    parse_text,
    serialize,
)
from comment_studio.core.reflow import (
    ReflowEngine,
    reflow,
)

__all__ = [
    # styles
    "CommentStyle",
    "get_style",
    "style_for_path",
    "is_comment_line",
    # scanner
    "CommentBlock",
    "split_lines",
    "find_all_blocks",
    "find_block_at_position",
    "find_blocks_in_range",
    # xml_model
    "TextNode",
    "ElementNode",
    "BlankLineNode",
    "XmlNode",
    "parse_text",
    "serialize",
    # reflow
    "ReflowEngine",
    "reflow",
]
