"""
注释重排引擎 - 把文档注释重新换行到指定宽度

规则：
1. 紧凑风格：不含块级子元素、且单行形式不超过最大行宽的元素折叠为一行
2. 贪心换行：单词与行内标签是不可拆分的记号，超宽的单个记号独占一行
3. <code> 内容逐行原样复制，总是展开
4. 空行分隔符按 preserve_blank_lines 保留或丢弃
5. 结果与原文仅在行尾空白上不同时返回 None
6. 块风格结束标记后同一行的代码保留在新的结束标记之后
"""

import re
from typing import Optional

from comment_studio.config import ReflowConfig
from comment_studio.core.scanner import CommentBlock
from comment_studio.core.xml_model import (
    BlankLineNode,
    ElementNode,
    TextNode,
    XmlNode,
    parse,
    serialize,
)

WHITESPACE_SPLIT_PATTERN = re.compile(r"(\s+)")


class ReflowEngine:
    """文档注释重排器"""

    def __init__(self, config: ReflowConfig):
        self.config = config

    def reflow(self, block: CommentBlock) -> Optional[str]:
        """
        重排一个注释块

        Args:
            block: 扫描器产生的注释块

        Returns:
            替换 block 所有行的新文本（不含末尾换行）；无需修改时返回 None
        """
        nodes = parse(block)
        prefix = self._line_prefix(block)

        lines: list[str] = []
        self._render_nodes(nodes, prefix, lines)
        if not lines:
            return None

        if block.is_block_style:
            lines = (
                [block.indentation + block.style.block_open]
                + lines
                + [block.indentation + " " + block.style.block_close + block.trailing_text]
            )

        if [line.rstrip() for line in lines] == [line.rstrip() for line in block.raw_lines]:
            return None

        return "\n".join(lines)

    def _line_prefix(self, block: CommentBlock) -> str:
        """每行前缀：缩进 + 注释标记 + 一个空格"""
        if block.is_block_style:
            continuation = (block.style.block_continuation or " * ").rstrip()
            return block.indentation + continuation + " "
        return block.indentation + block.style.line_marker + " "

    # ============================================================
    # 渲染
    # ============================================================

    def _render_nodes(self, nodes: tuple[XmlNode, ...] | list[XmlNode], prefix: str, lines: list[str]) -> None:
        """渲染同一层级的节点序列"""
        paragraph: list[XmlNode] = []
        separator_pending = False
        start = len(lines)

        def emit_separator() -> None:
            nonlocal separator_pending
            if separator_pending and self.config.preserve_blank_lines and len(lines) > start:
                lines.append(prefix.rstrip())
            separator_pending = False

        def flush_paragraph() -> None:
            tokens = tokenize(paragraph)
            paragraph.clear()
            if tokens:
                emit_separator()
                lines.extend(wrap_tokens(tokens, prefix, self.config.max_line_length))

        for node in nodes:
            if isinstance(node, BlankLineNode):
                flush_paragraph()
                separator_pending = True
            elif isinstance(node, ElementNode) and not node.is_inline:
                flush_paragraph()
                emit_separator()
                self._render_element(node, prefix, lines)
            else:
                paragraph.append(node)

        flush_paragraph()

    def _render_element(self, element: ElementNode, prefix: str, lines: list[str]) -> None:
        """渲染块级元素（含 <code>）"""
        if element.self_closing:
            lines.append(prefix + element.open_tag)
            return

        if element.kind == "code":
            self._render_preformatted(element, prefix, lines)
            return

        if self.config.use_compact_style and not element.has_block_children:
            content = " ".join(tokenize(element.children))
            single_line = prefix + element.open_tag + content + element.close_tag
            if len(single_line) <= self.config.max_line_length:
                lines.append(single_line)
                return

        lines.append(prefix + element.open_tag)
        self._render_nodes(element.children, prefix, lines)
        lines.append(prefix + element.close_tag)

    def _render_preformatted(self, element: ElementNode, prefix: str, lines: list[str]) -> None:
        """<code> 内容逐行原样输出"""
        content_lines = element.text_content.split("\n")
        if content_lines and not content_lines[0].strip():
            content_lines = content_lines[1:]
        if content_lines and not content_lines[-1].strip():
            content_lines = content_lines[:-1]

        lines.append(prefix + element.open_tag)
        for content_line in content_lines:
            lines.append((prefix + content_line).rstrip() if not content_line.strip() else prefix + content_line)
        lines.append(prefix + element.close_tag)


def reflow(block: CommentBlock, config: ReflowConfig) -> Optional[str]:
    """
    重排注释块

    Args:
        block: 注释块
        config: 重排配置

    Returns:
        新文本，无需修改时返回 None
    """
    return ReflowEngine(config).reflow(block)


def tokenize(nodes: tuple[XmlNode, ...] | list[XmlNode]) -> list[str]:
    """
    把文本与行内元素切分为不可拆分的记号

    空白处断开；紧贴文本的行内标签（如 "<see cref="X"/>."）合并为一个记号。
    """
    tokens: list[str] = []
    current = ""

    for node in nodes:
        if isinstance(node, BlankLineNode):
            if current:
                tokens.append(current)
                current = ""
        elif isinstance(node, TextNode):
            for part in WHITESPACE_SPLIT_PATTERN.split(node.content):
                if not part:
                    continue
                if part.isspace():
                    if current:
                        tokens.append(current)
                        current = ""
                else:
                    current += part
        else:
            current += serialize([node])

    if current:
        tokens.append(current)
    return tokens


def wrap_tokens(tokens: list[str], prefix: str, max_line_length: int) -> list[str]:
    """
    贪心换行

    当 当前长度 + 1 + 记号长度 <= 最大行宽 时追加到当前行，否则另起一行。
    前缀自带的空格就是首个记号前的分隔空格。
    """
    lines: list[str] = []
    current = ""

    for token in tokens:
        if not current:
            current = prefix + token
        elif len(current) + 1 + len(token) <= max_line_length:
            current += " " + token
        else:
            lines.append(current)
            current = prefix + token

    if current:
        lines.append(current)
    return lines
