"""
文档注释块扫描器

在有序行序列中查找连续的文档注释块：
1. 单行风格：连续以 ///（或 '''）开头的行合并为一个块
2. 块风格：/** ... */ 包围的行构成一个块

任何不参与的行（空行或代码）都会终止当前块。
扫描是纯函数，不修改输入，也不会抛出异常。
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from comment_studio.core.styles import CommentStyle

logger = logging.getLogger(__name__)

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class CommentBlock:
    """
    文档注释块

    Attributes:
        start_line: 起始行号 (0-based)
        end_line: 结束行号 (0-based, 包含)
        raw_lines: 块内原始行文本
        style: 块所属的注释风格
        indentation: 首行注释前缀之前的缩进
        is_block_style: 是否为 /** */ 块风格
        start_offset: 块在文本中的起始字符偏移
        end_offset: 块在文本中的结束字符偏移（不含换行）
    """
    start_line: int
    end_line: int
    raw_lines: tuple[str, ...]
    style: CommentStyle
    indentation: str = ""
    is_block_style: bool = False
    start_offset: int = 0
    end_offset: int = 0

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    @property
    def body_lines(self) -> list[str]:
        """去掉注释标记后的内容行（用于 XML 解析）"""
        if self.is_block_style:
            return _block_body_lines(self.raw_lines, self.style)
        return [_strip_line_marker(line, self.style.line_marker) for line in self.raw_lines]

    @property
    def body(self) -> str:
        """去掉注释标记后的完整内容，以换行连接"""
        return "\n".join(self.body_lines)

    @property
    def trailing_text(self) -> str:
        """块风格结束标记之后同一行的剩余文本（如 "*/ int X;" 中的 " int X;"）"""
        if not self.is_block_style:
            return ""
        last = self.raw_lines[-1]
        search_from = 0
        if self.line_count == 1:
            search_from = last.find(self.style.block_open) + len(self.style.block_open)
        close_index = last.find(self.style.block_close, search_from)
        if close_index < 0:
            return ""
        return last[close_index + len(self.style.block_close):].rstrip()

    def contains_offset(self, offset: int) -> bool:
        return self.start_offset <= offset <= self.end_offset


def split_lines(text: str) -> list[str]:
    """按 \\r\\n、\\r、\\n 拆分文本为行序列"""
    return LINE_BREAK_PATTERN.split(text)


def find_all_blocks(
    lines: Sequence[str],
    style: Optional[CommentStyle],
) -> list[CommentBlock]:
    """
    查找所有文档注释块

    Args:
        lines: 有序行序列
        style: 注释风格，None 表示不支持的语言

    Returns:
        按位置排序的 CommentBlock 列表
    """
    if style is None:
        return []

    offsets = _line_offsets(lines)
    blocks: list[CommentBlock] = []
    current = 0

    while current < len(lines):
        block = _block_at(lines, current, style, offsets)
        if block is not None:
            blocks.append(block)
            current = block.end_line + 1
        else:
            current += 1

    return blocks


def find_block_at_position(
    lines: Sequence[str],
    offset: int,
    style: Optional[CommentStyle],
) -> Optional[CommentBlock]:
    """
    查找包含给定字符偏移的文档注释块

    Args:
        lines: 有序行序列
        offset: 在 "\\n".join(lines) 中的字符偏移
        style: 注释风格

    Returns:
        包含该位置的 CommentBlock，没有则返回 None
    """
    if style is None or not lines:
        return None

    offsets = _line_offsets(lines)
    total_length = offsets[-1] + len(lines[-1])
    if offset < 0 or offset > total_length:
        return None

    for block in find_all_blocks(lines, style):
        if block.contains_offset(offset):
            return block
        if block.start_offset > offset:
            break
    return None


def find_blocks_in_range(
    lines: Sequence[str],
    start_offset: int,
    end_offset: int,
    style: Optional[CommentStyle],
) -> list[CommentBlock]:
    """查找与 [start_offset, end_offset] 区间相交的所有文档注释块"""
    if style is None or not lines or end_offset < start_offset:
        return []

    return [
        block for block in find_all_blocks(lines, style)
        if block.start_offset <= end_offset and block.end_offset >= start_offset
    ]


# ============================================================
# 内部实现
# ============================================================

def _line_offsets(lines: Sequence[str]) -> list[int]:
    """计算每行在 "\\n".join(lines) 中的起始偏移"""
    offsets = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line) + 1
    return offsets


def _leading_whitespace(text: str) -> str:
    return text[:len(text) - len(text.lstrip())]


def _block_at(
    lines: Sequence[str],
    start: int,
    style: CommentStyle,
    offsets: list[int],
) -> Optional[CommentBlock]:
    """尝试从 start 行开始解析一个注释块"""
    first = lines[start]
    trimmed = first.lstrip()

    if trimmed.startswith(style.line_marker):
        end = start
        while end + 1 < len(lines) and lines[end + 1].lstrip().startswith(style.line_marker):
            end += 1
        return _make_block(lines, start, end, style, offsets, is_block_style=False)

    if style.supports_block_doc and trimmed.startswith(style.block_open):
        # /**/ 是空的普通注释，不是文档注释
        if trimmed.startswith(style.block_open + "/"):
            return None

        if style.block_close in trimmed[len(style.block_open):]:
            return _make_block(lines, start, start, style, offsets, is_block_style=True)

        for end in range(start + 1, len(lines)):
            if style.block_close in lines[end]:
                return _make_block(lines, start, end, style, offsets, is_block_style=True)

        logger.debug("Unterminated %s at line %d, skipped", style.block_open, start + 1)

    return None


def _make_block(
    lines: Sequence[str],
    start: int,
    end: int,
    style: CommentStyle,
    offsets: list[int],
    is_block_style: bool,
) -> CommentBlock:
    return CommentBlock(
        start_line=start,
        end_line=end,
        raw_lines=tuple(lines[start:end + 1]),
        style=style,
        indentation=_leading_whitespace(lines[start]),
        is_block_style=is_block_style,
        start_offset=offsets[start],
        end_offset=offsets[end] + len(lines[end]),
    )


def _strip_line_marker(line: str, marker: str) -> str:
    """去掉单行注释标记及其后的一个空格"""
    content = line.lstrip()[len(marker):]
    if content.startswith(" "):
        content = content[1:]
    return content.rstrip()


def _strip_continuation(line: str) -> str:
    """去掉块注释续行前缀（"* "、" *"、"*"）"""
    trimmed = line.lstrip()
    if trimmed.startswith("*"):
        trimmed = trimmed[1:]
        if trimmed.startswith(" "):
            trimmed = trimmed[1:]
        return trimmed
    return line


def _block_body_lines(raw_lines: Sequence[str], style: CommentStyle) -> list[str]:
    """提取 /** ... */ 块的内容行"""
    opening = raw_lines[0].lstrip()[len(style.block_open):]

    if len(raw_lines) == 1:
        close_index = opening.find(style.block_close)
        return [opening[:close_index].strip()] if close_index >= 0 else [opening.strip()]

    body: list[str] = []
    if opening.strip():
        body.append(opening.strip())

    for line in raw_lines[1:-1]:
        body.append(_strip_continuation(line).rstrip())

    closing = raw_lines[-1].lstrip()
    closing = closing[:closing.find(style.block_close)]
    closing = _strip_continuation(closing).strip()
    if closing:
        body.append(closing)

    return body
