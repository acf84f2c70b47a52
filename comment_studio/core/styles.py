"""
注释风格目录 - 各语言的文档注释分隔符

每种受支持的语言对应一个不可变的 CommentStyle：
单行文档注释标记（如 ///、'''）以及可选的块注释分隔符（如 /** */）。
"""

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional


@dataclass(frozen=True)
class CommentStyle:
    """
    文档注释风格

    Attributes:
        language_id: 内容类型名称（如 CSharp, Basic, C/C++）
        line_marker: 单行文档注释前缀（如 ///）
        block_open: 块文档注释起始（如 /**），不支持时为 None
        block_close: 块文档注释结束（如 */）
        block_continuation: 块注释续行前缀（如 " * "）
    """
    language_id: str
    line_marker: str
    block_open: Optional[str] = None
    block_close: Optional[str] = None
    block_continuation: Optional[str] = None

    @property
    def supports_block_doc(self) -> bool:
        """是否支持 /** */ 形式的块文档注释"""
        return bool(self.block_open and self.block_close)


# ============================================================
# 内置风格
# ============================================================

CSHARP = CommentStyle("CSharp", "///", "/**", "*/", " * ")
VISUAL_BASIC = CommentStyle("Basic", "'''")
CPP = CommentStyle("C/C++", "///", "/**", "*/", " * ")
FSHARP = CommentStyle("F#", "///")
TYPESCRIPT = CommentStyle("TypeScript", "///")
JAVASCRIPT = CommentStyle("JavaScript", "///")

ALL_STYLES: tuple[CommentStyle, ...] = (
    CSHARP,
    VISUAL_BASIC,
    CPP,
    FSHARP,
    TYPESCRIPT,
    JAVASCRIPT,
)

# 内容类型别名（小写子串匹配，按顺序检查）
CONTENT_TYPE_ALIASES: list[tuple[tuple[str, ...], CommentStyle]] = [
    (("csharp",), CSHARP),
    (("basic",), VISUAL_BASIC),
    (("c/c++", "c++"), CPP),
    (("f#", "fsharp"), FSHARP),
    (("typescript",), TYPESCRIPT),
    (("javascript",), JAVASCRIPT),
]

# 文件扩展名到风格的映射
EXTENSION_TO_STYLE: dict[str, CommentStyle] = {
    ".cs": CSHARP,
    ".csx": CSHARP,
    ".vb": VISUAL_BASIC,
    ".c": CPP,
    ".cc": CPP,
    ".cpp": CPP,
    ".cxx": CPP,
    ".h": CPP,
    ".hh": CPP,
    ".hpp": CPP,
    ".hxx": CPP,
    ".fs": FSHARP,
    ".fsi": FSHARP,
    ".fsx": FSHARP,
    ".ts": TYPESCRIPT,
    ".tsx": TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".js": JAVASCRIPT,
    ".jsx": JAVASCRIPT,
    ".mjs": JAVASCRIPT,
    ".cjs": JAVASCRIPT,
}

# 匹配任意语言的注释行前缀: //, /*, *, '
COMMENT_LINE_PATTERN = re.compile(r"^\s*(//|/\*|\*|')")


def get_style(language_id: Optional[str]) -> Optional[CommentStyle]:
    """
    根据内容类型名称获取注释风格

    Args:
        language_id: 内容类型名称（如 "CSharp", "Basic", "C/C++", "F#"）

    Returns:
        匹配的 CommentStyle，不支持时返回 None
    """
    if not language_id:
        return None

    lowered = language_id.lower()
    for aliases, style in CONTENT_TYPE_ALIASES:
        if any(alias in lowered for alias in aliases):
            return style
    return None


def style_for_path(path: str | PurePath) -> Optional[CommentStyle]:
    """根据文件扩展名获取注释风格"""
    suffix = PurePath(path).suffix.lower()
    return EXTENSION_TO_STYLE.get(suffix)


def is_comment_line(text: Optional[str]) -> bool:
    """判断一行文本是否以注释前缀开头"""
    return bool(text) and COMMENT_LINE_PATTERN.match(text) is not None
