"""
Filters - 源文件过滤

基于 pathspec 的 .gitignore 过滤。
"""

from comment_studio.filters.pathspec_filter import (
    PathspecFilter,
    DEFAULT_IGNORE_PATTERNS,
)

__all__ = [
    "PathspecFilter",
    "DEFAULT_IGNORE_PATTERNS",
]
