"""
Anchors - 注释中的引用与标签

- links: LINK: 文件/行号/锚点引用
- tags: TODO、HACK、ANCHOR 等标签及其元数据
- index: 在源文件中收集标签
- resolver: 把 LINK 路径解析为磁盘上的文件
"""

from comment_studio.anchors.links import LinkAnchorInfo
from comment_studio.anchors.tags import TagMatch, BUILTIN_TAGS
from comment_studio.anchors.index import AnchorItem, scan_text, scan_lines
from comment_studio.anchors.resolver import resolve_link_path

__all__ = [
    "LinkAnchorInfo",
    "TagMatch",
    "BUILTIN_TAGS",
    "AnchorItem",
    "scan_text",
    "scan_lines",
    "resolve_link_path",
]
