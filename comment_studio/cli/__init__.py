"""
CLI Layer - 命令行接口层

提供 reflow、tags、links 与 version 命令。
"""

from comment_studio.cli.app import app, reflow, tags, links, version

__all__ = [
    "app",
    "reflow",
    "tags",
    "links",
    "version",
]
