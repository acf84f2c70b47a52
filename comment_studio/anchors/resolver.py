"""
链接路径解析器 - 把 LINK 引用解析为磁盘上的文件

前缀规则：
- ./、../ 或无前缀：相对于当前文件所在目录
- / 与 ~/：相对于根目录
- @/：相对于最近的项目目录（含 pyproject.toml、package.json 或 *.csproj）
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os

from comment_studio.anchors.links import LinkAnchorInfo, split_path_prefix


# ============================================================
# 配置常量
# ============================================================

# 标记项目目录的文件
PROJECT_MARKERS = ["pyproject.toml", "package.json"]
PROJECT_MARKER_GLOBS = ["*.csproj", "*.vbproj", "*.fsproj", "*.vcxproj"]


# ============================================================
# 数据模型
# ============================================================

@dataclass
class ResolvedLink:
    """
    解析后的链接

    Attributes:
        link: 原始 LINK 引用
        path: 解析出的文件路径（本地锚点为 None）
        exists: 目标文件是否存在
    """
    link: LinkAnchorInfo
    path: Optional[Path] = None
    exists: bool = False


# ============================================================
# 解析函数
# ============================================================

def find_project_dir(start: Path, root: Path) -> Path:
    """
    向上查找最近的项目目录

    Args:
        start: 开始查找的目录
        root: 查找的上界，也是找不到时的回退值

    Returns:
        项目目录路径
    """
    root = root.resolve()
    current = start.resolve()

    while True:
        if any((current / marker).is_file() for marker in PROJECT_MARKERS):
            return current
        if any(True for pattern in PROJECT_MARKER_GLOBS for _ in current.glob(pattern)):
            return current
        if current == root or current.parent == current:
            return root
        current = current.parent


def resolve_link_path(
    link: LinkAnchorInfo,
    source_file: Path,
    root: Path,
) -> Optional[Path]:
    """
    解析 LINK 引用指向的文件

    Args:
        link: LINK 引用
        source_file: 包含该引用的文件
        root: 解决方案/仓库根目录

    Returns:
        规范化后的目标路径；本地锚点返回 None
    """
    if link.file_path is None:
        return None

    prefix, remainder = split_path_prefix(link.file_path.replace("\\", "/"))
    source_dir = source_file.resolve().parent

    if prefix in ("/", "~/"):
        base = root.resolve()
        relative = remainder
    elif prefix == "@/":
        base = find_project_dir(source_dir, root)
        relative = remainder
    else:
        base = source_dir
        relative = link.file_path.replace("\\", "/")

    return Path(os.path.normpath(base / relative))


def resolve_link(link: LinkAnchorInfo, source_file: Path, root: Path) -> ResolvedLink:
    """解析链接并检查目标是否存在"""
    path = resolve_link_path(link, source_file, root)
    return ResolvedLink(link=link, path=path, exists=path is not None and path.is_file())
