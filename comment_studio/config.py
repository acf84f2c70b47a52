"""
配置模块 - 重排参数与项目设置

设置来源（优先级从高到低）：
1. 命令行选项
2. pyproject.toml 中的 [tool.comment-studio] 表
3. 默认值
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

# Handle tomllib/tomli for different Python versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


# ============================================================
# 配置常量
# ============================================================

DEFAULT_MAX_LINE_LENGTH = 120

TOOL_TABLE = "comment-studio"


class ConfigError(ValueError):
    """配置错误（调用方违反约定，如非正的最大行宽）"""
    pass


@dataclass(frozen=True)
class ReflowConfig:
    """
    重排配置

    Attributes:
        max_line_length: 最大行宽（包含缩进和注释标记），必须 >= 1
        use_compact_style: 短元素是否折叠为单行
        preserve_blank_lines: 是否保留段落之间的空行
    """
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    use_compact_style: bool = True
    preserve_blank_lines: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_line_length, bool) or not isinstance(self.max_line_length, int):
            raise ConfigError(f"max_line_length must be an integer, got {self.max_line_length!r}")
        if self.max_line_length < 1:
            raise ConfigError(f"max_line_length must be >= 1, got {self.max_line_length}")


@dataclass
class Settings:
    """
    项目设置

    Attributes:
        reflow: 重排配置
        custom_tags: 自定义标签（追加到内置标签之后）
        source: 读取设置的 pyproject.toml 路径，未找到时为 None
    """
    reflow: ReflowConfig = field(default_factory=ReflowConfig)
    custom_tags: tuple[str, ...] = ()
    source: Optional[Path] = None


def parse_custom_tags(value: Any) -> tuple[str, ...]:
    """
    解析自定义标签

    接受逗号分隔的字符串或字符串列表，去除空白与重复（忽略大小写）。
    """
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        raise ConfigError(f"custom-tags must be a string or a list, got {type(value).__name__}")

    tags: list[str] = []
    seen: set[str] = set()
    for item in items:
        tag = item.strip()
        if tag and tag.upper() not in seen:
            seen.add(tag.upper())
            tags.append(tag)
    return tuple(tags)


def find_pyproject(start_dir: Path) -> Optional[Path]:
    """从 start_dir 向上查找 pyproject.toml"""
    current = start_dir.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def settings_from_mapping(table: dict[str, Any], source: Optional[Path] = None) -> Settings:
    """
    从 [tool.comment-studio] 表构造设置

    Raises:
        ConfigError: 值的类型或范围不合法
    """
    def _flag(key: str, default: bool) -> bool:
        value = table.get(key, default)
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be a boolean, got {value!r}")
        return value

    reflow = ReflowConfig(
        max_line_length=table.get("max-line-length", DEFAULT_MAX_LINE_LENGTH),
        use_compact_style=_flag("compact-style", True),
        preserve_blank_lines=_flag("preserve-blank-lines", True),
    )
    return Settings(
        reflow=reflow,
        custom_tags=parse_custom_tags(table.get("custom-tags")),
        source=source,
    )


def load_settings(start_dir: Path) -> Settings:
    """
    加载项目设置

    Args:
        start_dir: 开始向上查找 pyproject.toml 的目录

    Returns:
        Settings 对象；未找到配置时返回默认设置

    Raises:
        ConfigError: pyproject.toml 无法解析或值不合法
    """
    pyproject = find_pyproject(start_dir)
    if pyproject is None:
        return Settings()

    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject}: {e}") from e

    table = data.get("tool", {}).get(TOOL_TABLE)
    if table is None:
        return Settings()

    logger.debug("Loaded settings from %s", pyproject)
    return settings_from_mapping(table, source=pyproject)
