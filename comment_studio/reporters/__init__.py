"""
Reporters Layer - 报告层

包含 Rich 终端报告器、JSON 报告器和多格式导出器。
"""

from comment_studio.reporters.base import Reporter
from comment_studio.reporters.rich_reporter import RichReporter
from comment_studio.reporters.json_reporter import JsonReporter
from comment_studio.reporters.exporter import (
    EXPORT_FORMATS,
    export_anchors,
    format_from_extension,
)

__all__ = [
    "Reporter",
    "RichReporter",
    "JsonReporter",
    "EXPORT_FORMATS",
    "export_anchors",
    "format_from_extension",
]
