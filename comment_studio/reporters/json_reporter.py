"""
JSON 报告器 - 输出 JSON 格式的标签列表
"""

import sys
from typing import TextIO

from comment_studio.anchors.index import AnchorItem
from comment_studio.reporters.exporter import export_anchors


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report(self, items: list[AnchorItem], target: str) -> None:
        """生成 JSON 格式报告"""
        print(export_anchors(items, "json", target=target), end="", file=self.output)
