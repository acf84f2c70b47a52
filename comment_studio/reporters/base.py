"""
报告器基类 - 定义报告器接口
"""

from typing import Protocol

from comment_studio.anchors.index import AnchorItem


class Reporter(Protocol):
    """报告器协议"""

    def report(self, items: list[AnchorItem], target: str) -> None:
        """生成报告"""
        ...
