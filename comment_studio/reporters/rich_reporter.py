"""
Rich 终端报告器 - 使用 Rich 库按标签分组输出彩色表格
"""

from collections import Counter

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from comment_studio.anchors.index import AnchorItem
from comment_studio.anchors.resolver import ResolvedLink
from comment_studio.anchors.tags import BUILTIN_TAGS


# 标签颜色
TAG_STYLES = {
    "TODO": "cyan",
    "HACK": "magenta",
    "NOTE": "green",
    "BUG": "red",
    "FIXME": "red",
    "UNDONE": "yellow",
    "REVIEW": "blue",
    "ANCHOR": "bright_black",
}

CUSTOM_TAG_STYLE = "bright_cyan"


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, items: list[AnchorItem], target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self.console.print("─" * 80, style="dim")
        self.console.print(f"📌 Code anchors in {escape(target)}", style="bold cyan", justify="center")
        self.console.print("─" * 80, style="dim")

        if not items:
            self.console.print(Panel("[green]No anchors found[/green]", border_style="green"))
            return

        self._print_summary(items)

        for tag_name in self._ordered_tags(items):
            self._print_group(tag_name, [item for item in items if item.tag_name == tag_name])

        self.console.print()
        count = len(items)
        self.console.print(f"[bold]{count}[/bold] anchor{'' if count == 1 else 's'} found")

    def report_links(self, links: list[tuple[str, ResolvedLink]]) -> None:
        """
        打印 LINK 引用及其解析结果

        Args:
            links: (位置 "file:line", 解析结果) 列表
        """
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Location", style="dim")
        table.add_column("Target")
        table.add_column("Status")

        for location, resolved in links:
            link = resolved.link
            target = link.full_match
            if link.is_local_anchor:
                status = "[blue]# local anchor[/blue]"
            elif resolved.exists:
                status = "[green]✓[/green]"
            else:
                status = "[yellow]⚠ not found[/yellow]"
            table.add_row(escape(location), escape(target), status)

        self.console.print(table)

    def _ordered_tags(self, items: list[AnchorItem]) -> list[str]:
        """内置标签按固定顺序，其余按名称排序"""
        present = {item.tag_name for item in items}
        builtin = [tag for tag in BUILTIN_TAGS if tag in present]
        others = sorted(present - set(builtin))
        return builtin + others

    def _print_summary(self, items: list[AnchorItem]) -> None:
        """打印各标签计数"""
        counts = Counter(item.tag_name for item in items)

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Tag", width=12)
        table.add_column("Count", justify="right", width=8)

        for tag_name in self._ordered_tags(items):
            style = TAG_STYLES.get(tag_name, CUSTOM_TAG_STYLE)
            table.add_row(f"[{style}]{tag_name}[/{style}]", str(counts[tag_name]))

        self.console.print()
        self.console.print(table)

    def _print_group(self, tag_name: str, items: list[AnchorItem]) -> None:
        """打印一个标签的所有条目"""
        style = TAG_STYLES.get(tag_name, CUSTOM_TAG_STYLE)

        self.console.print()
        self.console.print(f"[bold {style}]◆ {tag_name}[/bold {style}] [dim]({len(items)})[/dim]")

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Location", style="dim", no_wrap=True)
        table.add_column("Message")
        table.add_column("Owner", style="cyan")
        table.add_column("Issue", style="magenta")
        table.add_column("Due", style="yellow")

        for item in sorted(items, key=lambda x: (x.file_path, x.line_number)):
            message = item.message
            if item.anchor_id:
                message = f"[{item.anchor_id}] {message}".strip()
            table.add_row(
                escape(f"{item.file_path}:{item.line_number}"),
                escape(message),
                escape(f"@{item.owner}") if item.owner else "",
                f"#{item.issue}" if item.issue is not None else "",
                item.due_date.isoformat() if item.due_date else "",
            )

        self.console.print(table)
