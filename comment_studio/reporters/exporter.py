"""
标签导出器 - 把 AnchorItem 列表导出为 TSV / CSV / Markdown / JSON
"""

import csv
import io
import json
from datetime import datetime, timezone
from typing import Iterable, Optional

from comment_studio.anchors.index import AnchorItem


EXPORT_FORMATS: tuple[str, ...] = ("tsv", "csv", "markdown", "json")

HEADERS: list[str] = [
    "Type", "Message", "File", "Path", "Line", "Owner", "Issue", "Due", "Anchor ID",
]

EXTENSION_TO_FORMAT: dict[str, str] = {
    ".tsv": "tsv",
    ".csv": "csv",
    ".md": "markdown",
    ".markdown": "markdown",
    ".json": "json",
}


def format_from_extension(extension: Optional[str]) -> str:
    """按文件扩展名选择导出格式，未知扩展名回退到 tsv"""
    return EXTENSION_TO_FORMAT.get((extension or "").lower(), "tsv")


def issue_reference(item: AnchorItem) -> Optional[str]:
    return f"#{item.issue}" if item.issue is not None else None


def row_values(item: AnchorItem) -> list[str]:
    """一行导出数据，缺失的字段为空字符串"""
    return [
        item.tag_name,
        item.message,
        item.file_name,
        item.file_path,
        str(item.line_number),
        item.owner or "",
        issue_reference(item) or "",
        item.due_date.isoformat() if item.due_date else "",
        item.anchor_id or "",
    ]


def export_anchors(
    items: Iterable[AnchorItem],
    fmt: str,
    exported_at: Optional[datetime] = None,
    target: Optional[str] = None,
) -> str:
    """
    导出标签列表

    Args:
        items: 标签列表
        fmt: tsv / csv / markdown / json
        exported_at: JSON 中记录的导出时间，默认为当前 UTC 时间
        target: JSON 中记录的扫描目标（可选）

    Returns:
        导出文本

    Raises:
        ValueError: 不支持的格式
    """
    anchors = list(items)
    fmt = fmt.lower()

    if fmt == "tsv":
        return _export_tsv(anchors)
    if fmt == "csv":
        return _export_csv(anchors)
    if fmt in ("markdown", "md"):
        return _export_markdown(anchors)
    if fmt == "json":
        return _export_json(anchors, exported_at or datetime.now(timezone.utc), target)

    raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")


def _export_tsv(anchors: list[AnchorItem]) -> str:
    lines = ["\t".join(HEADERS)]
    for item in anchors:
        values = [value.replace("\t", " ").replace("\n", " ") for value in row_values(item)]
        lines.append("\t".join(values))
    return "\n".join(lines) + "\n"


def _export_csv(anchors: list[AnchorItem]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADERS)
    for item in anchors:
        writer.writerow(row_values(item))
    return buffer.getvalue()


def _escape_markdown_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\r", "").replace("\n", " ")


def _export_markdown(anchors: list[AnchorItem]) -> str:
    lines = [
        "# Code Anchors",
        "",
        "| " + " | ".join(HEADERS) + " |",
        "|" + "|".join("------" for _ in HEADERS) + "|",
    ]
    for item in anchors:
        lines.append("| " + " | ".join(_escape_markdown_cell(v) for v in row_values(item)) + " |")

    count = len(anchors)
    lines.append("")
    lines.append(f"*Exported from comment-studio: {count} anchor{'' if count == 1 else 's'}*")
    return "\n".join(lines) + "\n"


def _export_json(anchors: list[AnchorItem], exported_at: datetime, target: Optional[str]) -> str:
    data: dict = {"exportedAt": exported_at.isoformat()}
    if target is not None:
        data["target"] = target
    data.update({
        "count": len(anchors),
        "anchors": [
            {
                "type": item.tag_name,
                "message": item.message,
                "file": item.file_name,
                "path": item.file_path,
                "line": item.line_number,
                "owner": item.owner,
                "issue": issue_reference(item),
                "due": item.due_date.isoformat() if item.due_date else None,
                "anchorId": item.anchor_id,
            }
            for item in anchors
        ],
    })
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
