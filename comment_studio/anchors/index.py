"""Anchor index.

Collects tag occurrences (TODO, HACK, ANCHOR, ...) from source text and
files into flat AnchorItem records for listing and export.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Sequence
import logging

from comment_studio.anchors import tags
from comment_studio.core.scanner import split_lines
from comment_studio.core.styles import EXTENSION_TO_STYLE
from comment_studio.filters.pathspec_filter import PathspecFilter

logger = logging.getLogger(__name__)


# Extensions scanned for anchors in addition to the doc-comment languages
EXTRA_SOURCE_EXTENSIONS: frozenset[str] = frozenset({
    ".py", ".go", ".rs", ".java", ".kt", ".rb", ".php", ".sh",
    ".html", ".xml", ".xaml", ".razor", ".cshtml", ".sql",
})


@dataclass(frozen=True)
class AnchorItem:
    """A tag found in a source file."""
    tag_name: str
    message: str
    file_path: str
    line_number: int  # 1-based
    column: int = 0
    owner: Optional[str] = None
    issue: Optional[int] = None
    due_date: Optional[date] = None
    anchor_id: Optional[str] = None
    raw_metadata: Optional[str] = None
    is_custom: bool = False

    @property
    def file_name(self) -> str:
        return Path(self.file_path).name


def scan_lines(
    lines: Sequence[str],
    file_path: str,
    custom_tags: Sequence[str] = (),
    known_tags: Sequence[str] = tags.BUILTIN_TAGS,
) -> list[AnchorItem]:
    """
    Scan lines of one file for tags.

    Args:
        lines: File lines
        file_path: Path recorded on every item
        custom_tags: Extra tag names
        known_tags: Built-in tag names

    Returns:
        AnchorItem list in line order
    """
    names = tuple(known_tags) + tuple(custom_tags)
    items: list[AnchorItem] = []

    for i, line in enumerate(lines):
        if not tags.contains_keyword(line, names):
            continue

        for match in tags.parse(line, known_tags, custom_tags, require_marker=True):
            items.append(AnchorItem(
                tag_name=match.tag_name,
                message=match.message,
                file_path=file_path,
                line_number=i + 1,
                column=match.span_start,
                owner=match.owner,
                issue=match.issue,
                due_date=match.due_date,
                anchor_id=match.anchor_id,
                raw_metadata=match.raw_metadata,
                is_custom=match.is_custom,
            ))

    return items


def scan_text(
    text: str,
    file_path: str,
    custom_tags: Sequence[str] = (),
    known_tags: Sequence[str] = tags.BUILTIN_TAGS,
) -> list[AnchorItem]:
    """Scan a whole file's text for tags."""
    return scan_lines(split_lines(text), file_path, custom_tags, known_tags)


def scan_file(
    file_path: Path,
    root: Optional[Path] = None,
    custom_tags: Sequence[str] = (),
) -> list[AnchorItem]:
    """
    Scan one file from disk.

    Unreadable files are logged and yield no items.
    """
    try:
        content = file_path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.warning("Cannot read %s: %s", file_path, e)
        return []

    display_path = file_path
    if root is not None:
        try:
            display_path = file_path.relative_to(root)
        except ValueError:
            pass

    return scan_text(content, display_path.as_posix(), custom_tags)


def is_source_file(file_path: Path) -> bool:
    suffix = file_path.suffix.lower()
    return suffix in EXTENSION_TO_STYLE or suffix in EXTRA_SOURCE_EXTENSIONS


def iter_source_files(root: Path, use_gitignore: bool = True) -> Iterable[Path]:
    """
    Walk a directory for source files, honoring .gitignore rules.

    Args:
        root: Directory to walk (a single file is yielded as is)
        use_gitignore: Skip files matched by .gitignore patterns
    """
    if root.is_file():
        yield root
        return

    path_filter = PathspecFilter(root) if use_gitignore else None

    for file_path in sorted(root.rglob("*")):
        if not file_path.is_file() or not is_source_file(file_path):
            continue
        if path_filter is not None and path_filter.should_ignore(file_path):
            logger.debug("Ignored %s", file_path)
            continue
        yield file_path


def scan_directory(
    root: Path,
    custom_tags: Sequence[str] = (),
    use_gitignore: bool = True,
) -> list[AnchorItem]:
    """Scan every source file under root."""
    base = root if root.is_dir() else root.parent
    items: list[AnchorItem] = []
    for file_path in iter_source_files(root, use_gitignore):
        items.extend(scan_file(file_path, base, custom_tags))
    return items
