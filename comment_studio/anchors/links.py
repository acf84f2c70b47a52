"""LINK reference tokenizer.

Supported syntax inside a single line::

    LINK: path/to/file.cs              basic file link
    LINK: ./relative/path/file.cs      relative to the current file
    LINK: ../sibling/folder/file.cs    parent-relative
    LINK: /from/root/file.cs           root-relative (also ~/ and @/)
    LINK path/to/file.cs               colon is optional for uppercase LINK
    LINK: Services/UserService.cs:45   file at line 45
    LINK: Database/Schema.sql:100-150  file with a line range
    LINK: Services/UserService.cs#validate-input
    LINK: #local-anchor                anchor in the current file
    LINK: images/Add group calendar.png

Paths may contain spaces. Prose after the last path-like word is not part of
the target, so ``LINK: a/b.cs for details.`` points at ``a/b.cs``.
"""

import re
from dataclasses import dataclass
from typing import Optional


# LINK (uppercase) may be followed by a space or a colon; any other casing
# needs the colon so prose such as "this link is" never matches.
LINK_KEYWORD_PATTERN = re.compile(r"(?<![\w])(?:LINK(?![\w])[ \t]*:?|[Ll][Ii][Nn][Kk][ \t]*:)[ \t]*")

# Path prefixes with special resolution rules
PATH_PREFIXES: tuple[str, ...] = ("./", "../", "/", "~/", "@/")

# A word that clearly belongs to a path: separators, an extension,
# a :line suffix or an #anchor.
PATH_LIKE_WORD_PATTERN = re.compile(r"[/\\]|\.[A-Za-z0-9_]+(?:[:#]|$)|:\d|#\S")

LINE_SUFFIX_PATTERN = re.compile(r":(\d+)(?:-(\d+))?$")

SENTENCE_PUNCTUATION = ".,;!?"

WORD_PATTERN = re.compile(r"\S+")

# Trailing block-comment or HTML-comment closer after the target
COMMENT_CLOSER_PATTERN = re.compile(r"\s*(?:\*/|-->)$")


@dataclass(frozen=True)
class LinkAnchorInfo:
    """A LINK reference located in a line."""
    span_start: int
    span_length: int
    target_start: int
    target_length: int
    full_match: str
    file_path: Optional[str] = None
    anchor_name: Optional[str] = None
    line_number: Optional[int] = None
    end_line_number: Optional[int] = None

    @property
    def is_local_anchor(self) -> bool:
        return self.file_path is None and self.anchor_name is not None

    @property
    def has_line_number(self) -> bool:
        return self.line_number is not None

    @property
    def has_line_range(self) -> bool:
        return self.line_number is not None and self.end_line_number is not None

    @property
    def has_anchor(self) -> bool:
        return self.anchor_name is not None

    @property
    def span_end(self) -> int:
        return self.span_start + self.span_length

    @property
    def target_end(self) -> int:
        return self.target_start + self.target_length


def contains_link(line: Optional[str]) -> bool:
    """Check whether a line holds at least one LINK reference."""
    return bool(parse(line))


def parse(line: Optional[str]) -> list[LinkAnchorInfo]:
    """
    Find all LINK references in a line.

    Args:
        line: Raw line text

    Returns:
        Non-overlapping LinkAnchorInfo items ordered by position
    """
    if not line or "link" not in line.lower():
        return []

    keywords = list(LINK_KEYWORD_PATTERN.finditer(line))
    results: list[LinkAnchorInfo] = []

    for i, keyword in enumerate(keywords):
        body_end = keywords[i + 1].start() if i + 1 < len(keywords) else len(line)
        info = _parse_body(line, keyword.start(), keyword.end(), body_end)
        if info is not None:
            results.append(info)

    return results


def find_at(line: Optional[str], offset: int) -> Optional[LinkAnchorInfo]:
    """
    Get the LINK reference whose target covers the offset.

    The ``LINK:`` keyword itself is not part of the target, so an offset on
    the keyword returns None.
    """
    if not line or offset < 0 or offset >= len(line):
        return None

    for link in parse(line):
        if link.target_start <= offset <= link.target_end:
            return link
    return None


def split_path_prefix(path: str) -> tuple[str, str]:
    """
    Split a link path into its resolution prefix and the remainder.

    ``../../a.cs`` -> ("../../", "a.cs"), ``src/a.cs`` -> ("", "src/a.cs")
    """
    if path.startswith("../"):
        match = re.match(r"(?:\.\./)+", path)
        return match.group(0), path[match.end():]
    for prefix in PATH_PREFIXES:
        if path.startswith(prefix):
            return prefix, path[len(prefix):]
    return "", path


def _is_path_like(word: str) -> bool:
    return word.startswith(PATH_PREFIXES) or PATH_LIKE_WORD_PATTERN.search(word) is not None


def _target_end(body: str) -> int:
    """
    Find where the link target ends inside the body.

    The target runs through the last path-like word; scanning stops at a
    plain word that ends a sentence. The first word is always included.
    """
    words = list(WORD_PATTERN.finditer(body))
    if not words:
        return 0
    if body.startswith("#"):
        return words[0].end()

    end = words[0].end()
    for word in words[1:]:
        text = word.group(0)
        if _is_path_like(text):
            end = word.end()
        elif text[-1] in SENTENCE_PUNCTUATION:
            break
    return end


def _parse_body(line: str, span_start: int, body_start: int, body_end: int) -> Optional[LinkAnchorInfo]:
    body = COMMENT_CLOSER_PATTERN.sub("", line[body_start:body_end].rstrip())
    target = body[:_target_end(body)]
    if not target:
        return None

    path = target
    anchor: Optional[str] = None
    line_number: Optional[int] = None
    end_line_number: Optional[int] = None

    last_word_start = max(target.rfind(" "), target.rfind("\t")) + 1
    hash_index = target.find("#", last_word_start)
    if hash_index >= 0 and hash_index + 1 < len(target):
        anchor = target[hash_index + 1:]
        path = target[:hash_index]

    suffix = LINE_SUFFIX_PATTERN.search(path)
    if suffix is not None and suffix.start() >= last_word_start and int(suffix.group(1)) > 0:
        line_number = int(suffix.group(1))
        if suffix.group(2) is not None and int(suffix.group(2)) > line_number:
            end_line_number = int(suffix.group(2))
        path = path[:suffix.start()]

    if anchor is None and line_number is None:
        stripped = path.rstrip(SENTENCE_PUNCTUATION)
        if stripped and not stripped.endswith((".", "/")):
            target = target[:len(stripped)]
            path = stripped

    path = path.rstrip()
    if not path and anchor is None:
        return None

    return LinkAnchorInfo(
        span_start=span_start,
        span_length=body_start + len(target) - span_start,
        target_start=body_start,
        target_length=len(target),
        full_match=line[span_start:body_start + len(target)],
        file_path=path or None,
        anchor_name=anchor,
        line_number=line_number,
        end_line_number=end_line_number,
    )
