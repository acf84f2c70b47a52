"""Comment tag tokenizer.

Recognizes TODO-style tags at the start of comment content, with optional
metadata in parentheses or brackets:

    // TODO: plain tag
    // TODO(@alice): owner
    // FIXME[#123]: issue reference
    // TODO(@alice, #42, 2026-02-01): owner, issue and due date
    // ANCHOR(section-name): named anchor
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence
import re


# Built-in tags, in display order
BUILTIN_TAGS: tuple[str, ...] = (
    "TODO", "HACK", "NOTE", "BUG", "FIXME", "UNDONE", "REVIEW", "ANCHOR",
)

ANCHOR_TAG = "ANCHOR"

# Where comment content starts: after a comment marker, or at the line start
COMMENT_MARKER_LEAD = r"(?://+|/\*+|\*|'+|\#+|<!--)[ \t]*"
COMMENT_LEAD = rf"(?:^[ \t]*|{COMMENT_MARKER_LEAD})"

# Optional (...) or [...] metadata, then an optional colon
METADATA_TAIL = r"(?:[ \t]*(?:\((?P<paren>[^)]*)\)|\[(?P<bracket>[^\]]*)\]))?(?:[ \t]*:)?"

METADATA_SPLIT_PATTERN = re.compile(r"[\s,;]+")
OWNER_PATTERN = re.compile(r"@(\S+)")
ISSUE_PATTERN = re.compile(r"#(\d+)")
DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

# Comment closers dropped from the end of a message
MESSAGE_TRAILER_PATTERN = re.compile(r"\s*(?:\*/|-->)\s*$")


@dataclass(frozen=True)
class TagMatch:
    """A tag occurrence in a line."""
    tag_name: str
    span_start: int
    span_length: int
    owner: Optional[str] = None
    issue: Optional[int] = None
    due_date: Optional[date] = None
    raw_metadata: Optional[str] = None
    message: str = ""
    anchor_id: Optional[str] = None
    is_custom: bool = False

    @property
    def span_end(self) -> int:
        return self.span_start + self.span_length


@dataclass(frozen=True)
class TagMetadata:
    """Parsed metadata section."""
    owner: Optional[str] = None
    issue: Optional[int] = None
    due_date: Optional[date] = None


def parse(
    line: Optional[str],
    known_tags: Sequence[str] = BUILTIN_TAGS,
    custom_tags: Sequence[str] = (),
    require_marker: bool = False,
) -> list[TagMatch]:
    """
    Find all tags in a line.

    Args:
        line: Raw line text
        known_tags: Built-in tag names
        custom_tags: Extra tag names from configuration
        require_marker: Only accept tags after a comment marker (for raw
            source lines, where a bare word at the line start is code)

    Returns:
        TagMatch items ordered by position
    """
    if not line:
        return []

    names = _tag_names(tuple(known_tags), tuple(custom_tags))
    if not names or not contains_keyword(line, names):
        return []

    pattern = _compile_pattern(names, require_marker)
    matches = list(pattern.finditer(line))
    custom = {tag.upper() for tag in custom_tags} - {tag.upper() for tag in known_tags}
    canonical = {name.upper(): name for name in names}
    results: list[TagMatch] = []

    for i, match in enumerate(matches):
        tag_name = canonical.get(match.group("tag").upper(), match.group("tag").upper())
        raw = match.group("paren")
        if raw is None:
            raw = match.group("bracket")
        metadata = parse_metadata(raw)

        message_end = matches[i + 1].start() if i + 1 < len(matches) else len(line)
        message = _clean_message(line[match.end():message_end])

        anchor_id = None
        if tag_name.upper() == ANCHOR_TAG and raw and raw.strip():
            if metadata.owner is None and metadata.issue is None:
                anchor_id = raw.strip()

        results.append(TagMatch(
            tag_name=tag_name,
            span_start=match.start("tag"),
            span_length=match.end() - match.start("tag"),
            owner=metadata.owner,
            issue=metadata.issue,
            due_date=metadata.due_date,
            raw_metadata=raw,
            message=message,
            anchor_id=anchor_id,
            is_custom=tag_name.upper() in custom,
        ))

    return results


def parse_metadata(raw: Optional[str]) -> TagMetadata:
    """
    Parse a metadata section.

    Tokens are split on whitespace, commas and semicolons. The first owner,
    issue and valid date win; anything else is ignored.
    """
    if not raw:
        return TagMetadata()

    owner: Optional[str] = None
    issue: Optional[int] = None
    due_date: Optional[date] = None

    for token in METADATA_SPLIT_PATTERN.split(raw.strip()):
        if not token:
            continue

        if owner is None:
            match = OWNER_PATTERN.fullmatch(token)
            if match:
                owner = match.group(1)
                continue

        if issue is None:
            match = ISSUE_PATTERN.fullmatch(token)
            if match:
                issue = int(match.group(1))
                continue

        if due_date is None:
            due_date = parse_date(token)

    return TagMetadata(owner=owner, issue=issue, due_date=due_date)


def parse_date(token: str) -> Optional[date]:
    """Parse an exact yyyy-MM-dd token, None for anything else."""
    match = DATE_PATTERN.fullmatch(token)
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def contains_keyword(line: str, names: Sequence[str]) -> bool:
    """Cheap substring check before running the regex."""
    upper = line.upper()
    return any(name.upper() in upper for name in names)


def _tag_names(known_tags: tuple[str, ...], custom_tags: tuple[str, ...]) -> tuple[str, ...]:
    names: list[str] = []
    seen: set[str] = set()
    for tag in known_tags + custom_tags:
        tag = tag.strip()
        if tag and tag.upper() not in seen:
            seen.add(tag.upper())
            names.append(tag)
    return tuple(names)


def _compile_pattern(names: tuple[str, ...], require_marker: bool = False) -> re.Pattern[str]:
    # Longest first so a short custom tag never shadows a longer one
    alternation = "|".join(re.escape(name) for name in sorted(names, key=len, reverse=True))
    lead = COMMENT_MARKER_LEAD if require_marker else COMMENT_LEAD
    return re.compile(
        lead + rf"(?P<tag>{alternation})(?![\w])" + METADATA_TAIL,
        re.IGNORECASE,
    )


def _clean_message(text: str) -> str:
    return MESSAGE_TRAILER_PATTERN.sub("", text).strip()
