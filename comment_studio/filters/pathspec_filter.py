"""Pathspec-based source file filtering.

Combines built-in excludes for build output, the root .gitignore, nested
.gitignore files and extra command-line patterns, all with gitignore
semantics (negation, double-star globs, directory patterns).
"""

from pathlib import Path
from typing import Iterable, Optional
import logging

import pathspec

logger = logging.getLogger(__name__)


# Always excluded, whether or not a .gitignore exists
DEFAULT_IGNORE_PATTERNS: list[str] = [
    ".git/",
    ".vs/",
    ".idea/",
    ".vscode/",
    "bin/",
    "obj/",  # .NET
    "node_modules/",
    "dist/",
    "build/",
    "out/",
    "packages/",  # NuGet
    "venv/",
    ".venv/",
    "__pycache__/",
    "*.min.js",
    "*.g.cs",
    "*.designer.cs",
]


def _read_spec(gitignore_path: Path) -> Optional[pathspec.PathSpec]:
    try:
        with open(gitignore_path, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitwildmatch", f)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable %s: %s", gitignore_path, e)
        return None


class PathspecFilter:
    """File filter for a source tree with nested .gitignore support."""

    def __init__(
        self,
        root: Path,
        extra_patterns: Iterable[str] = (),
        include_nested: bool = True,
    ):
        """
        Args:
            root: Directory the patterns are relative to
            extra_patterns: Additional gitignore-style excludes
            include_nested: Whether to honor .gitignore files below root
        """
        self.root = root
        self._base_spec = pathspec.PathSpec.from_lines(
            "gitwildmatch", [*DEFAULT_IGNORE_PATTERNS, *extra_patterns]
        )
        # Deepest directory first
        self._gitignore_specs: list[tuple[Path, pathspec.PathSpec]] = []
        self._load_gitignores(include_nested)

    def _load_gitignores(self, include_nested: bool) -> None:
        candidates = [self.root / ".gitignore"]
        if include_nested:
            candidates.extend(
                path for path in self.root.rglob(".gitignore")
                if path.parent != self.root and not self._base_spec.match_file(self._relative(path))
            )

        for gitignore_path in candidates:
            if not gitignore_path.is_file():
                continue
            spec = _read_spec(gitignore_path)
            if spec is not None:
                self._gitignore_specs.append((gitignore_path.parent, spec))

        self._gitignore_specs.sort(key=lambda item: len(item[0].parts), reverse=True)

    def _relative(self, path: Path) -> str:
        if path.is_absolute():
            path = path.relative_to(self.root)
        return path.as_posix()

    def should_ignore(self, path: Path) -> bool:
        """
        Check if a file should be skipped.

        A file outside root is never ignored. Each .gitignore applies to
        the files in its own directory and below.
        """
        try:
            relative = self._relative(path)
        except ValueError:
            return False

        if self._base_spec.match_file(relative):
            return True

        absolute = path if path.is_absolute() else self.root / path
        for directory, spec in self._gitignore_specs:
            try:
                local = absolute.relative_to(directory).as_posix()
            except ValueError:
                continue
            if spec.match_file(local):
                return True

        return False

    def filter_paths(self, paths: Iterable[Path]) -> list[Path]:
        """Keep the paths that should NOT be ignored."""
        return [p for p in paths if not self.should_ignore(p)]
