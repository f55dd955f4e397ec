"""Discovery of TypeScript source files to audit."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import AbstractSet, Iterator, List, Sequence

from .stats.constants import DEFAULT_EXCLUDED_DIRS

_ALWAYS_EXCLUDED_DIRS = {".git", ".hg", ".svn", ".docaudit", "__pycache__"}
_SOURCE_SUFFIXES = (".ts", ".tsx")
_DECLARATION_SUFFIX = ".d.ts"


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False
        if self.anchored or self.has_slash:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None
    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]
    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]
    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []
    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        rule = _build_ignore_rule(line[1:] if negate else line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class SourceScanner:
    """Walks a directory tree and lists TypeScript sources, pruning excluded directories."""

    def __init__(self, exclude_dirs: AbstractSet[str] = DEFAULT_EXCLUDED_DIRS) -> None:
        self.exclude_dirs = set(exclude_dirs) | _ALWAYS_EXCLUDED_DIRS

    def scan(self, root: Path) -> List[str]:
        """Return repository-relative POSIX paths of source files, sorted."""
        root = root.expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Source path not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root}")
        rules = _parse_gitignore(root / ".gitignore")
        return sorted(path.relative_to(root).as_posix() for path in self._iter_files(root, rules))

    def _iter_files(self, root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
            dirnames[:] = [
                name
                for name in dirnames
                if name not in self.exclude_dirs
                and not _should_ignore(f"{rel_dir}/{name}" if rel_dir else name, True, rules)
            ]
            for filename in filenames:
                if not filename.endswith(_SOURCE_SUFFIXES) or filename.endswith(_DECLARATION_SUFFIX):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules):
                    continue
                yield current_dir / filename


__all__ = ["SourceScanner"]
