"""Keep the trailing `// Expected issues:` block of fixture files in sync with stats."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from ..logging import get_logger
from ..stats.constants import CATEGORIES
from ..stats.snapshot import IssueEntry, StatsSnapshot, load_snapshot

FileStats = Dict[str, List[IssueEntry]]


def _empty_file_stats() -> FileStats:
    return {category.key: [] for category in CATEGORIES}


def group_by_file(
    snapshot: StatsSnapshot, resolve_path: Callable[[str], Path]
) -> Dict[Path, FileStats]:
    """Regroup snapshot entries by target file, then by category."""
    by_file: Dict[Path, FileStats] = {}
    for category in CATEGORIES:
        for entry in snapshot.entries(category.key):
            target = resolve_path(entry.path)
            by_file.setdefault(target, _empty_file_stats())[category.key].append(entry)
    return by_file


@dataclass
class ExpectedIssuesBlock:
    """Renders and splices the machine-owned block at the end of a fixture file."""

    marker: str = "// Expected issues:"

    def render(self, file_stats: Mapping[str, Sequence[IssueEntry]]) -> str:
        parts = [self.marker]
        for category in CATEGORIES:
            entries = file_stats.get(category.key) or []
            if not entries:
                continue
            parts.append(f"//   {category.title} ({len(entries)}):")
            for entry in sorted(entries, key=lambda item: (item.line_number, item.label)):
                parts.append(f"//     line {entry.line_number} - {entry.label}")
        if len(parts) == 1:
            parts.append("//   none")
        return "\n".join(parts) + "\n"

    def replace(self, content: str, block: str) -> str:
        """Swap everything from the last marker onwards, or append when absent."""
        index = content.rfind(self.marker)
        if index == -1:
            prefix = content if content.endswith("\n") else f"{content}\n"
            return f"{prefix}{block}"
        return f"{content[:index]}{block}"


class FixtureCommentSynchronizer:
    """Rewrites expected-issue blocks of fixture files from a persisted snapshot."""

    def __init__(
        self,
        root: Path,
        *,
        strip_prefix: Optional[str] = None,
        block: ExpectedIssuesBlock | None = None,
    ) -> None:
        self.root = root
        self.strip_prefix = strip_prefix
        self.block = block or ExpectedIssuesBlock()
        self.logger = get_logger("postproc.expected_issues")

    def resolve_path(self, stat_path: str) -> Path:
        relative = stat_path
        if self.strip_prefix and relative.startswith(self.strip_prefix):
            relative = relative[len(self.strip_prefix) :]
        return (self.root / relative).resolve()

    def synchronize(self, snapshot_path: Path) -> List[Path]:
        """Apply the snapshot to every referenced file that still exists.

        Raises `SnapshotError` before touching any file when the snapshot is
        missing or malformed. Returns the files that were rewritten.
        """
        snapshot = load_snapshot(snapshot_path)
        updated: List[Path] = []
        for path, file_stats in group_by_file(snapshot, self.resolve_path).items():
            if not path.is_file():
                self.logger.debug("Skipping %s: file no longer exists", path)
                continue
            try:
                changed = self.sync_file(path, file_stats)
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.debug("Skipping unreadable fixture %s: %s", path, exc)
                continue
            if changed:
                self.logger.debug("Updated: %s", path)
                updated.append(path)
        return updated

    def sync_file(self, path: Path, file_stats: Mapping[str, Sequence[IssueEntry]]) -> bool:
        original = path.read_bytes().decode("utf-8")
        updated = self.block.replace(original, self.block.render(file_stats))
        if updated == original:
            return False
        path.write_bytes(updated.encode("utf-8"))
        return True


__all__ = ["ExpectedIssuesBlock", "FixtureCommentSynchronizer", "group_by_file"]
