"""Persisted stats snapshot: categorized documentation issues for one run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .constants import CATEGORY_KEYS


class SnapshotError(RuntimeError):
    """Raised when a stats snapshot is missing or cannot be parsed."""


@dataclass(frozen=True)
class IssueEntry:
    """One flagged declaration."""

    path: str
    line_number: int
    label: str

    def to_dict(self) -> Dict[str, object]:
        return {"path": self.path, "lineNumber": self.line_number, "label": self.label}


@dataclass
class StatsSnapshot:
    """Issue entries per category, in the order they were collected."""

    issues: Dict[str, List[IssueEntry]] = field(
        default_factory=lambda: {key: [] for key in CATEGORY_KEYS}
    )
    api_count: int = 0
    missing_exports: int = 0
    deprecated_apis_referenced_count: int = 0

    def add(self, category: str, entry: IssueEntry) -> None:
        if category not in CATEGORY_KEYS:
            raise KeyError(f"Unknown issue category: {category}")
        self.issues.setdefault(category, []).append(entry)

    def entries(self, category: str) -> List[IssueEntry]:
        return self.issues.get(category, [])

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "apiCount": self.api_count,
            "missingExports": self.missing_exports,
            "deprecatedApisReferencedCount": self.deprecated_apis_referenced_count,
        }
        for key in CATEGORY_KEYS:
            payload[key] = [entry.to_dict() for entry in self.entries(key)]
        return payload


def write_snapshot(snapshot: StatsSnapshot, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot.to_dict(), indent=2) + "\n", encoding="utf-8")


def load_snapshot(path: Path) -> StatsSnapshot:
    """Load a snapshot from disk, raising `SnapshotError` on any structural failure."""
    if not path.exists():
        raise SnapshotError(f"Stats file not found: {path}.")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Failed to parse stats file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotError(f"Stats file {path} must contain a JSON object at the root")

    snapshot = StatsSnapshot(
        api_count=_as_count(data.get("apiCount")),
        missing_exports=_as_count(data.get("missingExports")),
        deprecated_apis_referenced_count=_as_count(data.get("deprecatedApisReferencedCount")),
    )
    for key in CATEGORY_KEYS:
        raw_entries = data.get(key)
        if raw_entries is None:
            continue
        if not isinstance(raw_entries, list):
            raise SnapshotError(f"Stats category '{key}' in {path} must be a list")
        for raw in raw_entries:
            snapshot.add(key, _entry_from_dict(raw, key, path))
    return snapshot


def _entry_from_dict(raw: Any, key: str, path: Path) -> IssueEntry:
    if not isinstance(raw, dict):
        raise SnapshotError(f"Malformed '{key}' entry in {path}: {raw!r}")
    entry_path = raw.get("path")
    line_number = raw.get("lineNumber")
    label = raw.get("label")
    if (
        not isinstance(entry_path, str)
        or isinstance(line_number, bool)
        or not isinstance(line_number, int)
        or line_number < 1
        or not isinstance(label, str)
    ):
        raise SnapshotError(f"Malformed '{key}' entry in {path}: {raw!r}")
    return IssueEntry(path=entry_path, line_number=line_number, label=label)


def _as_count(value: Any) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


__all__ = ["IssueEntry", "SnapshotError", "StatsSnapshot", "load_snapshot", "write_snapshot"]
