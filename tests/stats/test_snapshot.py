"""Tests for snapshot persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docaudit.stats import SnapshotError, StatsSnapshot, load_snapshot, write_snapshot
from docaudit.stats.snapshot import IssueEntry


def test_write_then_load_preserves_entries_and_counts(tmp_path: Path) -> None:
    snapshot = StatsSnapshot(api_count=3, missing_exports=1)
    snapshot.add("missingComments", IssueEntry(path="a/b.ts", line_number=5, label="x"))
    snapshot.add("isAnyType", IssueEntry(path="a/c.ts", line_number=2, label="y"))
    target = tmp_path / "out" / "stats.json"

    write_snapshot(snapshot, target)
    payload = json.loads(target.read_text(encoding="utf-8"))
    loaded = load_snapshot(target)

    assert payload["missingComments"] == [{"path": "a/b.ts", "lineNumber": 5, "label": "x"}]
    assert payload["apiCount"] == 3
    assert loaded.entries("missingComments") == snapshot.entries("missingComments")
    assert loaded.entries("isAnyType") == snapshot.entries("isAnyType")
    assert loaded.missing_exports == 1


def test_missing_categories_default_to_empty(tmp_path: Path) -> None:
    target = tmp_path / "stats.json"
    target.write_text(json.dumps({"missingComments": []}), encoding="utf-8")

    snapshot = load_snapshot(target)

    assert snapshot.entries("noReferences") == []
    assert snapshot.api_count == 0


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    target = tmp_path / "stats.json"
    target.write_text(json.dumps({"somethingElse": [1, 2]}), encoding="utf-8")
    assert load_snapshot(target).entries("missingComments") == []


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError, match="Stats file not found"):
        load_snapshot(tmp_path / "absent.json")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        json.dumps({"missingComments": {"path": "a"}}),
        json.dumps({"missingComments": [{"path": "a", "lineNumber": "5", "label": "x"}]}),
        json.dumps({"isAnyType": ["a.ts"]}),
        json.dumps({"missingComments": [{"path": "a", "lineNumber": 0, "label": "x"}]}),
        json.dumps({"noReferences": [{"path": "a", "lineNumber": -3, "label": "x"}]}),
    ],
)
def test_malformed_snapshot_raises(tmp_path: Path, content: str) -> None:
    target = tmp_path / "stats.json"
    target.write_text(content, encoding="utf-8")
    with pytest.raises(SnapshotError):
        load_snapshot(target)


def test_add_rejects_unknown_category() -> None:
    with pytest.raises(KeyError):
        StatsSnapshot().add("missingExports", IssueEntry(path="a", line_number=1, label="x"))
