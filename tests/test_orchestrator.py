"""End-to-end tests for the stats and fixture-sync pipelines."""

from __future__ import annotations

import json

from docaudit.orchestrator import Auditor
from tests._fixtures.source_tree import SourceTreeBuilder


def test_stats_then_sync_round_trip(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            ".docaudit.yml": """
            track_references: true
            snapshot: snapshots/stats.json
            """,
            "public/fns.ts": """
            /**
             * Adds a value.
             * @param a the value
             */
            export function add(a: number, b: number): void {}
            """,
            "server/consumer.ts": """
            import { add } from '../public/fns';

            /** Runs. */
            export function run(): void {
              add(1, 2);
            }
            """,
        }
    )
    auditor = Auditor()

    outcome = auditor.run_stats(str(source_tree.path()))

    payload = json.loads((source_tree.path() / "snapshots" / "stats.json").read_text())
    assert outcome.snapshot.api_count == 2
    assert [entry["label"] for entry in payload["missingComments"]] == ["b"]
    assert payload["missingComments"][0]["path"] == "public/fns.ts"
    assert [entry["label"] for entry in payload["noReferences"]] == ["run"]
    assert [node.label for node in outcome.forest["client"]] == ["add"]
    assert [node.label for node in outcome.forest["server"]] == ["run"]

    updated = auditor.run_sync(config_dir=source_tree.path())
    assert [path.name for path in updated] == ["fns.ts", "consumer.ts"]
    assert source_tree.read("public/fns.ts").endswith(
        "// Expected issues:\n//   missing comments (1):\n//     line 5 - b\n"
    )
    assert auditor.run_sync(config_dir=source_tree.path()) == []
