"""Tests for docaudit.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docaudit.config import AuditConfig, ConfigError, FixtureConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, AuditConfig)
    assert config.root == tmp_path.resolve()
    assert "node_modules" in config.exclude_dirs
    assert config.track_references is False
    assert config.snapshot_path == tmp_path.resolve() / ".docaudit" / "stats.json"
    assert config.scopes == {"client": ["public"], "server": ["server"], "common": ["common"]}
    assert config.fixtures == FixtureConfig()


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docaudit.yml"
    config_file.write_text(
        """
exclude_dirs: [node_modules, vendor]
track_references: yes
snapshot: snapshots/plugin_a.stats.json
scopes:
  client: [public, browser]
  server:
    - server
fixtures:
  root: src/integration_tests
  strip_prefix: "packages/kbn-docs-utils/"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    root = tmp_path.resolve()

    assert config.exclude_dirs == ["node_modules", "vendor"]
    assert config.track_references is True
    assert config.snapshot_path == root / "snapshots" / "plugin_a.stats.json"
    assert config.scopes == {"client": ["public", "browser"], "server": ["server"]}
    assert config.fixtures.root == root / "src" / "integration_tests"
    assert config.fixtures.strip_prefix == "packages/kbn-docs-utils/"


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".docaudit.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_syntax_errors(tmp_path: Path) -> None:
    (tmp_path / ".docaudit.yml").write_text("scopes: [client\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".docaudit.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).track_references is False
