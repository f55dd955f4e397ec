"""Configuration loading for docaudit (.docaudit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .stats.constants import DEFAULT_EXCLUDED_DIRS

CONFIG_FILENAME = ".docaudit.yml"

_DEFAULT_SCOPES: Dict[str, List[str]] = {
    "client": ["public"],
    "server": ["server"],
    "common": ["common"],
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FixtureConfig:
    """Where fixture files live and how snapshot paths map onto them."""

    root: Optional[Path] = None
    strip_prefix: Optional[str] = None


@dataclass
class AuditConfig:
    """Represents the settings defined in .docaudit.yml."""

    root: Path
    exclude_dirs: List[str] = field(default_factory=lambda: sorted(DEFAULT_EXCLUDED_DIRS))
    track_references: bool = False
    snapshot: Optional[Path] = None
    scopes: Dict[str, List[str]] = field(default_factory=lambda: dict(_DEFAULT_SCOPES))
    fixtures: FixtureConfig = field(default_factory=FixtureConfig)

    @property
    def snapshot_path(self) -> Path:
        return self.snapshot or self.root / ".docaudit" / "stats.json"


def load_config(config_path: Path) -> AuditConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AuditConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = AuditConfig(root=root)
    if "exclude_dirs" in data:
        config.exclude_dirs = _as_str_list(data.get("exclude_dirs"))
    track = _as_bool(data.get("track_references"))
    if track is not None:
        config.track_references = track
    snapshot = _as_str(data.get("snapshot"))
    if snapshot:
        config.snapshot = root / snapshot

    scope_data = _as_dict(data.get("scopes"))
    if scope_data:
        config.scopes = {str(name): _as_str_list(value) for name, value in scope_data.items()}

    fixture_data = _as_dict(data.get("fixtures"))
    if fixture_data:
        fixture_root = _as_str(fixture_data.get("root"))
        config.fixtures = FixtureConfig(
            root=root / fixture_root if fixture_root else None,
            strip_prefix=_as_str(fixture_data.get("strip_prefix")),
        )
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["AuditConfig", "ConfigError", "FixtureConfig", "load_config"]
