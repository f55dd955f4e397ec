"""Pipeline orchestration for the stats and fixture-sync flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .config import AuditConfig, load_config
from .declarations import BuildOpts, TypeLinker, build_function_declaration
from .logging import get_logger
from .models import ApiForest, DeprecationReference, TypeReference
from .postproc.expected_issues import FixtureCommentSynchronizer
from .scanner import SourceScanner
from .sources.typescript import ParsedModule, TypeScriptSource
from .stats import StatsSnapshot, collect_api_stats, write_snapshot


@dataclass
class StatsOutcome:
    """Result of a stats run."""

    snapshot: StatsSnapshot
    forest: ApiForest
    path: Path


class Auditor:
    """Coordinates scanning, declaration building, stats collection and fixture sync."""

    def __init__(
        self,
        source: TypeScriptSource | None = None,
    ) -> None:
        self.source = source or TypeScriptSource()
        self.logger = get_logger("orchestrator")

    def run_stats(self, path: str, output: Optional[Path] = None) -> StatsOutcome:
        """Audit every TypeScript source under ``path`` and persist the snapshot."""
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Starting stats run for %s", repo_path)
        config = load_config(repo_path)
        modules = self._parse_modules(repo_path, config)

        linker = _build_linker(modules, config)
        forest: ApiForest = {scope: [] for scope in config.scopes}
        deprecations: List[DeprecationReference] = []
        for module in modules:
            scope = _scope_for(module.path, config.scopes)
            for signature in module.functions:
                if not signature.exported:
                    continue
                opts = BuildOpts(
                    id=f"def-{scope}.{signature.name}",
                    name=signature.name,
                    scope=scope,
                    linker=linker,
                )
                node = build_function_declaration(signature, opts)
                usages = _find_usages(signature.name, module.path, modules)
                if config.track_references:
                    node.references = usages
                if node.deprecated:
                    deprecations.extend(
                        DeprecationReference(id=node.id, label=node.label, referenced_from=usage)
                        for usage in usages
                    )
                forest.setdefault(scope, []).append(node)

        snapshot = collect_api_stats(
            forest,
            linker.missing_exports,
            deprecations,
            config.track_references,
            exclude_dirs=frozenset(config.exclude_dirs),
        )
        target = output or config.snapshot_path
        write_snapshot(snapshot, target)
        self.logger.info(
            "Collected stats for %d declarations across %d files into %s",
            snapshot.api_count,
            len(modules),
            target,
        )
        return StatsOutcome(snapshot=snapshot, forest=forest, path=target)

    def run_sync(
        self,
        snapshot_path: Optional[Path] = None,
        *,
        config_dir: Path = Path("."),
        root: Optional[Path] = None,
        strip_prefix: Optional[str] = None,
    ) -> List[Path]:
        """Rewrite expected-issue blocks of fixture files from a snapshot."""
        config = load_config(config_dir.expanduser().resolve())
        snapshot = snapshot_path or config.snapshot_path
        fixtures_root = root or config.fixtures.root or config.root
        prefix = strip_prefix if strip_prefix is not None else config.fixtures.strip_prefix
        self.logger.info("Synchronizing fixtures under %s from %s", fixtures_root, snapshot)
        synchronizer = FixtureCommentSynchronizer(fixtures_root, strip_prefix=prefix)
        return synchronizer.synchronize(snapshot)

    def _parse_modules(self, repo_path: Path, config: AuditConfig) -> List[ParsedModule]:
        scanner = SourceScanner(exclude_dirs=frozenset(config.exclude_dirs))
        modules: List[ParsedModule] = []
        for rel_path in scanner.scan(repo_path):
            try:
                text = (repo_path / rel_path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.debug("Skipping unreadable source %s: %s", rel_path, exc)
                continue
            modules.append(self.source.parse(rel_path, text))
        self.logger.debug("Parsed %d source files", len(modules))
        return modules


def _scope_for(path: str, scopes: Mapping[str, Sequence[str]]) -> str:
    segments = path.split("/")[:-1]
    for scope, markers in scopes.items():
        if any(marker in segments for marker in markers):
            return scope
    return "common"


def _build_linker(modules: Sequence[ParsedModule], config: AuditConfig) -> TypeLinker:
    exported: Dict[str, TypeReference] = {}
    declared: set[str] = set()
    for module in modules:
        scope = _scope_for(module.path, config.scopes)
        for declaration in module.types:
            declared.add(declaration.name)
            if declaration.exported:
                exported[declaration.name] = TypeReference(
                    id=f"def-{scope}.{declaration.name}",
                    text=declaration.name,
                    scope=scope,
                )
    return TypeLinker(exported=exported, unexported=declared - set(exported))


def _find_usages(name: str, declared_in: str, modules: Sequence[ParsedModule]) -> List[str]:
    return [
        module.path
        for module in modules
        if module.path != declared_in and name in module.identifiers
    ]


__all__ = ["Auditor", "StatsOutcome"]
