"""Walk a declaration forest and classify documentation-quality issues."""

from __future__ import annotations

from typing import AbstractSet, Callable, Iterable, List, Mapping, Sequence

from ..comments.resolver import normalize_tag_name
from ..logging import get_logger
from ..models import DeclarationNode, DeprecationReference, TypeKind
from .constants import (
    DEFAULT_EXCLUDED_DIRS,
    IS_ANY_TYPE,
    MISSING_COMMENTS,
    MISSING_COMPLEX_TYPE_INFO,
    MISSING_RETURNS,
    NO_REFERENCES,
    PARAM_DOC_MISMATCHES,
    VOID_RETURN_TYPES,
)
from .snapshot import IssueEntry, StatsSnapshot

_LOGGER = get_logger("stats")

NodePredicate = Callable[[DeclarationNode], bool]


def is_missing_comment(node: DeclarationNode) -> bool:
    return not node.description


def is_any_type(node: DeclarationNode) -> bool:
    return node.kind is TypeKind.ANY


def is_missing_return(node: DeclarationNode) -> bool:
    if node.kind is not TypeKind.FUNCTION:
        return False
    if node.return_comment:
        return False
    return node.return_type.strip() not in VOID_RETURN_TYPES


def has_param_doc_mismatch(node: DeclarationNode) -> bool:
    """True when a documented `@param` name matches none of the actual parameters."""
    if node.kind is not TypeKind.FUNCTION or not node.documented_params:
        return False
    labels = {normalize_tag_name(child.label) for child in node.children}
    for name in node.documented_params:
        top_level = normalize_tag_name(name).split(".", 1)[0]
        if top_level and top_level not in labels:
            return True
    return False


def is_missing_complex_type_info(node: DeclarationNode) -> bool:
    if node.kind is not TypeKind.OBJECT or not node.children:
        return False
    return not any(child.description for child in node.children)


class ApiStatsCollector:
    """Accumulates issue entries into a `StatsSnapshot` during a depth-first walk."""

    def __init__(
        self,
        *,
        adoption_tracked: bool = False,
        exclude_dirs: AbstractSet[str] = DEFAULT_EXCLUDED_DIRS,
    ) -> None:
        self.exclude_dirs = frozenset(exclude_dirs)
        self.snapshot = StatsSnapshot()
        self._checks: List[tuple[str, NodePredicate]] = [
            (MISSING_COMMENTS.key, is_missing_comment),
            (IS_ANY_TYPE.key, is_any_type),
            (MISSING_RETURNS.key, is_missing_return),
            (PARAM_DOC_MISMATCHES.key, has_param_doc_mismatch),
            (MISSING_COMPLEX_TYPE_INFO.key, is_missing_complex_type_info),
        ]
        if adoption_tracked:
            self._checks.append((NO_REFERENCES.key, _has_no_references))

    def is_excluded(self, node: DeclarationNode) -> bool:
        parts = node.location.path.replace("\\", "/").split("/")
        return any(part in self.exclude_dirs for part in parts[:-1])

    def visit(self, node: DeclarationNode) -> None:
        if self.is_excluded(node):
            _LOGGER.debug("Skipping excluded declaration %s (%s)", node.id, node.location.path)
            return
        entry = IssueEntry(path=node.location.path, line_number=node.location.line, label=node.label)
        for key, check in self._checks:
            if check(node):
                self.snapshot.add(key, entry)
        for child in node.children:
            self.visit(child)

    def visit_roots(self, roots: Iterable[DeclarationNode]) -> None:
        for root in roots:
            if self.is_excluded(root):
                continue
            self.snapshot.api_count += 1
            self.visit(root)


def _has_no_references(node: DeclarationNode) -> bool:
    return node.references is not None and len(node.references) == 0


def collect_api_stats(
    forest: Mapping[str, Sequence[DeclarationNode]],
    missing_exports: AbstractSet[str],
    deprecations: Sequence[DeprecationReference],
    adoption_tracked: bool,
    *,
    exclude_dirs: AbstractSet[str] = DEFAULT_EXCLUDED_DIRS,
) -> StatsSnapshot:
    """Classify every reachable declaration of every scope into issue categories."""
    collector = ApiStatsCollector(adoption_tracked=adoption_tracked, exclude_dirs=exclude_dirs)
    for scope, roots in forest.items():
        _LOGGER.debug("Collecting stats for %d %s declarations", len(roots), scope)
        collector.visit_roots(roots)
    snapshot = collector.snapshot
    snapshot.missing_exports = len(missing_exports)
    snapshot.deprecated_apis_referenced_count = len(deprecations)
    return snapshot


__all__ = [
    "ApiStatsCollector",
    "collect_api_stats",
    "has_param_doc_mismatch",
    "is_any_type",
    "is_missing_comment",
    "is_missing_complex_type_info",
    "is_missing_return",
]
