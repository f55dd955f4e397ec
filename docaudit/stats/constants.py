"""Issue categories shared by the stats collector and the fixture synchronizer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    key: str
    title: str


MISSING_COMMENTS = Category("missingComments", "missing comments")
MISSING_RETURNS = Category("missingReturns", "missing returns")
PARAM_DOC_MISMATCHES = Category("paramDocMismatches", "param doc mismatches")
MISSING_COMPLEX_TYPE_INFO = Category("missingComplexTypeInfo", "missing complex type info")
IS_ANY_TYPE = Category("isAnyType", "any usage")
NO_REFERENCES = Category("noReferences", "no references")

# Display order used when rendering expected-issue blocks.
CATEGORIES: tuple[Category, ...] = (
    MISSING_COMMENTS,
    MISSING_RETURNS,
    PARAM_DOC_MISMATCHES,
    MISSING_COMPLEX_TYPE_INFO,
    IS_ANY_TYPE,
    NO_REFERENCES,
)

CATEGORY_KEYS: tuple[str, ...] = tuple(category.key for category in CATEGORIES)

DEFAULT_EXCLUDED_DIRS = frozenset({"node_modules", "vendor", "target", "build"})

VOID_RETURN_TYPES = frozenset({"void", "Promise<void>", "never", "undefined"})
