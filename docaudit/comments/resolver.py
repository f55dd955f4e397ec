"""Resolve JSDoc `@param` text for a declaration path.

A declaration at tree position ``[seg0, ..., segN]`` is looked up under
several naming variants (see :func:`candidate_paths`).  Matching runs an
ordered chain of independent matchers and stops at the first hit:

1. exact match on structured ``param`` tags,
2. suffix match on structured ``param`` tags,
3. line scan of each JSDoc block's raw text,
4. line scan of the raw leading comment text (``RawNode`` sources only).

A matcher returns ``None`` when nothing matched and a text list otherwise.
A hit whose text is empty still stops the chain.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Sequence

from .jsdoc import PARAM_TAG, CommentSource, RawNode, get_tags, text_with_links

_BRACES = re.compile(r"[{}]")
_WHITESPACE = re.compile(r"\s+")
_BRACES_AND_WHITESPACE = re.compile(r"[{}\s]")
_LEADING_MARKER = re.compile(r"^\s*(?:/\*\*|/\*|//|\*)?\s?")
_PARAM_MARKER = "@param"

Matcher = Callable[[CommentSource, Sequence[str]], Optional[List[str]]]


def normalize(name: str) -> str:
    """Strip braces, collapse whitespace runs and trim."""
    return _WHITESPACE.sub(" ", _BRACES.sub("", name)).strip()


def normalize_tight(name: str) -> str:
    """Strip braces and every whitespace character."""
    return _WHITESPACE.sub("", _BRACES.sub("", name)).strip()


def normalize_tag_name(name: str) -> str:
    return _BRACES_AND_WHITESPACE.sub("", name)


def candidate_paths(path: Sequence[str]) -> List[str]:
    """Return the lookup variants for a declaration path, deduplicated in order."""
    if not path:
        return []
    head, rest = path[0], list(path[1:])
    variants = [
        ".".join(path),
        ".".join([normalize(head), *rest]),
        ".".join(normalize_tight(segment) for segment in path),
    ]
    if len(path) == 1:
        variants.append(head)

    candidates: List[str] = []
    for variant in variants:
        if variant and variant not in candidates:
            candidates.append(variant)
    return candidates


def _names_match_exactly(tag_name: str, names: Sequence[str]) -> bool:
    return tag_name in names


def _names_match_by_suffix(tag_name: str, names: Sequence[str]) -> bool:
    return any(
        tag_name.endswith(f".{name}") or name.endswith(f".{tag_name}") for name in names
    )


def _names_match(tag_name: str, names: Sequence[str]) -> bool:
    return _names_match_exactly(tag_name, names) or _names_match_by_suffix(tag_name, names)


def _structured_matcher(predicate: Callable[[str, Sequence[str]], bool]) -> Matcher:
    def _match(source: CommentSource, names: Sequence[str]) -> Optional[List[str]]:
        for tag in get_tags(source):
            if tag.kind != PARAM_TAG:
                continue
            if predicate(normalize_tag_name(tag.name), names):
                return text_with_links(tag.comment_text)
        return None

    return _match


match_exact_tag = _structured_matcher(_names_match_exactly)
match_suffix_tag = _structured_matcher(_names_match_by_suffix)


def scan_param_lines(text: str, names: Sequence[str]) -> Optional[List[str]]:
    """Find a `@param` line in raw comment text whose declared name matches."""
    for line in text.splitlines():
        content = _LEADING_MARKER.sub("", line, count=1).rstrip()
        if content.endswith("*/"):
            content = content[:-2]
        marker_index = content.find(_PARAM_MARKER)
        if marker_index == -1:
            continue
        parts = content[marker_index + len(_PARAM_MARKER) :].split()
        if not parts:
            continue
        index = 0
        if parts[0].startswith("{"):
            while index < len(parts) and not parts[index].endswith("}"):
                index += 1
            index += 1
        if index >= len(parts):
            continue
        if _names_match(normalize_tag_name(parts[index]), names):
            return text_with_links(" ".join(parts[index + 1 :]).strip())
    return None


def match_raw_blocks(source: CommentSource, names: Sequence[str]) -> Optional[List[str]]:
    for block in source.blocks:
        parsed = scan_param_lines(block.text, names)
        if parsed is not None:
            return parsed
    return None


def match_leading_comment(source: CommentSource, names: Sequence[str]) -> Optional[List[str]]:
    if not isinstance(source, RawNode) or not source.leading_text:
        return None
    return scan_param_lines(source.leading_text, names)


MATCHERS: tuple[Matcher, ...] = (
    match_exact_tag,
    match_suffix_tag,
    match_raw_blocks,
    match_leading_comment,
)


def resolve(source: Optional[CommentSource], candidates: Iterable[str]) -> List[str]:
    """Return the documentation text matching any candidate, or an empty list."""
    if source is None:
        return []
    names = [normalize_tag_name(candidate) for candidate in candidates]
    names = [name for name in names if name]
    if not names:
        return []
    for matcher in MATCHERS:
        result = matcher(source, names)
        if result is not None:
            return result
    return []


__all__ = [
    "MATCHERS",
    "candidate_paths",
    "match_exact_tag",
    "match_leading_comment",
    "match_raw_blocks",
    "match_suffix_tag",
    "normalize",
    "normalize_tag_name",
    "normalize_tight",
    "resolve",
    "scan_param_lines",
]
