"""JSDoc block extraction and the comment-source variants consumed by the resolver."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

PARAM_TAG = "param"
RETURNS_TAG = "returns"
DEPRECATED_TAG = "deprecated"
OTHER_TAG = "other"

_TAG_KINDS = {
    "param": PARAM_TAG,
    "arg": PARAM_TAG,
    "argument": PARAM_TAG,
    "return": RETURNS_TAG,
    "returns": RETURNS_TAG,
    "deprecated": DEPRECATED_TAG,
}

_LINE_PREFIX = re.compile(r"^\s*\*\s?")
_TAG_START = re.compile(r"^@(\w+)\s*(.*)$")


@dataclass(frozen=True)
class JSDocTag:
    """A single `@tag` entry of a JSDoc block."""

    kind: str
    name: str
    comment_text: str


@dataclass(frozen=True)
class JSDocBlock:
    """A `/** ... */` comment with its untouched text and extracted tags."""

    text: str
    description: str = ""
    tags: tuple[JSDocTag, ...] = ()


@dataclass(frozen=True)
class TagList:
    """Comment source made of pre-extracted JSDoc blocks."""

    blocks: tuple[JSDocBlock, ...] = ()


@dataclass(frozen=True)
class RawNode:
    """Comment source for a single node: its JSDoc blocks plus raw leading comments."""

    blocks: tuple[JSDocBlock, ...] = ()
    leading_text: str = ""


CommentSource = Union[TagList, RawNode]


def is_jsdoc(text: str) -> bool:
    return text.lstrip().startswith("/**") and not text.lstrip().startswith("/**/")


def parse_jsdoc_block(text: str) -> JSDocBlock:
    """Split a raw JSDoc comment into its description and tags."""
    body = text.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]

    description_lines: List[str] = []
    sections: List[tuple[str, List[str]]] = []
    for raw_line in body.splitlines():
        line = _LINE_PREFIX.sub("", raw_line).rstrip()
        match = _TAG_START.match(line.strip())
        if match:
            sections.append((match.group(1), [match.group(2)]))
        elif sections:
            sections[-1][1].append(line.strip())
        else:
            description_lines.append(line.strip())

    tags = tuple(_build_tag(name, lines) for name, lines in sections)
    description = "\n".join(description_lines).strip()
    return JSDocBlock(text=text, description=description, tags=tags)


def parse_blocks(texts: Iterable[str]) -> tuple[JSDocBlock, ...]:
    return tuple(parse_jsdoc_block(text) for text in texts if is_jsdoc(text))


def _build_tag(tag_name: str, lines: List[str]) -> JSDocTag:
    kind = _TAG_KINDS.get(tag_name.lower(), OTHER_TAG)
    rest = " ".join(part for part in lines if part).strip()
    if kind != PARAM_TAG:
        if kind == RETURNS_TAG:
            rest = _skip_type_expression(rest)
        return JSDocTag(kind=kind, name="", comment_text=rest)

    rest = _skip_type_expression(rest)
    if not rest:
        return JSDocTag(kind=kind, name="", comment_text="")
    if rest.startswith("["):
        end = rest.find("]")
        if end != -1:
            name = rest[1:end].split("=", 1)[0].strip()
            return JSDocTag(kind=kind, name=name, comment_text=rest[end + 1 :].strip())
    parts = rest.split(None, 1)
    comment = parts[1].strip() if len(parts) > 1 else ""
    return JSDocTag(kind=kind, name=parts[0], comment_text=comment)


def _skip_type_expression(text: str) -> str:
    """Drop a leading `{Type}` expression, honouring nested braces."""
    if not text.startswith("{"):
        return text
    depth = 0
    for index, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[index + 1 :].strip()
    return text


def get_tags(source: Optional[CommentSource]) -> List[JSDocTag]:
    """Return every tag across all blocks of the comment source, in block order."""
    if source is None:
        return []
    tags: List[JSDocTag] = []
    for block in source.blocks:
        tags.extend(block.tags)
    return tags


def text_with_links(text: Optional[str]) -> List[str]:
    # TODO: resolve {@link Target} spans into TypeReference entries.
    if text:
        return [text]
    return []


def get_return_comment(source: Optional[CommentSource]) -> List[str]:
    for tag in get_tags(source):
        if tag.kind == RETURNS_TAG:
            return text_with_links(tag.comment_text)
    return []


def get_description(source: Optional[CommentSource]) -> List[str]:
    """Extract the free-text description to use for a declaration."""
    if source is None:
        return []
    if source.blocks:
        return text_with_links("\n".join(block.description for block in source.blocks).strip())
    if isinstance(source, RawNode):
        return text_with_links(_strip_comment_markers(source.leading_text))
    return []


def get_param_tag_names(source: Optional[CommentSource]) -> List[str]:
    return [tag.name for tag in get_tags(source) if tag.kind == PARAM_TAG and tag.name]


def is_deprecated(source: Optional[CommentSource]) -> bool:
    return any(tag.kind == DEPRECATED_TAG for tag in get_tags(source))


def _strip_comment_markers(text: str) -> str:
    lines: List[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        for prefix in ("/**", "/*", "//", "*"):
            if line.startswith(prefix) and not line.startswith("*/"):
                line = line[len(prefix) :]
                break
        if line.endswith("*/"):
            line = line[:-2]
        line = line.strip()
        if line:
            lines.append(line)
    return "\n".join(lines)


__all__ = [
    "CommentSource",
    "JSDocBlock",
    "JSDocTag",
    "RawNode",
    "TagList",
    "get_description",
    "get_param_tag_names",
    "get_return_comment",
    "get_tags",
    "is_deprecated",
    "parse_blocks",
    "parse_jsdoc_block",
    "text_with_links",
]
