"""JSDoc comment sources and the `@param` resolver."""

from .jsdoc import CommentSource, JSDocBlock, JSDocTag, RawNode, TagList, parse_jsdoc_block
from .resolver import candidate_paths, normalize, normalize_tight, resolve

__all__ = [
    "CommentSource",
    "JSDocBlock",
    "JSDocTag",
    "RawNode",
    "TagList",
    "candidate_paths",
    "normalize",
    "normalize_tight",
    "parse_jsdoc_block",
    "resolve",
]
