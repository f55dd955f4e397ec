"""Tests for the `@param` comment resolver."""

from __future__ import annotations

import pytest

from docaudit.comments.jsdoc import JSDocBlock, JSDocTag, RawNode, TagList, parse_jsdoc_block
from docaudit.comments.resolver import (
    MATCHERS,
    candidate_paths,
    match_exact_tag,
    match_leading_comment,
    match_raw_blocks,
    match_suffix_tag,
    normalize,
    normalize_tight,
    resolve,
    scan_param_lines,
)


def _tags(*tags: tuple[str, str]) -> TagList:
    block = JSDocBlock(
        text="/** ... */",
        tags=tuple(JSDocTag(kind="param", name=name, comment_text=text) for name, text in tags),
    )
    return TagList(blocks=(block,))


@pytest.mark.parametrize("value", ["{ foo }", "foo", "foo "])
def test_normalize_is_brace_and_whitespace_insensitive(value: str) -> None:
    assert normalize(value) == "foo"


def test_normalize_collapses_internal_whitespace() -> None:
    assert normalize("{ a,   b }") == "a, b"
    assert normalize_tight("{ a,   b }") == "a,b"


def test_candidate_paths_for_single_segment_keeps_raw_name() -> None:
    assert candidate_paths(["{ a, b }"]) == ["{ a, b }", "a, b", "a,b"]
    assert candidate_paths(["opts"]) == ["opts"]


def test_candidate_paths_for_nested_segments() -> None:
    assert candidate_paths(["{ a, b }", "a"]) == ["{ a, b }.a", "a, b.a", "a,b.a"]
    assert candidate_paths([]) == []


def test_exact_structured_match_returns_tag_text() -> None:
    source = _tags(("a", "desc"))
    assert resolve(source, candidate_paths(["a"])) == ["desc"]


def test_exact_match_ignores_braces_in_tag_name() -> None:
    source = _tags(("{a}", "emphasised"))
    assert resolve(source, ["a"]) == ["emphasised"]


def test_exact_match_wins_over_earlier_suffix_match() -> None:
    source = _tags(("opts.a", "nested"), ("a", "top level"))
    assert resolve(source, ["a"]) == ["top level"]


def test_suffix_match_on_longer_tag_name() -> None:
    source = _tags(("obj.prop1", "property text"))
    assert resolve(source, ["prop1"]) == ["property text"]


def test_suffix_match_on_trailing_segment_of_candidate() -> None:
    assert resolve(_tags(("b", "b text")), candidate_paths(["a", "b"])) == ["b text"]
    assert resolve(_tags(("c", "c text")), candidate_paths(["a", "b"])) == []


def test_matched_tag_with_empty_text_stops_the_chain() -> None:
    block = JSDocBlock(
        text="/**\n * @param a fallback text\n */",
        tags=(JSDocTag(kind="param", name="a", comment_text=""),),
    )
    assert resolve(TagList(blocks=(block,)), ["a"]) == []


def test_raw_fallback_recovers_property_comment() -> None:
    block = JSDocBlock(text="/**\n * @param {Type} obj.prop1 description here\n */")
    assert resolve(TagList(blocks=(block,)), ["obj.prop1"]) == ["description here"]


def test_raw_fallback_skips_multi_token_type_annotation() -> None:
    text = "/**\n * @param {{ a: string }} opts   the   options\n */"
    assert scan_param_lines(text, ["opts"]) == ["the options"]


def test_raw_fallback_handles_single_line_block() -> None:
    assert scan_param_lines("/** @param a quick note */", ["a"]) == ["quick note"]


def test_raw_fallback_skips_lines_without_a_name() -> None:
    text = "/**\n * @param {Type}\n * @param b second\n */"
    assert scan_param_lines(text, ["b"]) == ["second"]
    assert scan_param_lines(text, ["c"]) is None


def test_leading_comment_fallback_only_for_raw_nodes() -> None:
    leading = "// @param a from a line comment"
    assert resolve(RawNode(leading_text=leading), ["a"]) == ["from a line comment"]
    assert match_leading_comment(TagList(), ["a"]) is None


def test_raw_blocks_are_scanned_before_leading_comment() -> None:
    block = JSDocBlock(text="/** @param a from block */")
    source = RawNode(blocks=(block,), leading_text="// @param a from leading")
    assert resolve(source, ["a"]) == ["from block"]


def test_resolve_without_source_or_candidates_is_empty() -> None:
    assert resolve(None, ["a"]) == []
    assert resolve(_tags(("a", "desc")), []) == []
    assert resolve(_tags(("a", "desc")), ["  "]) == []


def test_matchers_run_in_documented_order() -> None:
    assert MATCHERS == (match_exact_tag, match_suffix_tag, match_raw_blocks, match_leading_comment)


def test_structured_tags_from_parsed_block_resolve() -> None:
    block = parse_jsdoc_block(
        """/**
         * Does a thing.
         * @param {string} name the name
         * @param [count=1] how many
         */"""
    )
    source = TagList(blocks=(block,))
    assert resolve(source, ["name"]) == ["the name"]
    assert resolve(source, ["count"]) == ["how many"]
