"""Tests for JSDoc block extraction and comment-source helpers."""

from __future__ import annotations

from docaudit.comments.jsdoc import (
    RawNode,
    TagList,
    get_description,
    get_param_tag_names,
    get_return_comment,
    get_tags,
    is_deprecated,
    parse_blocks,
    parse_jsdoc_block,
    text_with_links,
)

_BLOCK = """/**
 * Fetches a user.
 *
 * Uses the cache first.
 * @param {string} id the user id
 *   spanning two lines
 * @param {{ retries: number }} opts request options
 * @returns {Promise<User>} the user record
 * @deprecated use fetchAccount
 */"""


def test_parse_jsdoc_block_extracts_description_and_tags() -> None:
    block = parse_jsdoc_block(_BLOCK)

    assert block.text == _BLOCK
    assert block.description == "Fetches a user.\n\nUses the cache first."
    assert [(tag.kind, tag.name) for tag in block.tags] == [
        ("param", "id"),
        ("param", "opts"),
        ("returns", ""),
        ("deprecated", ""),
    ]
    assert block.tags[0].comment_text == "the user id spanning two lines"
    assert block.tags[1].comment_text == "request options"
    assert block.tags[2].comment_text == "the user record"


def test_parse_blocks_ignores_plain_comments() -> None:
    blocks = parse_blocks(["// not jsdoc", "/* nor this */", "/** @param a yes */"])
    assert len(blocks) == 1
    assert blocks[0].tags[0].name == "a"


def test_comment_source_helpers() -> None:
    source = TagList(blocks=(parse_jsdoc_block(_BLOCK),))

    assert len(get_tags(source)) == 4
    assert get_param_tag_names(source) == ["id", "opts"]
    assert get_return_comment(source) == ["the user record"]
    assert get_description(source) == ["Fetches a user.\n\nUses the cache first."]
    assert is_deprecated(source) is True


def test_raw_node_without_blocks_uses_leading_comment_as_description() -> None:
    source = RawNode(leading_text="// Adds two numbers.\n// Pure function.")
    assert get_description(source) == ["Adds two numbers.\nPure function."]
    assert get_return_comment(source) == []
    assert is_deprecated(source) is False


def test_helpers_accept_missing_source() -> None:
    assert get_tags(None) == []
    assert get_description(None) == []
    assert get_description(TagList()) == []


def test_text_with_links_drops_empty_text() -> None:
    assert text_with_links("") == []
    assert text_with_links(None) == []
    assert text_with_links("text") == ["text"]
