"""Tests for front-matter extraction."""

import pytest

from learnindex.errors import MalformedFrontMatterError
from learnindex.parsing import parse_front_matter


def test_no_front_matter_returns_whole_text_as_body():
    text = "# Just markdown\n\nNo metadata here.\n"

    parsed = parse_front_matter(text)

    assert parsed.front_matter == {}
    assert parsed.body == text
    assert parsed.has_front_matter is False


def test_delimiter_later_in_file_is_not_front_matter():
    text = "Intro line\n---\ntitle: nope\n---\n"

    parsed = parse_front_matter(text)

    assert parsed.front_matter == {}
    assert parsed.body == text


def test_parses_fields_and_body():
    text = (
        "---\n"
        "title: API Design\n"
        "depth: surface\n"
        "reading_time: 12\n"
        "personas: [new-developer, yolo-dev]\n"
        "---\n"
        "# API Design\n"
        "\n"
        "---\n"
        "A horizontal rule in the body stays in the body.\n"
    )

    parsed = parse_front_matter(text)

    assert parsed.has_front_matter is True
    assert parsed.front_matter["title"] == "API Design"
    assert parsed.front_matter["reading_time"] == 12
    assert parsed.front_matter["personas"] == ["new-developer", "yolo-dev"]
    assert parsed.body.startswith("# API Design\n")
    assert "A horizontal rule in the body" in parsed.body


def test_empty_block_is_an_empty_mapping():
    parsed = parse_front_matter("---\n---\nbody\n")

    assert parsed.front_matter == {}
    assert parsed.has_front_matter is True
    assert parsed.body == "body\n"


def test_byte_order_mark_is_tolerated():
    parsed = parse_front_matter("\ufeff---\ntitle: X\n---\nbody\n")

    assert parsed.front_matter == {"title": "X"}


def test_missing_closing_delimiter_raises():
    with pytest.raises(MalformedFrontMatterError, match="closing"):
        parse_front_matter("---\ntitle: Unclosed\n\n# Body\n")


def test_invalid_yaml_raises():
    with pytest.raises(MalformedFrontMatterError, match="invalid YAML"):
        parse_front_matter("---\ntitle: [unclosed\n---\nbody\n")


def test_non_mapping_block_raises():
    with pytest.raises(MalformedFrontMatterError, match="mapping"):
        parse_front_matter("---\n- a\n- b\n---\nbody\n")
