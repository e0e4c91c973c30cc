"""Tests for color mapping parsing and loading."""

from __future__ import annotations

import pytest

from svgtheme.recolor.mapping_loader import (
    load_color_mappings,
    normalize_color,
    parse_color_mappings,
    parse_mapping_arg,
)


def test_normalize_color():
    assert normalize_color(" #AABBCC ") == "#aabbcc"
    assert normalize_color("#AbC") == "#aabbcc"
    for bad in ("aabbcc", "#aabbc", "#gggggg", "#aabbccdd", 123, None):
        with pytest.raises(ValueError):
            normalize_color(bad)


def test_parse_pairs_dicts_and_mapping_keep_order():
    pairs = [["#ffffff", "#000000"], ("#111", "#222")]
    assert parse_color_mappings(pairs) == [("#ffffff", "#000000"), ("#111111", "#222222")]

    dicts = [{"original": "#ABCDEF", "replacement": "#012345"}]
    assert parse_color_mappings(dicts) == [("#abcdef", "#012345")]

    mapping = {"#333333": "#444444", "#111111": "#222222"}
    assert parse_color_mappings(mapping) == [("#333333", "#444444"), ("#111111", "#222222")]

    assert parse_color_mappings(None) == []
    assert parse_color_mappings([]) == []


@pytest.mark.parametrize(
    "data",
    [
        "#aabbcc",
        [["#aabbcc"]],
        [{"original": "#aabbcc"}],
        [["#aabbcc", "red"]],
    ],
)
def test_parse_rejects_malformed(data):
    with pytest.raises(ValueError):
        parse_color_mappings(data)


def test_parse_mapping_arg():
    assert parse_mapping_arg("#AABBCC=#fff") == ("#aabbcc", "#ffffff")
    with pytest.raises(ValueError):
        parse_mapping_arg("#aabbcc")


def test_load_color_mappings(tmp_path):
    p = tmp_path / "mappings.yaml"
    p.write_text(
        'color_mappings:\n  - ["#aabbcc", "#112233"]\n  - original: "#fff"\n    replacement: "#000"\n',
        encoding="utf-8",
    )
    assert load_color_mappings(p) == [("#aabbcc", "#112233"), ("#ffffff", "#000000")]

    bare = tmp_path / "bare.yaml"
    bare.write_text('"#010101": "#020202"\n', encoding="utf-8")
    assert load_color_mappings(bare) == [("#010101", "#020202")]


def test_load_color_mappings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_color_mappings(tmp_path / "nope.yaml")
