"""Tests for tools/tscn_attrs.py attribute extraction."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

TOOLS_DIR = Path(__file__).resolve().parent.parent.parent / "tools"
sys.path.insert(0, str(TOOLS_DIR))

from tscn_attrs import extract_attr, extract_int  # noqa: E402

EXT_LINE = '[ext_resource type="Texture2D" uid="uid://c4x" path="res://icon.svg" id="2_ab"]'


class TestExtractAttr:
    def test_quoted_values(self) -> None:
        assert extract_attr(EXT_LINE, "type") == "Texture2D"
        assert extract_attr(EXT_LINE, "path") == "res://icon.svg"

    def test_id_not_confused_with_uid(self) -> None:
        assert extract_attr(EXT_LINE, "id") == "2_ab"
        assert extract_attr(EXT_LINE, "uid") == "uid://c4x"

    def test_uid_only_line_has_no_id(self) -> None:
        assert extract_attr('[ext_resource uid="uid://x" path="res://a.png"]', "id") is None

    def test_bare_value(self) -> None:
        assert extract_attr("[gd_scene load_steps=4 format=3]", "format") == "3"

    def test_missing(self) -> None:
        assert extract_attr('[node name="A"]', "parent") is None

    def test_empty_quoted_value(self) -> None:
        assert extract_attr('[node name="A" parent=""]', "parent") == ""

    def test_order_independent(self) -> None:
        line = '[node parent="UI" type="Label" name="Title"]'
        assert extract_attr(line, "name") == "Title"
        assert extract_attr(line, "parent") == "UI"


class TestExtractInt:
    @pytest.mark.parametrize("line, name, expected", [
        ("[gd_scene load_steps=4 format=3]", "load_steps", 4),
        ("[gd_scene load_steps=4 format=3]", "format", 3),
        ('[node name="A" index="7"]', "index", 7),
        ("[gd_scene format=3]", "load_steps", 0),
        ('[node name="A" index="x1"]', "index", 0),
        ('[node name="A" index="-2"]', "index", 0),
    ])
    def test_values(self, line: str, name: str, expected: int) -> None:
        assert extract_int(line, name) == expected
