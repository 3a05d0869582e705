"""Tests for tools/scene_nodes.py node header and property parsing."""
from __future__ import annotations

import sys
from pathlib import Path

TOOLS_DIR = Path(__file__).resolve().parent.parent.parent / "tools"
sys.path.insert(0, str(TOOLS_DIR))

from scene_model import SceneNode  # noqa: E402
from scene_nodes import add_property, set_property, start_node  # noqa: E402


class TestStartNode:
    def test_all_attributes(self) -> None:
        node = start_node('[node name="Title" type="Label" parent="UI/Top" index="2"]')
        assert node.name == "Title"
        assert node.type == "Label"
        assert node.parent == "UI/Top"
        assert node.index == 2
        assert node.properties == {}
        assert node.children == []
        assert node.path == ""

    def test_root_defaults(self) -> None:
        node = start_node('[node name="Root"]')
        assert node.type == ""
        assert node.parent == ""
        assert node.index == 0
        assert node.instance == ""

    def test_instance(self) -> None:
        node = start_node('[node name="Enemy" parent="." instance=ExtResource("3_e")]')
        assert node.instance == "3_e"
        assert node.type == ""


class TestAddProperty:
    def test_bare_value(self) -> None:
        node = SceneNode(name="A")
        add_property(node, "position = Vector2(10, 20)")
        assert node.properties["position"] == "Vector2(10, 20)"

    def test_quoted_value_kept(self) -> None:
        node = SceneNode(name="A")
        add_property(node, 'text = "Hello"')
        assert node.properties["text"] == '"Hello"'

    def test_lone_quotes_stripped(self) -> None:
        node = SceneNode(name="A")
        add_property(node, 'a = "open')
        add_property(node, 'b = close"')
        assert node.properties["a"] == "open"
        assert node.properties["b"] == "close"

    def test_splits_on_first_equals(self) -> None:
        node = SceneNode(name="A")
        add_property(node, "metadata/expr = a == b")
        assert node.properties["metadata/expr"] == "a == b"

    def test_line_without_equals_ignored(self) -> None:
        node = SceneNode(name="A")
        add_property(node, "just some text")
        assert node.properties == {}

    def test_script_sets_script_ref(self) -> None:
        node = SceneNode(name="A")
        add_property(node, 'script = ExtResource("1_s")')
        assert node.script == 'ExtResource("1_s")'

    def test_duplicate_key_last_wins(self) -> None:
        node = SceneNode(name="A")
        add_property(node, "visible = true")
        add_property(node, "visible = false")
        assert node.properties == {"visible": "false"}

    def test_escaped_newline_expanded(self) -> None:
        node = SceneNode(name="A")
        add_property(node, 'tooltip_text = "one\\ntwo"')
        assert node.properties["tooltip_text"] == '"one\ntwo"'


class TestSetProperty:
    def test_escaped_newline_expanded_once(self) -> None:
        node = SceneNode(name="A")
        set_property(node, "text", "line\\none\nline two")
        assert node.properties["text"] == "line\none\nline two"

    def test_multiline_script(self) -> None:
        node = SceneNode(name="A")
        set_property(node, "script", "res://x.gd")
        assert node.script == "res://x.gd"
