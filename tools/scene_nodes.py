"""Build SceneNode records from [node] headers and their property lines."""
from __future__ import annotations

import re

from scene_model import SceneNode
from tscn_attrs import extract_attr, extract_int

_INSTANCE_RE = re.compile(r'\binstance=ExtResource\(\s*"([^"]*)"\s*\)')


def start_node(line: str) -> SceneNode:
    """Create a node from a header like ``[node name="A" type="B" parent="."]``."""
    m = _INSTANCE_RE.search(line)
    return SceneNode(
        name=extract_attr(line, "name") or "",
        type=extract_attr(line, "type") or "",
        parent=extract_attr(line, "parent") or "",
        index=extract_int(line, "index"),
        instance=m.group(1) if m else "",
    )


def set_property(node: SceneNode, key: str, value: str) -> None:
    """Store a complete property value, expanding escaped ``\\n`` sequences."""
    value = value.replace("\\n", "\n")
    node.properties[key] = value
    if key == "script":
        node.script = value


def add_property(node: SceneNode, line: str) -> None:
    """Parse a single-line ``key = value`` property into ``node``.

    A value quoted on both ends is kept verbatim, quotes included. A lone
    leading or trailing quote is dropped. Lines without ``=`` are ignored.
    """
    if "=" not in line:
        return
    key, _, value = line.partition("=")
    key = key.strip()
    value = value.strip()

    starts = value.startswith('"')
    ends = value.endswith('"')
    if starts and not ends:
        value = value[1:]
    elif ends and not starts:
        value = value[:-1]

    set_property(node, key, value)
