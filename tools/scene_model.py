"""Data model for a parsed Godot scene: nodes, resources and the scene itself."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

# Receives one diagnostic message per parsing decision; None means silent.
Trace = Optional[Callable[[str], None]]


class LineTooLongError(ValueError):
    """A logical line (or accumulated multiline value) exceeded the size bound."""

    def __init__(self, line_number: int, limit: int) -> None:
        super().__init__(f"line {line_number} exceeds the maximum size of {limit} bytes")
        self.line_number = line_number
        self.limit = limit


@dataclass
class Resource:
    """An ext_resource or sub_resource declaration."""

    id: str
    type: str = ""
    path: str = ""  # ext_resource only
    uid: str = ""  # ext_resource only


@dataclass
class SceneNode:
    """A node in the scene tree."""

    name: str
    type: str = ""
    parent: str = ""  # "" for root, "." for child of root, name or path otherwise
    index: int = 0
    path: str = ""  # canonical path, assigned by build_tree
    script: str = ""
    instance: str = ""
    properties: dict[str, str] = field(default_factory=dict)
    children: list[SceneNode] = field(default_factory=list, repr=False)


@dataclass
class Scene:
    """Everything reconstructed from one .tscn source."""

    format_version: int = 0
    load_steps: int = 0
    all_nodes: list[SceneNode] = field(default_factory=list)
    root_node: SceneNode | None = None
    ext_resources: dict[str, Resource] = field(default_factory=dict)
    sub_resources: dict[str, Resource] = field(default_factory=dict)
    resource_lines: list[str] = field(default_factory=list)
