#!/usr/bin/env python3
"""Parse Godot .tscn files and print the node tree.

Usage:
    python3 tools/scene_tree.py <path.tscn> [--depth N] [--query PATH]
        [--summary] [--no-properties] [--verbose] [--debug]
"""
from __future__ import annotations

import argparse
import io
import sys
from collections import Counter
from itertools import islice
from pathlib import Path
from typing import Iterable, Sequence

from resource_refs import resolve_resource_reference
from scene_model import Scene, SceneNode, Trace
from scene_nodes import add_property, set_property, start_node
from scene_query import find_by_path, path_from_root
from scene_resources import ResourceRegistry
from tscn_attrs import extract_int
from tscn_lexer import (
    HEADER,
    MAX_LINE_SIZE,
    MULTILINE,
    NODE,
    PROPERTY,
    RESOURCE,
    SECTION,
    classify_lines,
)

NOTABLE_PROPERTIES = ("position", "scale", "rotation", "size", "text", "texture", "visible")
MAX_VALUE_WIDTH = 100


# --- Parsing ---

def parse_tscn(
    source: str | Iterable[str],
    *,
    trace: Trace = None,
    max_line_size: int = MAX_LINE_SIZE,
) -> Scene:
    """Parse .tscn content into a fully assembled Scene.

    Args:
        source: The file text, or an iterable of its lines.
        trace: Optional callable receiving one diagnostic message per step.
        max_line_size: Byte limit for any logical line.

    Raises:
        LineTooLongError: If a logical line exceeds ``max_line_size``.
    """
    # Universal newlines only, as open() reads; str.splitlines would also
    # break on U+2028 and other separators that can sit inside a string value.
    lines = io.StringIO(source, newline=None) if isinstance(source, str) else source
    scene = Scene()
    registry = ResourceRegistry(scene, trace)
    current: SceneNode | None = None

    for event in classify_lines(lines, trace=trace, max_line_size=max_line_size):
        if event.kind == HEADER:
            scene.load_steps = extract_int(event.line, "load_steps")
            scene.format_version = extract_int(event.line, "format")
            current = None
        elif event.kind == RESOURCE:
            registry.register(event.tag, event.line)
            current = None
        elif event.kind == NODE:
            current = start_node(event.line)
            scene.all_nodes.append(current)
            if trace:
                trace(f"Created node: {current.name} ({current.type}) parent={current.parent!r}")
        elif event.kind == SECTION:
            current = None
        elif current is not None:
            # Properties outside a [node] section are not kept.
            if event.kind == PROPERTY:
                add_property(current, event.line)
            elif event.kind == MULTILINE:
                set_property(current, event.key, event.value)

    if trace:
        trace(f"Parsing complete. Total nodes: {len(scene.all_nodes)}")
    scene.root_node = build_tree(scene.all_nodes, trace=trace)
    return scene


def parse_file(
    path: str | Path,
    *,
    trace: Trace = None,
    max_line_size: int = MAX_LINE_SIZE,
) -> Scene:
    """Parse a .tscn file from disk.

    Raises:
        OSError: If the file cannot be opened or read.
        LineTooLongError: If a logical line exceeds ``max_line_size``.
    """
    if trace:
        trace(f"Opening file: {path}")
    with open(path, encoding="utf-8") as f:
        return parse_tscn(f, trace=trace, max_line_size=max_line_size)


# --- Tree assembly ---

def find_parent(
    parent_ref: str,
    path_index: dict[str, SceneNode],
    processed: Sequence[SceneNode],
    count: int | None = None,
    *,
    trace: Trace = None,
) -> SceneNode | None:
    """Resolve a declared parent reference against already placed nodes.

    Only the first ``count`` entries of ``processed`` are searched (all of
    them when ``count`` is None).

    Tried in order: exact canonical path, first node with that name,
    first node named after the reference's last path component, and
    finally any canonical path ending in ``"/" + parent_ref``.
    """
    node = path_index.get(parent_ref)
    if node is not None:
        if trace:
            trace(f"Exact path match: {parent_ref}")
        return node

    for node in islice(processed, count):
        if node.name == parent_ref:
            if trace:
                trace(f"Name match: {parent_ref} -> {node.path}")
            return node

    if "/" in parent_ref:
        last = parent_ref.rsplit("/", 1)[1]
        for node in islice(processed, count):
            if node.name == last:
                if trace:
                    trace(f"Last component match: {last} -> {node.path}")
                return node

    suffix = "/" + parent_ref
    for path, node in path_index.items():
        if path.endswith(suffix):
            if trace:
                trace(f"Suffix match: {parent_ref} -> {path}")
            return node

    return None


def build_tree(nodes: list[SceneNode], *, trace: Trace = None) -> SceneNode | None:
    """Link a flat, declaration-ordered node list into a tree.

    Assigns every node's canonical path and appends it to its parent's
    children, looking only at nodes earlier in the list. A node whose parent
    cannot be found is attached to the root, so every node is placed.

    Returns the root node, or None if ``nodes`` is empty.
    """
    root: SceneNode | None = None
    path_index: dict[str, SceneNode] = {}

    for i, node in enumerate(nodes):
        parent: SceneNode | None = None

        if node.parent == "":
            if root is None:
                root = node
                node.path = node.name
                path_index[node.path] = node
                if trace:
                    trace(f"Root node set: {node.name}")
                continue
        elif node.parent == ".":
            parent = root
        else:
            parent = find_parent(node.parent, path_index, nodes, i, trace=trace)

        if parent is None:
            if root is not None:
                if trace:
                    trace(f"Parent not found, attaching to root: {node.name}")
                parent = root
            else:
                root = node
                node.path = node.name
                path_index[node.path] = node
                if trace:
                    trace(f"No root yet, promoting to root: {node.name}")
                continue

        parent.children.append(node)
        node.path = f"{parent.path}/{node.name}"
        path_index[node.path] = node
        if trace:
            trace(f"Path set: {node.name} -> {node.path}")

    return root


# --- Formatting ---

def _display_value(value: str, scene: Scene | None) -> str:
    if scene is not None and ("ExtResource" in value or "SubResource" in value):
        resolved = resolve_resource_reference(value, scene)
        if resolved:
            return resolved
    value = value.replace("\n", "\\n")
    if len(value) > MAX_VALUE_WIDTH:
        value = value[:MAX_VALUE_WIDTH] + "..."
    return value


def _node_label(node: SceneNode, scene: Scene | None) -> str:
    type_str = f" ({node.type})" if node.type else ""
    script_str = ""
    if node.script:
        resolved = resolve_resource_reference(node.script, scene) if scene is not None else None
        script_str = f" [{resolved or node.script}]"
    instance_str = " <instance>" if node.instance else ""
    return f"{node.name}{type_str}{script_str}{instance_str}"


def _property_lines(node: SceneNode, scene: Scene | None, verbose: bool) -> list[tuple[str, str]]:
    if verbose:
        keys = sorted(node.properties)
    else:
        keys = [k for k in NOTABLE_PROPERTIES if k in node.properties]
    return [(k, _display_value(node.properties[k], scene)) for k in keys if k != "script"]


def format_tree(
    node: SceneNode,
    scene: Scene | None = None,
    *,
    max_depth: int | None = None,
    properties: bool = False,
    verbose: bool = False,
    _prefix: str = "",
    _is_last: bool = True,
    _depth: int = 0,
) -> list[str]:
    """Format a node tree into lines with box-drawing characters.

    Args:
        node: The node to format.
        scene: Scene used to resolve script and resource references.
        max_depth: Maximum depth to display (None for unlimited).
        properties: Show notable properties under each node.
        verbose: Show every property (implies ``properties``).
        _prefix: Internal: prefix for indentation.
        _is_last: Internal: whether this node is the last sibling.
        _depth: Internal: current depth level.

    Returns:
        List of formatted strings (one per line).
    """
    lines: list[str] = []
    label = _node_label(node, scene)

    if _depth == 0:
        lines.append(label)
        body_prefix = ""
    else:
        connector = "└── " if _is_last else "├── "
        lines.append(f"{_prefix}{connector}{label}")
        extension = "    " if _is_last else "│   "
        body_prefix = _prefix + extension

    show_children = max_depth is None or _depth < max_depth

    if properties or verbose:
        rail = "│ " if show_children and node.children else "  "
        for key, value in _property_lines(node, scene, verbose):
            lines.append(f"{body_prefix}{rail} {key}: {value}")

    if not show_children:
        return lines

    child_count = len(node.children)
    for i, child in enumerate(node.children):
        lines.extend(
            format_tree(
                child,
                scene,
                max_depth=max_depth,
                properties=properties,
                verbose=verbose,
                _prefix=body_prefix,
                _is_last=i == child_count - 1,
                _depth=_depth + 1,
            )
        )

    return lines


def scene_summary(scene: Scene) -> list[str]:
    """Return statistics lines for a parsed scene."""
    lines = [
        "=== Scene Statistics ===",
        f"Format Version: {scene.format_version}",
        f"Load Steps: {scene.load_steps}",
        f"Total Nodes: {len(scene.all_nodes)}",
        f"Resources: {len(scene.resource_lines)}",
        f"Nodes with Scripts: {sum(1 for n in scene.all_nodes if n.script)}",
        f"ExtResources: {len(scene.ext_resources)}",
        f"SubResources: {len(scene.sub_resources)}",
        "",
        "By Node Type:",
    ]
    type_counts = Counter(n.type or "(none)" for n in scene.all_nodes)
    for node_type, count in sorted(type_counts.items()):
        lines.append(f"  {node_type}: {count}")

    if scene.ext_resources:
        lines.append("")
        lines.append("By ExtResource Type:")
        ext_counts = Counter(r.type for r in scene.ext_resources.values())
        for res_type, count in sorted(ext_counts.items()):
            lines.append(f"  {res_type}: {count}")
    return lines


def scene_tree(source: str, *, max_depth: int | None = None) -> str:
    """Parse a .tscn source string and return the formatted tree.

    Raises:
        ValueError: If no nodes are found in the source.
    """
    scene = parse_tscn(source)
    if scene.root_node is None:
        raise ValueError("No nodes found in scene file")
    return "\n".join(format_tree(scene.root_node, scene, max_depth=max_depth))


# --- CLI ---

def _debug(msg: str) -> None:
    print(f"[DEBUG] {msg}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Print Godot .tscn scene tree")
    parser.add_argument("file", help="Path to .tscn file")
    parser.add_argument("--depth", type=int, default=None, help="Maximum tree depth to display")
    parser.add_argument("-q", "--query", default=None,
                        help='Show only the subtree of a node path (e.g. "Player/Sprite")')
    parser.add_argument("-s", "--summary", action="store_true", help="Print scene statistics first")
    parser.add_argument("--no-properties", dest="properties", action="store_false",
                        help="Hide the notable properties shown under each node")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show all node properties")
    parser.add_argument("-d", "--debug", action="store_true", help="Trace parsing decisions to stderr")
    parser.add_argument("--max-line-size", type=int, default=MAX_LINE_SIZE,
                        help="Maximum bytes in one logical line")
    args = parser.parse_args(argv)

    path = Path(args.file)
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1
    if not path.suffix == ".tscn":
        print(f"Error: not a .tscn file: {path}", file=sys.stderr)
        return 1

    try:
        scene = parse_file(
            path,
            trace=_debug if args.debug else None,
            max_line_size=args.max_line_size,
        )
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if scene.root_node is None:
        print("Error: No nodes found in scene file", file=sys.stderr)
        return 1

    target = scene.root_node
    if args.query is not None:
        found = find_by_path(scene, args.query)
        if found is None:
            print(f"Error: node not found: {args.query}", file=sys.stderr)
            return 1
        target = found
        print("Path: " + "/".join(n.name for n in path_from_root(scene, target)))
    elif args.summary:
        print("\n".join(scene_summary(scene)))
        print()

    lines = format_tree(
        target,
        scene,
        max_depth=args.depth,
        properties=args.properties,
        verbose=args.verbose,
    )
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
