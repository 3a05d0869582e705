"""Look up nodes in a parsed scene by canonical or informal path."""
from __future__ import annotations

from scene_model import Scene, SceneNode


def find_by_path(scene: Scene, query: str) -> SceneNode | None:
    """Find the best-matching node for ``query``.

    Tiers, each scanned in declaration order, first hit wins:
      1. canonical path or node name equals ``query``
      2. canonical path ends with ``"/" + query``
      3. canonical path contains ``query``
    """
    for node in scene.all_nodes:
        if node.path == query or node.name == query:
            return node

    suffix = "/" + query
    for node in scene.all_nodes:
        if node.path.endswith(suffix):
            return node

    for node in scene.all_nodes:
        if query in node.path:
            return node

    return None


def path_from_root(scene: Scene, target: SceneNode) -> list[SceneNode]:
    """Return the nodes from the root down to ``target``, inclusive.

    Empty if ``target`` is not reachable from the root.
    """
    if scene.root_node is None:
        return []

    # Depth-first with an explicit stack of (node, next child index).
    path: list[SceneNode] = [scene.root_node]
    cursor: list[int] = [0]
    while path:
        node = path[-1]
        if node is target:
            return path
        i = cursor[-1]
        if i < len(node.children):
            cursor[-1] = i + 1
            path.append(node.children[i])
            cursor.append(0)
        else:
            path.pop()
            cursor.pop()
    return []
