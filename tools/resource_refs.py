"""Resolve ExtResource("id") / SubResource("id") tokens in property values."""
from __future__ import annotations

import re

from scene_model import Scene

_REF_RE = re.compile(r'\b(ExtResource|SubResource)\(\s*"([^"]*)"\s*\)')


def find_resource_reference(value: str) -> tuple[str, str] | None:
    """Return ``(kind, id)`` for the first reference token in ``value``."""
    m = _REF_RE.search(value)
    if not m:
        return None
    return m.group(1), m.group(2)


def resolve_resource_reference(value: str, scene: Scene) -> str | None:
    """Resolve the first resource reference in ``value``.

    An ExtResource resolves to its resource path, a SubResource to
    ``SubResource(<type>)``. Returns None when ``value`` holds no reference
    or the id is unknown; callers then show the raw value.
    """
    ref = find_resource_reference(value)
    if ref is None:
        return None
    kind, res_id = ref
    if kind == "ExtResource":
        res = scene.ext_resources.get(res_id)
        return res.path if res is not None else None
    res = scene.sub_resources.get(res_id)
    return f"SubResource({res.type})" if res is not None else None
