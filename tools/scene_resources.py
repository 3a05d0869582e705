"""Registry of ext_resource and sub_resource declarations."""
from __future__ import annotations

from scene_model import Resource, Scene, Trace
from tscn_attrs import extract_attr


class ResourceRegistry:
    """Collects resource declarations into a Scene's lookup tables.

    External resources are keyed by ``id``, falling back to ``uid``;
    embedded ones by ``id`` alone. A declaration without a usable key is
    dropped. Later declarations overwrite earlier ones with the same key.
    """

    def __init__(self, scene: Scene, trace: Trace = None) -> None:
        self.scene = scene
        self.trace = trace

    def register(self, tag: str, line: str) -> Resource | None:
        """Record a raw resource line and dispatch on its section tag."""
        self.scene.resource_lines.append(line)
        if tag == "ext_resource":
            return self.register_external(line)
        if tag == "sub_resource":
            return self.register_embedded(line)
        return None

    def register_external(self, line: str) -> Resource | None:
        res_id = extract_attr(line, "id") or ""
        uid = extract_attr(line, "uid") or ""
        key = res_id or uid
        if not key:
            self._log(f"Dropped ext_resource without id or uid: {line}")
            return None
        res = Resource(
            id=key,
            type=extract_attr(line, "type") or "",
            path=extract_attr(line, "path") or "",
            uid=uid,
        )
        self.scene.ext_resources[key] = res
        self._log(f"Added ExtResource: {key} ({res.type}) -> {res.path}")
        return res

    def register_embedded(self, line: str) -> Resource | None:
        res_id = extract_attr(line, "id") or ""
        if not res_id:
            self._log(f"Dropped sub_resource without id: {line}")
            return None
        res = Resource(id=res_id, type=extract_attr(line, "type") or "")
        self.scene.sub_resources[res_id] = res
        self._log(f"Added SubResource: {res_id} ({res.type})")
        return res

    def _log(self, msg: str) -> None:
        if self.trace:
            self.trace(msg)
