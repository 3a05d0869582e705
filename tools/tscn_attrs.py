"""Pull key="value" attributes out of .tscn section headers.

Extraction never raises: a missing attribute is None (or 0 for numeric
attributes), and a malformed number also degrades to 0.
"""
from __future__ import annotations

import re

_ATTR_CACHE: dict[str, re.Pattern] = {}


def _attr_pattern(name: str) -> re.Pattern:
    pattern = _ATTR_CACHE.get(name)
    if pattern is None:
        # Quoted value, or a bare token up to whitespace or the closing bracket.
        # \b keeps "id" from matching inside "uid".
        pattern = re.compile(r'\b' + re.escape(name) + r'=(?:"([^"]*)"|([^\s"\]]+))')
        _ATTR_CACHE[name] = pattern
    return pattern


def extract_attr(line: str, name: str) -> str | None:
    """Return the value of ``name=`` in ``line``, or None if absent."""
    m = _attr_pattern(name).search(line)
    if not m:
        return None
    return m.group(1) if m.group(1) is not None else m.group(2)


def extract_int(line: str, name: str) -> int:
    """Return an integer attribute such as ``format=3`` or ``index="2"``.

    Missing or non-numeric values yield 0.
    """
    value = extract_attr(line, name)
    if value is None or not (value.isascii() and value.isdigit()):
        return 0
    return int(value)
