"""Classify .tscn lines and join multiline string values.

The lexer is a two-state machine. Outside a string it classifies each
stripped line by its bracketed section tag; a property whose value opens a
quote without closing it switches into accumulation, where every following
line is raw text until one ends in an unescaped quote. Section-looking lines
inside a string are never classified.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from scene_model import LineTooLongError, Trace

MAX_LINE_SIZE = 10 * 1024 * 1024  # bytes per logical line

HEADER = "header"
RESOURCE = "resource"
NODE = "node"
SECTION = "section"
PROPERTY = "property"
MULTILINE = "multiline"

_SECTION_TAG_RE = re.compile(r"^\[([A-Za-z_]\w*)")
_RESOURCE_TAGS = ("ext_resource", "sub_resource")


@dataclass(frozen=True)
class LineEvent:
    """One classified logical line.

    ``tag`` is the section tag for header/resource/node/section events.
    ``key`` and ``value`` are only set for MULTILINE events, whose value is
    the joined text with both quotes removed.
    """

    kind: str
    line: str
    tag: str = ""
    key: str = ""
    value: str = ""


def ends_with_quote(text: str) -> bool:
    """True if ``text`` ends in a quote not escaped by a backslash."""
    if not text.endswith('"'):
        return False
    body = text[:-1]
    backslashes = len(body) - len(body.rstrip("\\"))
    return backslashes % 2 == 0


def opens_multiline(value: str) -> bool:
    """True if a property value starts a quoted string it does not close."""
    return value.startswith('"') and not ends_with_quote(value[1:])


def _byte_size(text: str) -> int:
    return len(text.encode("utf-8"))


def classify_line(stripped: str) -> LineEvent | None:
    """Classify a stripped line outside any multiline value.

    Returns None for blank lines and ``;`` comments.
    """
    if not stripped or stripped.startswith(";"):
        return None
    if stripped.startswith("["):
        m = _SECTION_TAG_RE.match(stripped)
        tag = m.group(1) if m else ""
        if tag == "gd_scene":
            return LineEvent(HEADER, stripped, tag=tag)
        if tag in _RESOURCE_TAGS:
            return LineEvent(RESOURCE, stripped, tag=tag)
        if tag == "node":
            return LineEvent(NODE, stripped, tag=tag)
        return LineEvent(SECTION, stripped, tag=tag)
    return LineEvent(PROPERTY, stripped)


def classify_lines(
    lines: Iterable[str],
    *,
    trace: Trace = None,
    max_line_size: int = MAX_LINE_SIZE,
) -> Iterator[LineEvent]:
    """Yield a LineEvent for every meaningful logical line in ``lines``.

    Raises:
        LineTooLongError: If a physical line, or the text accumulated for a
            multiline value, exceeds ``max_line_size`` bytes.
    """
    multiline_key: str | None = None
    parts: list[str] = []
    accumulated = 0
    line_number = 0

    for raw in lines:
        line_number += 1
        line = raw.rstrip("\r\n")
        size = _byte_size(line)
        if size > max_line_size:
            raise LineTooLongError(line_number, max_line_size)

        if multiline_key is not None:
            accumulated += size + 1
            if accumulated > max_line_size:
                raise LineTooLongError(line_number, max_line_size)
            closing = line.rstrip()
            if ends_with_quote(closing):
                parts.append(closing[:-1])
                value = "".join(parts)
                if trace:
                    trace(f"Line {line_number}: multiline value for '{multiline_key}' closed")
                yield LineEvent(MULTILINE, line, key=multiline_key, value=value)
                multiline_key = None
                parts = []
            else:
                parts.append(line + "\n")
            continue

        stripped = line.strip()
        event = classify_line(stripped)
        if event is None:
            continue
        if trace:
            trace(f"Line {line_number}: {event.kind}: {stripped}")

        if event.kind == PROPERTY and "=" in stripped:
            key, _, value = stripped.partition("=")
            value = value.strip()
            if opens_multiline(value):
                multiline_key = key.strip()
                parts = [value[1:] + "\n"]
                accumulated = size
                continue

        yield event

    if multiline_key is not None and trace:
        trace(f"Warning: unterminated multiline value for '{multiline_key}' discarded at end of input")
