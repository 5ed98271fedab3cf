"""Deterministic single-line rendering of values for labels and diagnostics."""

from __future__ import annotations

import dataclasses
import json
import re
from typing import Any

from type_assertions.types import ELLIPSIS, FULL_VALUE_THRESHOLD, RENDER_MAX_DEPTH

_WHITESPACE = re.compile(r"\s+")


def render(value: Any, *, max_depth: int = RENDER_MAX_DEPTH) -> str:
    """Render value on one line, collapsing containers nested past max_depth.

    Strings are double-quoted with JSON escapes, mapping keys and set members
    are sorted by their own rendering, and whitespace runs collapse to a
    single space. Never raises, including for self-referencing containers.
    """
    return _WHITESPACE.sub(" ", _render(value, 0, max_depth))


def abbreviate(
    rendering: str, threshold: int = FULL_VALUE_THRESHOLD
) -> tuple[str, str | None]:
    """Return (shown, full_value_line) for a trace header.

    Renderings longer than threshold are shown as '...' and returned once in
    a "Full value" line; shorter ones are shown as-is with no extra line.
    """
    if len(rendering) > threshold:
        return ELLIPSIS, f"    Full value: {rendering}"
    return rendering, None


def _render(value: Any, depth: int, max_depth: int) -> str:
    if value is None or isinstance(value, (bool, int, float, complex)):
        # ints past the interpreter's digit limit refuse str()/repr()
        return _safe_repr(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (bytes, bytearray)):
        return repr(bytes(value))

    if isinstance(value, dict):
        if depth >= max_depth:
            return "{...}"
        items = sorted(
            (_render(k, depth + 1, max_depth), _render(v, depth + 1, max_depth))
            for k, v in value.items()
        )
        return "{" + ", ".join(f"{k}: {v}" for k, v in items) + "}"
    if isinstance(value, list):
        if depth >= max_depth:
            return "[...]"
        return "[" + ", ".join(_render(v, depth + 1, max_depth) for v in value) + "]"
    if isinstance(value, tuple):
        if depth >= max_depth:
            return "(...)"
        inner = [_render(v, depth + 1, max_depth) for v in value]
        if len(inner) == 1:
            return f"({inner[0]},)"
        return "(" + ", ".join(inner) + ")"
    if isinstance(value, (set, frozenset)):
        if depth >= max_depth:
            return "{...}"
        if not value:
            return f"{type(value).__name__}()"
        return "{" + ", ".join(sorted(_render(v, depth + 1, max_depth) for v in value)) + "}"

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        name = type(value).__name__
        if depth >= max_depth:
            return f"{name}(...)"
        try:
            items = [
                (f.name, getattr(value, f.name))
                for f in dataclasses.fields(value)
                if f.repr
            ]
        except Exception:
            return _placeholder(value)
        fields = ", ".join(f"{k}={_render(v, depth + 1, max_depth)}" for k, v in items)
        return f"{name}({fields})"

    return _safe_repr(value)


def _placeholder(value: Any) -> str:
    return f"<{type(value).__name__} object>"


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return _placeholder(value)


__all__ = [
    "render",
    "abbreviate",
]
