"""Diagnostic trace builders: constraint maps and coercion maps.

A constraint map checks one value against a type and every ancestor up to
the root, so a failure shows which ancestors still accept the value before
the most specific check rejects it:

    Hostname constraint map:
        Hostname->check("x.c") ==> FAILED
            is defined as: <source>
        Str->check("x.c") ==> PASSED
            is defined as: <source>

A coercion map walks the type itself followed by its coercion candidates in
priority order, stopping at the first candidate that accepts the value:

    FQDN coercion map:
        FQDN->check("ftp001") ==> FAILED
        Hostname->check("ftp001") ==> PASSED (coerced into "ftp001.ourdomain.com")

Both formats are stable; downstream tooling greps for them.
"""

from __future__ import annotations

from typing import Any, Iterator

from type_assertions.interfaces import TypeHandle
from type_assertions.render import abbreviate, render
from type_assertions.settings import DEFAULT_SETTINGS, EngineSettings
from type_assertions.types import FAILED, PASSED, AncestryError

DiagnosticTrace = list[str]


def ancestors(
    type_: TypeHandle, *, limit: int = DEFAULT_SETTINGS.ancestry_limit
) -> Iterator[TypeHandle]:
    """Yield type_ and then each parent until the root.

    Raises:
        AncestryError: If more than limit types would be yielded.
    """
    current: TypeHandle | None = type_
    count = 0
    while current is not None:
        count += 1
        if count > limit:
            raise AncestryError(type_.display_name, limit)
        yield current
        current = current.parent


def _check_line(type_name: str, shown: str, ok: bool, suffix: str = "") -> str:
    return f"    {type_name}->check({shown}) ==> {PASSED if ok else FAILED}{suffix}"


def _header(
    type_: TypeHandle, kind: str, value: Any, settings: EngineSettings
) -> tuple[DiagnosticTrace, str]:
    lines = [f"{type_.display_name} {kind} map:"]
    shown, full_line = abbreviate(
        render(value, max_depth=settings.render_max_depth),
        settings.full_value_threshold,
    )
    if full_line is not None:
        lines.append(full_line)
    return lines, shown


def build_constraint_trace(
    type_: TypeHandle,
    value: Any,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> DiagnosticTrace:
    """Check value against type_ and every ancestor, recording each result."""
    lines, shown = _header(type_, "constraint", value, settings)

    for ancestor in ancestors(type_, limit=settings.ancestry_limit):
        lines.append(_check_line(ancestor.display_name, shown, ancestor.check(value)))
        lines.append(f"        is defined as: {ancestor.source_definition}")

    return lines


def build_coercion_trace(
    type_: TypeHandle,
    value: Any,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> DiagnosticTrace:
    """Record which coercion path accepts value, stopping at the first match.

    The coerced value shown on a matching line comes from type_.coerce(), not
    from the candidate: the candidate only selects the path.
    """
    lines, shown = _header(type_, "coercion", value, settings)

    for candidate in [type_, *type_.coercion_candidates]:
        ok = bool(candidate.check(value))
        suffix = ""
        if ok and candidate is not type_:
            coerced = render(type_.coerce(value), max_depth=settings.render_max_depth)
            suffix = f" (coerced into {coerced})"
        lines.append(_check_line(candidate.display_name, shown, ok, suffix))
        if ok:
            break

    return lines


__all__ = [
    "DiagnosticTrace",
    "ancestors",
    "build_constraint_trace",
    "build_coercion_trace",
]
