"""Coercion identity: did a coercion actually produce a different value?

A coercion may legitimately return its input untouched (the value was
already canonical, or no coercion path matched). The engine treats that as
a failed coercion, so "changed" has to be decided explicitly:

- None is compared as the empty-string sentinel "".
- Reference values (containers, objects) compare by identity: a coercion
  that returns the same object did nothing, one that returns an equal copy
  did something.
- Scalars compare by value and exact type. This is stricter than plain
  value equality: 1 -> 1.0, 1 -> True and "1" -> 1 all count as coercions,
  although 1 == 1.0 == True in Python. A coercion that only changes a
  scalar's type has changed what the value is.
"""

from __future__ import annotations

from typing import Any

SCALAR_TYPES: tuple[type, ...] = (str, bytes, int, float, complex, bool)

_SENTINEL = ""


def is_reference(value: Any) -> bool:
    """Return True if value is compared by identity rather than equality."""
    return value is not None and not isinstance(value, SCALAR_TYPES)


def changed(old: Any, new: Any) -> bool:
    """Return True if new is not the same value as old (a coercion occurred)."""
    if old is new:
        return False
    if old is None:
        old = _SENTINEL
    if new is None:
        new = _SENTINEL

    if is_reference(old) or is_reference(new):
        return old is not new

    return type(old) is not type(new) or old != new


__all__ = [
    "SCALAR_TYPES",
    "is_reference",
    "changed",
]
