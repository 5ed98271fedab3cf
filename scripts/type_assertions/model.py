"""SimpleType: a small concrete type model satisfying TypeHandle/SortableType.

Useful for exercising the engine and for wrapping plain predicates:

    Str = SimpleType("Str", lambda v: isinstance(v, str))
    Hostname = Str.where("Hostname", lambda v: HOST_RE.fullmatch(v) is not None)
    FQDN = Hostname.where(
        "FQDN",
        lambda v: "." in v,
        coercions=[(Hostname, lambda v: v + ".ourdomain.com")],
    )

A child type's check() requires every ancestor's check() to pass as well.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Sequence

from type_assertions.interfaces import TypeHandle

Coercion = tuple[TypeHandle, Callable[[Any], Any]]


def _accept_all(value: Any) -> bool:
    return True


def describe(func: Callable[..., Any]) -> str:
    """Return func's source on one line, or its repr when source is unavailable.

    Lambdas are described by qualified name and signature instead: their
    source is the whole line they appear on, usually the SimpleType(...) call
    itself. Pass source= to show the expression.
    """
    if getattr(func, "__name__", None) == "<lambda>":
        try:
            signature = str(inspect.signature(func))
        except (TypeError, ValueError):
            signature = "(...)"
        return f"{func.__module__}.{func.__qualname__}{signature}"
    try:
        source = inspect.getsource(func)
    except (OSError, TypeError):
        return repr(func)
    return re.sub(r"\s+", " ", source).strip()


@dataclass(eq=False)
class SimpleType:
    """A named predicate with an optional parent, coercions and ordering.

    coercions are (candidate, converter) pairs in priority order: coerce()
    applies the converter of the first candidate whose check() accepts the
    value. Equality is identity, as the trace builders expect.
    """

    name: str
    constraint: Callable[[Any], bool] = _accept_all
    parent: SimpleType | None = None
    coercions: Sequence[Coercion] = ()
    source: str | None = None
    sort_key: Callable[[Any], Any] | None = None

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def has_coercion(self) -> bool:
        return bool(self.coercions)

    @property
    def coercion_candidates(self) -> tuple[TypeHandle, ...]:
        return tuple(candidate for candidate, _ in self.coercions)

    @property
    def source_definition(self) -> str:
        if self.source is not None:
            return self.source
        return describe(self.constraint)

    def check(self, value: Any) -> bool:
        if self.parent is not None and not self.parent.check(value):
            return False
        return bool(self.constraint(value))

    def coerce(self, value: Any) -> Any:
        for candidate, converter in self.coercions:
            if candidate.check(value):
                return converter(value)
        return value

    def sort(self, values: Sequence[Any]) -> list[Any]:
        if self.sort_key is None:
            raise TypeError(f"{self.name} does not define an ordering")
        return sorted(values, key=self.sort_key)

    def where(
        self,
        name: str,
        constraint: Callable[[Any], bool],
        **kwargs: Any,
    ) -> SimpleType:
        """Return a child type of this one with an extra constraint."""
        kwargs.setdefault("sort_key", self.sort_key)
        return SimpleType(name, constraint, parent=self, **kwargs)

    def plus_coercions(self, *coercions: Coercion) -> SimpleType:
        """Return a copy of this type with coercions appended (lower priority)."""
        return replace(self, coercions=(*self.coercions, *coercions))

    def __repr__(self) -> str:
        return f"SimpleType({self.name!r})"


__all__ = [
    "Coercion",
    "SimpleType",
    "describe",
]
