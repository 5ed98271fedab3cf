"""Capability interfaces consumed from an external type model.

This module defines Protocol interfaces (@runtime_checkable) for structural
subtyping: any type model whose objects expose the right members can be
exercised by the engine without inheriting from anything here.

    TypeHandle   — check / coerce / ancestry / description of one type
    SortableType — a TypeHandle that can also order a sequence of values

The engine only reads these objects; it never mutates them.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


# ─── Protocol Interfaces ──────────────────────────────────────────────────────


@runtime_checkable
class TypeHandle(Protocol):
    """Any type under test must implement this.

    isinstance(obj, TypeHandle) returns True for any object carrying the
    attributes and methods below.
    """

    @property
    def display_name(self) -> str:
        """Name shown in labels and trace headers."""
        ...

    @property
    def has_coercion(self) -> bool:
        """Whether coerce() is defined for this type."""
        ...

    @property
    def parent(self) -> TypeHandle | None:
        """Next ancestor in the constraint chain, None at the root."""
        ...

    @property
    def coercion_candidates(self) -> Sequence[TypeHandle]:
        """Types whose check() selects a coercion path, in priority order."""
        ...

    @property
    def source_definition(self) -> str:
        """Opaque description of the constraint, used only for display."""
        ...

    def check(self, value: Any) -> bool:
        """Return True if value satisfies this type (and all its ancestors)."""
        ...

    def coerce(self, value: Any) -> Any:
        """Return value converted by this type's coercion.

        Only meaningful when has_coercion is True. Returns value unchanged
        when no coercion path applies.
        """
        ...


@runtime_checkable
class SortableType(TypeHandle, Protocol):
    """A TypeHandle that also provides a deterministic ordering."""

    def sort(self, values: Sequence[Any]) -> list[Any]:
        """Return a new list holding values in this type's order."""
        ...


__all__ = [
    "TypeHandle",
    "SortableType",
]
