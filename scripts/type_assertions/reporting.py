"""Scoped, nestable assertion groups.

A Reporter is the explicit context every assertion verb records into. It
owns a root AssertionGroup and a stack of currently open groups; outcomes
recorded while a group is open are attributed to it.

    reporter = Reporter()
    with reporter.group("should pass", plan=2):
        reporter.record(outcome_a)
        reporter.record(outcome_b)
    reporter.passed

Groups close on every exit path. If the body raises (for example a type's
check() blows up) the group is marked aborted, closed, and the exception
keeps propagating through any enclosing groups, each of which is marked and
closed in turn.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Union

from type_assertions.types import AssertionOutcome

logger = logging.getLogger(__name__)

_INDENT = "    "


@dataclass
class AssertionGroup:
    """A named set of outcomes and nested groups, in recording order.

    plan:    expected number of entries, or None for no plan
    defects: harness-level problems, e.g. malformed verb input
    aborted: text of the exception that unwound this group, if any
    """

    name: str
    plan: int | None = None
    entries: list[Union[AssertionOutcome, "AssertionGroup"]] = field(default_factory=list)
    defects: list[str] = field(default_factory=list)
    aborted: str | None = None
    closed: bool = False

    @property
    def outcomes(self) -> list[AssertionOutcome]:
        return [e for e in self.entries if isinstance(e, AssertionOutcome)]

    @property
    def children(self) -> list[AssertionGroup]:
        return [e for e in self.entries if isinstance(e, AssertionGroup)]

    @property
    def plan_satisfied(self) -> bool:
        return self.plan is None or self.plan == len(self.entries)

    @property
    def passed(self) -> bool:
        """True when every entry passed, the plan holds, and nothing went wrong."""
        if self.aborted is not None or self.defects or not self.plan_satisfied:
            return False
        return all(entry.passed for entry in self.entries)

    def failures(self) -> list[AssertionOutcome]:
        """Return every failed outcome in this group and its descendants."""
        failed: list[AssertionOutcome] = []
        for entry in self.entries:
            if isinstance(entry, AssertionGroup):
                failed.extend(entry.failures())
            elif not entry.passed:
                failed.append(entry)
        return failed

    def find(self, name: str) -> AssertionGroup | None:
        """Return the first descendant group called name (depth-first)."""
        for child in self.children:
            if child.name == name:
                return child
            found = child.find(name)
            if found is not None:
                return found
        return None


class Reporter:
    """Explicit reporting context: the current group is a stack, not a global."""

    def __init__(self, name: str = "type assertions") -> None:
        self.root = AssertionGroup(name)
        self._stack: list[AssertionGroup] = [self.root]

    @property
    def current(self) -> AssertionGroup:
        return self._stack[-1]

    @property
    def passed(self) -> bool:
        return self.root.passed

    @contextmanager
    def group(self, name: str, *, plan: int | None = None) -> Iterator[AssertionGroup]:
        """Open a child group of the current group for the duration of the block."""
        group = AssertionGroup(name, plan=plan)
        self.current.entries.append(group)
        self._stack.append(group)
        try:
            yield group
        except BaseException as e:
            group.aborted = f"{type(e).__name__}: {e}"
            raise
        finally:
            self._stack.pop()
            group.closed = True
            logger.info(
                "Group closed: %s (passed=%s, entries=%d, failures=%d)",
                name,
                group.passed,
                len(group.entries),
                sum(1 for e in group.entries if not e.passed),
            )

    def run_group(
        self,
        name: str,
        body: Callable[..., Any],
        *args: Any,
        plan: int | None = None,
    ) -> bool:
        """Run body(*args) inside a new group and return the group's verdict."""
        with self.group(name, plan=plan) as group:
            body(*args)
        return group.passed

    def record(self, outcome: AssertionOutcome) -> bool:
        """Attribute outcome to the current group and return its verdict."""
        self.current.entries.append(outcome)
        logger.debug(
            "%s %s [%s]",
            "ok" if outcome.passed else "not ok",
            outcome.label,
            outcome.stage.value,
        )
        return outcome.passed

    def defect(self, message: str) -> None:
        """Record a harness-level defect against the current group."""
        self.current.defects.append(message)
        logger.warning("Defect in %s: %s", self.current.name, message)

    def report(self, *, verbose: bool = False) -> str:
        return format_report(self.root, verbose=verbose)

    def assert_passed(self) -> None:
        """Raise AssertionError carrying the full report if anything failed."""
        if not self.passed:
            raise AssertionError("Type assertions failed:\n" + self.report())


# ─── Report Text ──────────────────────────────────────────────────────────────


def format_report(group: AssertionGroup, *, verbose: bool = False) -> str:
    """Render group as nested TAP-style text.

    Diagnostics are printed for failed outcomes only, unless verbose.
    """
    return "\n".join(_format_group(group, 0, verbose))


def _format_group(group: AssertionGroup, level: int, verbose: bool) -> list[str]:
    pad = _INDENT * level
    lines: list[str] = []
    for number, entry in enumerate(group.entries, start=1):
        status = "ok" if entry.passed else "not ok"
        if isinstance(entry, AssertionGroup):
            lines.append(f"{pad}{status} {number} - {entry.name} {{")
            lines.extend(_format_group(entry, level + 1, verbose))
            lines.append(f"{pad}}}")
            continue
        lines.append(f"{pad}{status} {number} - {entry.label}")
        if verbose or not entry.passed:
            lines.extend(f"{pad}# {line}" for line in entry.diagnostics)

    for defect in group.defects:
        lines.append(f"{pad}# defect: {defect}")
    if group.aborted is not None:
        lines.append(f"{pad}# aborted: {group.aborted}")
    if group.plan is not None:
        lines.append(f"{pad}1..{group.plan}")
        if not group.plan_satisfied:
            lines.append(
                f"{pad}# planned {group.plan} assertions, ran {len(group.entries)}"
            )
    return lines


__all__ = [
    "AssertionGroup",
    "Reporter",
    "format_report",
]
