"""Core enums, result dataclasses and exceptions for type_assertions.

Key types:
    Verb              — which assertion verb produced an outcome
    Stage             — where in the check/coerce pipeline the verdict was reached
    AssertionOutcome  — frozen, one labelled pass/fail result plus its diagnostics
    SortTrial         — frozen, one shuffled input and the order the type produced
    SortCheck         — frozen, verdict for one expected ordering
    SortResult        — frozen, verdict across all expected orderings

Exceptions:
    TypeAssertionError — base class
    ConfigurationError — malformed engine input or settings
    AncestryError      — parent chain exceeded the traversal limit
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# ─── Constants ────────────────────────────────────────────────────────────────

RENDER_MAX_DEPTH: int = 2
FULL_VALUE_THRESHOLD: int = 30
SORT_TRIALS: int = 100
ANCESTRY_LIMIT: int = 100

ELLIPSIS: str = "..."
PASSED: str = "PASSED"
FAILED: str = "FAILED"


# ─── Enums ────────────────────────────────────────────────────────────────────


class Verb(str, Enum):
    """The five assertion verbs, plus sort verification."""

    PASS_INITIALLY = "should_pass_initially"
    FAIL_INITIALLY = "should_fail_initially"
    PASS = "should_pass"
    FAIL = "should_fail"
    COERCE_INTO = "should_coerce_into"
    SORT_INTO = "should_sort_into"


class Stage(str, Enum):
    """Pipeline stage at which an outcome's verdict was decided.

    CHECK is used by the *_initially verbs, which never coerce. The other
    stages follow the order a value moves through should_pass, should_fail
    and should_coerce_into.
    """

    CHECK = "check"
    INITIAL_CHECK = "initial check"
    NO_COERCION = "no coercion"
    FAILED_COERCION = "failed coercion"
    COERCED = "coerced"
    SORTED = "sorted"


# ─── Outcomes ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AssertionOutcome:
    """A single labelled verdict for one input value.

    label:       human-readable test name, e.g. '"www" should fail (no coercion)'
    passed:      whether the value met the verb's expectation
    diagnostics: constraint/coercion trace lines, always present
    stage:       structured failure kind (see Stage)
    verb:        the verb that produced this outcome
    """

    label: str
    passed: bool
    diagnostics: tuple[str, ...] = ()
    stage: Stage = Stage.CHECK
    verb: Verb = Verb.PASS_INITIALLY


# ─── Sort results ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SortTrial:
    """The exact input/output pair of one sort trial."""

    trial: int
    shuffled: tuple
    got: tuple


@dataclass(frozen=True)
class SortCheck:
    """Verdict for one expected ordering.

    trials_run counts the trials actually executed; it is smaller than the
    configured count when a mismatch stopped the ordering early.
    """

    expected: tuple
    trials_run: int
    mismatch: SortTrial | None = None

    @property
    def passed(self) -> bool:
        return self.mismatch is None


@dataclass(frozen=True)
class SortResult:
    checks: tuple[SortCheck, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def first_mismatch(self) -> SortTrial | None:
        for check in self.checks:
            if check.mismatch is not None:
                return check.mismatch
        return None


# ─── Exceptions ───────────────────────────────────────────────────────────────


class TypeAssertionError(Exception):
    """Base class for errors raised by type_assertions itself."""


class ConfigurationError(TypeAssertionError):
    """Raised for malformed engine input or invalid settings."""


class AncestryError(TypeAssertionError):
    """Raised when a type's parent chain is longer than the traversal limit.

    A chain this long is almost always a cycle in the type model.
    """

    def __init__(self, type_name: str, limit: int) -> None:
        self.type_name = type_name
        self.limit = limit
        super().__init__(
            f"Ancestor chain of {type_name} exceeds {limit} types (cyclic parent?)"
        )


__all__ = [
    "RENDER_MAX_DEPTH",
    "FULL_VALUE_THRESHOLD",
    "SORT_TRIALS",
    "ANCESTRY_LIMIT",
    "ELLIPSIS",
    "PASSED",
    "FAILED",
    "Verb",
    "Stage",
    "AssertionOutcome",
    "SortTrial",
    "SortCheck",
    "SortResult",
    "TypeAssertionError",
    "ConfigurationError",
    "AncestryError",
]
