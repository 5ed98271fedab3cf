"""type_assertions — public API.

This package checks the constraint and coercion behaviour of types from any
type model that satisfies the TypeHandle protocol, and explains every
verdict with constraint/coercion traces.

Public API (re-exported from submodules):

Verbs (from engine.py / sorting.py):
    type_group             — "Type Test: <name>" group around a test body
    should_pass_initially  — values pass without coercion
    should_fail_initially  — values fail without coercion
    should_pass            — values pass, coercing if needed
    should_fail            — values fail, even after coercion
    should_coerce_into     — original/expected pairs coerce as expected
    should_sort_into       — type.sort() restores orderings from shuffles
    evaluate               — classify one value under one verb

Sort Validation (from sorting.py):
    validate_sort   — randomized shuffle/sort trials, first mismatch per ordering

Diagnostics (from traces.py / render.py / identity.py):
    build_constraint_trace — check results across the ancestor chain
    build_coercion_trace   — check results across coercion candidates
    ancestors              — bounded walk of the parent chain
    render                 — single-line, depth-bounded value rendering
    changed                — did a coercion actually change the value?

Reporting (from reporting.py):
    Reporter        — explicit context holding the open group stack
    AssertionGroup  — named, nestable set of outcomes
    format_report   — nested TAP-style text

Protocol Interfaces (runtime_checkable, from interfaces.py):
    TypeHandle, SortableType

Types (from types.py):
    Verb, Stage, AssertionOutcome, SortTrial, SortCheck, SortResult
    TypeAssertionError, ConfigurationError, AncestryError

Configuration (from settings.py):
    EngineSettings, DEFAULT_SETTINGS

Reference Model (from model.py):
    SimpleType
"""

from type_assertions.engine import (
    evaluate,
    should_coerce_into,
    should_fail,
    should_fail_initially,
    should_pass,
    should_pass_initially,
    type_group,
)
from type_assertions.identity import changed, is_reference
from type_assertions.interfaces import SortableType, TypeHandle
from type_assertions.model import SimpleType
from type_assertions.render import render
from type_assertions.reporting import AssertionGroup, Reporter, format_report
from type_assertions.settings import DEFAULT_SETTINGS, EngineSettings
from type_assertions.sorting import should_sort_into, validate_sort
from type_assertions.traces import (
    ancestors,
    build_coercion_trace,
    build_constraint_trace,
)
from type_assertions.types import (
    AncestryError,
    AssertionOutcome,
    ConfigurationError,
    SortCheck,
    SortResult,
    SortTrial,
    Stage,
    TypeAssertionError,
    Verb,
)

__all__ = [
    # Verbs
    "type_group",
    "should_pass_initially",
    "should_fail_initially",
    "should_pass",
    "should_fail",
    "should_coerce_into",
    "should_sort_into",
    "evaluate",
    # Sort validation
    "validate_sort",
    # Diagnostics
    "build_constraint_trace",
    "build_coercion_trace",
    "ancestors",
    "render",
    "changed",
    "is_reference",
    # Reporting
    "Reporter",
    "AssertionGroup",
    "format_report",
    # Protocol interfaces
    "TypeHandle",
    "SortableType",
    # Types
    "Verb",
    "Stage",
    "AssertionOutcome",
    "SortTrial",
    "SortCheck",
    "SortResult",
    "TypeAssertionError",
    "ConfigurationError",
    "AncestryError",
    # Configuration
    "EngineSettings",
    "DEFAULT_SETTINGS",
    # Reference model
    "SimpleType",
]
