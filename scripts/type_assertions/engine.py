"""Assertion engine: the five type-testing verbs.

Every verb takes the Reporter explicitly, opens one group named after the
verb, and records one AssertionOutcome per input value. A failing value
never stops the remaining ones; an exception raised by the type itself does,
unwinding through the open groups.

Per-value pipeline (evaluate):

    initial check ──pass──> verdict at INITIAL_CHECK
        │ fail
    has_coercion? ──no───> verdict at NO_COERCION
        │ yes
    coerce, changed? ─no─> verdict at FAILED_COERCION
        │ yes
    final check / compare with expected ──> verdict at COERCED

The *_initially verbs stop after the initial check (Stage.CHECK) and never
coerce.

Test names depend on the stage the verdict was reached at:

    "val" should pass                        should_pass_initially
    "val" should fail                        should_fail_initially
    "val" should fail (initial check)        should_fail / should_coerce_into passed the check
    "val" should pass (no coercion)          should_pass failed and there is no coercion
    "val" should pass (failed coercion)      coercion returned the value unchanged
    "val" should pass (coerced into "val2")  verdict from checking the coerced value
    "val" should coerce                      should_coerce_into, coercion did nothing
    "val" (coerced)                          should_coerce_into, compared with expected
"""

from __future__ import annotations

from typing import Any, Callable

from type_assertions.identity import changed
from type_assertions.interfaces import TypeHandle
from type_assertions.render import render
from type_assertions.reporting import Reporter
from type_assertions.settings import DEFAULT_SETTINGS, EngineSettings
from type_assertions.traces import build_coercion_trace, build_constraint_trace
from type_assertions.types import AssertionOutcome, Stage, Verb

GROUP_NAMES: dict[Verb, str] = {
    Verb.PASS_INITIALLY: "should pass (without coercions)",
    Verb.FAIL_INITIALLY: "should fail (without coercions)",
    Verb.PASS: "should pass",
    Verb.FAIL: "should fail",
    Verb.COERCE_INTO: "should coerce into",
}

_VERB_WORD: dict[Verb, str] = {
    Verb.PASS_INITIALLY: "pass",
    Verb.FAIL_INITIALLY: "fail",
    Verb.PASS: "pass",
    Verb.FAIL: "fail",
    Verb.COERCE_INTO: "coerce",
}


# ─── Wrappers ─────────────────────────────────────────────────────────────────


def type_group(
    reporter: Reporter, type_: TypeHandle, body: Callable[[TypeHandle], Any]
) -> bool:
    """Run body(type_) in a group named "Type Test: <display name>".

    Passing the type as the body's only argument keeps test bodies free of
    the concrete type, so they can be copied between type tests.
    """
    return reporter.run_group(f"Type Test: {type_.display_name}", body, type_)


# ─── Verbs ────────────────────────────────────────────────────────────────────


def should_pass_initially(
    reporter: Reporter,
    type_: TypeHandle,
    *values: Any,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> bool:
    """Confirm type_ accepts every value without any coercion."""
    return _run(reporter, Verb.PASS_INITIALLY, type_, [(v, None) for v in values], settings)


def should_fail_initially(
    reporter: Reporter,
    type_: TypeHandle,
    *values: Any,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> bool:
    """Confirm type_ rejects every value without trying its coercion."""
    return _run(reporter, Verb.FAIL_INITIALLY, type_, [(v, None) for v in values], settings)


def should_pass(
    reporter: Reporter,
    type_: TypeHandle,
    *values: Any,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> bool:
    """Confirm every value passes, either directly or after coercion."""
    return _run(reporter, Verb.PASS, type_, [(v, None) for v in values], settings)


def should_fail(
    reporter: Reporter,
    type_: TypeHandle,
    *values: Any,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> bool:
    """Confirm every value fails, even after running it through the coercion."""
    return _run(reporter, Verb.FAIL, type_, [(v, None) for v in values], settings)


def should_coerce_into(
    reporter: Reporter,
    type_: TypeHandle,
    *pairs: Any,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> bool:
    """Confirm each original value coerces into its expected value.

    pairs alternates original, expected, original, expected, ... An original
    that already passes the type is a failure, since it would never be
    coerced. An odd number of arguments is recorded as a group defect and
    nothing is evaluated.
    """
    if len(pairs) % 2:
        with reporter.group(GROUP_NAMES[Verb.COERCE_INTO], plan=0) as group:
            reporter.defect(
                "should_coerce_into needs original/expected pairs, "
                f"got an odd number of arguments ({len(pairs)})"
            )
        return group.passed

    items = list(zip(pairs[0::2], pairs[1::2]))
    return _run(reporter, Verb.COERCE_INTO, type_, items, settings)


def _run(
    reporter: Reporter,
    verb: Verb,
    type_: TypeHandle,
    items: list[tuple[Any, Any]],
    settings: EngineSettings,
) -> bool:
    with reporter.group(GROUP_NAMES[verb], plan=len(items)) as group:
        for value, expected in items:
            reporter.record(evaluate(verb, type_, value, expected, settings=settings))
    return group.passed


# ─── Per-value State Machine ──────────────────────────────────────────────────


def evaluate(
    verb: Verb,
    type_: TypeHandle,
    value: Any,
    expected: Any = None,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> AssertionOutcome:
    """Classify one value under verb and return its labelled outcome.

    expected is only used by Verb.COERCE_INTO. Exceptions raised by type_
    propagate unchanged.
    """
    if verb not in GROUP_NAMES:
        raise ValueError(f"evaluate() does not handle {verb.value}")

    word = _VERB_WORD[verb]
    val_dd = render(value, max_depth=settings.render_max_depth)
    explain = build_constraint_trace(type_, value, settings=settings)

    def outcome(stage: Stage, label: str, passed: bool, diagnostics: list[str]) -> AssertionOutcome:
        return AssertionOutcome(
            label=label,
            passed=bool(passed),
            diagnostics=tuple(diagnostics),
            stage=stage,
            verb=verb,
        )

    initial = bool(type_.check(value))

    if verb in (Verb.PASS_INITIALLY, Verb.FAIL_INITIALLY):
        expect_pass = verb is Verb.PASS_INITIALLY
        return outcome(Stage.CHECK, f"{val_dd} should {word}", initial == expect_pass, explain)

    if initial:
        # a value expected to coerce must not already satisfy the type
        label_word = "pass" if verb is Verb.PASS else "fail"
        return outcome(
            Stage.INITIAL_CHECK,
            f"{val_dd} should {label_word} (initial check)",
            verb is Verb.PASS,
            explain,
        )

    if not type_.has_coercion:
        return outcome(
            Stage.NO_COERCION,
            f"{val_dd} should {word} (no coercion)",
            verb is Verb.FAIL,
            explain,
        )

    coercion_debug = build_coercion_trace(type_, value, settings=settings)
    new_value = type_.coerce(value)

    if not changed(value, new_value):
        label = (
            f"{val_dd} should coerce"
            if verb is Verb.COERCE_INTO
            else f"{val_dd} should {word} (failed coercion)"
        )
        return outcome(
            Stage.FAILED_COERCION, label, verb is Verb.FAIL, explain + coercion_debug
        )

    new_dd = render(new_value, max_depth=settings.render_max_depth)
    explain = build_constraint_trace(type_, new_value, settings=settings)

    if verb is Verb.COERCE_INTO:
        matched = bool(new_value == expected)
        diagnostics = explain + coercion_debug
        if not matched:
            diagnostics += [
                f"    got: {new_dd}",
                f"    expected: {render(expected, max_depth=settings.render_max_depth)}",
            ]
        return outcome(Stage.COERCED, f"{val_dd} (coerced)", matched, diagnostics)

    final = bool(type_.check(new_value))
    return outcome(
        Stage.COERCED,
        f"{val_dd} should {word} (coerced into {new_dd})",
        final if verb is Verb.PASS else not final,
        explain + coercion_debug,
    )


__all__ = [
    "GROUP_NAMES",
    "type_group",
    "should_pass_initially",
    "should_fail_initially",
    "should_pass",
    "should_fail",
    "should_coerce_into",
    "evaluate",
]
