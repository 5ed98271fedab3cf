"""Randomized sort validation.

A sort with incomplete tie-break rules can return the right order for some
input permutations and the wrong one for others. validate_sort() therefore
shuffles each expected ordering many times and sorts every shuffle with the
type's own sort(); the first wrong result stops that ordering and keeps the
exact shuffled input and output so the failure can be replayed.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Iterable, Sequence

from type_assertions.interfaces import SortableType
from type_assertions.render import render
from type_assertions.reporting import Reporter
from type_assertions.settings import DEFAULT_SETTINGS, EngineSettings
from type_assertions.types import (
    AssertionOutcome,
    ConfigurationError,
    SortCheck,
    SortResult,
    SortTrial,
    Stage,
    Verb,
)

logger = logging.getLogger(__name__)

GROUP_NAME = "should sort into"


def _make_rng(settings: EngineSettings) -> random.Random:
    return random.Random(settings.sort_seed)


def check_ordering(
    type_: SortableType,
    expected: Sequence[Any],
    *,
    trials: int,
    rng: random.Random,
) -> SortCheck:
    """Sort up to trials shuffles of expected, stopping at the first mismatch.

    Raises:
        ConfigurationError: If trials is less than 1.
    """
    if trials < 1:
        raise ConfigurationError(f"trials must be >= 1, got {trials}")
    target = tuple(expected)
    for trial in range(1, trials + 1):
        shuffled = list(target)
        rng.shuffle(shuffled)
        got = tuple(type_.sort(list(shuffled)))
        if len(got) != len(target) or any(g != e for g, e in zip(got, target)):
            logger.warning(
                "%s sort mismatch on trial %d: %s -> %s",
                type_.display_name,
                trial,
                render(shuffled),
                render(list(got)),
            )
            return SortCheck(
                expected=target,
                trials_run=trial,
                mismatch=SortTrial(trial=trial, shuffled=tuple(shuffled), got=got),
            )
    return SortCheck(expected=target, trials_run=trials)


def validate_sort(
    type_: SortableType,
    orderings: Iterable[Sequence[Any]],
    *,
    trials: int | None = None,
    rng: random.Random | None = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> SortResult:
    """Check that type_.sort() restores every expected ordering from shuffles.

    Args:
        type_:     the type providing sort()
        orderings: sequences already in the expected order
        trials:    shuffles per ordering (default settings.sort_trials)
        rng:       random source; a fresh one seeded from settings otherwise

    Returns:
        SortResult with one SortCheck per ordering.
    """
    count = settings.sort_trials if trials is None else trials
    if count < 1:
        raise ConfigurationError(f"trials must be >= 1, got {count}")
    source = rng if rng is not None else _make_rng(settings)
    checks = tuple(
        check_ordering(type_, ordering, trials=count, rng=source) for ordering in orderings
    )
    return SortResult(checks=checks)


def should_sort_into(
    reporter: Reporter,
    type_: SortableType,
    *orderings: Sequence[Any],
    rng: random.Random | None = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> bool:
    """Record one outcome per expected ordering in a "should sort into" group."""
    source = rng if rng is not None else _make_rng(settings)
    with reporter.group(GROUP_NAME, plan=len(orderings)) as group:
        for ordering in orderings:
            check = check_ordering(
                type_, ordering, trials=settings.sort_trials, rng=source
            )
            reporter.record(_sort_outcome(check, settings))
    return group.passed


def _sort_outcome(check: SortCheck, settings: EngineSettings) -> AssertionOutcome:
    depth = settings.render_max_depth
    expected_dd = render(list(check.expected), max_depth=depth)
    diagnostics = [f"    Trials run: {check.trials_run}"]
    if check.mismatch is not None:
        diagnostics += [
            f"    Failed on trial: {check.mismatch.trial}",
            f"    Shuffled input: {render(list(check.mismatch.shuffled), max_depth=depth)}",
            f"    Sorted output: {render(list(check.mismatch.got), max_depth=depth)}",
            f"    Expected: {expected_dd}",
        ]
    return AssertionOutcome(
        label=f"{expected_dd} should sort",
        passed=check.passed,
        diagnostics=tuple(diagnostics),
        stage=Stage.SORTED,
        verb=Verb.SORT_INTO,
    )


__all__ = [
    "GROUP_NAME",
    "check_ordering",
    "validate_sort",
    "should_sort_into",
]
