"""Engine settings.

EngineSettings is a frozen dataclass injected into the trace builders, the
assertion verbs and the sort validator. DEFAULT_SETTINGS holds the values
the diagnostic format is defined against; from_env() allows a CI job to
pin the sort seed or raise the trial count without touching test code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from type_assertions.types import (
    ANCESTRY_LIMIT,
    FULL_VALUE_THRESHOLD,
    RENDER_MAX_DEPTH,
    SORT_TRIALS,
    ConfigurationError,
)

ENV_SORT_TRIALS = "TYPE_ASSERTIONS_SORT_TRIALS"
ENV_SORT_SEED = "TYPE_ASSERTIONS_SORT_SEED"
ENV_ANCESTRY_LIMIT = "TYPE_ASSERTIONS_ANCESTRY_LIMIT"


@dataclass(frozen=True)
class EngineSettings:
    """Tunables for rendering, tracing and sort validation.

    render_max_depth:     nesting depth rendered before containers collapse
    full_value_threshold: renderings longer than this are abbreviated in traces
    sort_trials:          shuffles per expected ordering
    ancestry_limit:       maximum types visited when walking parent links
    sort_seed:            seed for the shuffle RNG, None for a fresh RNG
    """

    render_max_depth: int = RENDER_MAX_DEPTH
    full_value_threshold: int = FULL_VALUE_THRESHOLD
    sort_trials: int = SORT_TRIALS
    ancestry_limit: int = ANCESTRY_LIMIT
    sort_seed: int | None = None

    def __post_init__(self) -> None:
        if self.render_max_depth < 1:
            raise ConfigurationError(
                f"render_max_depth must be >= 1, got {self.render_max_depth}"
            )
        if self.full_value_threshold < 0:
            raise ConfigurationError(
                f"full_value_threshold must be >= 0, got {self.full_value_threshold}"
            )
        if self.sort_trials < 1:
            raise ConfigurationError(f"sort_trials must be >= 1, got {self.sort_trials}")
        if self.ancestry_limit < 1:
            raise ConfigurationError(
                f"ancestry_limit must be >= 1, got {self.ancestry_limit}"
            )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> EngineSettings:
        """Build settings from TYPE_ASSERTIONS_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable is set but is not an integer.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, int] = {}
        for var, attr in (
            (ENV_SORT_TRIALS, "sort_trials"),
            (ENV_SORT_SEED, "sort_seed"),
            (ENV_ANCESTRY_LIMIT, "ancestry_limit"),
        ):
            raw = env.get(var)
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[attr] = int(raw)
            except ValueError as e:
                raise ConfigurationError(f"{var} must be an integer, got {raw!r}") from e
        return cls(**overrides)


DEFAULT_SETTINGS = EngineSettings()


__all__ = [
    "ENV_SORT_TRIALS",
    "ENV_SORT_SEED",
    "ENV_ANCESTRY_LIMIT",
    "EngineSettings",
    "DEFAULT_SETTINGS",
]
