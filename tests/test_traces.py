"""Tests for type_assertions.traces — constraint and coercion maps.

Coverage:
    - ancestors(): order, root inclusion, traversal limit
    - build_constraint_trace: header, one check + definition line per ancestor,
      no short-circuit, Full value line for long renderings
    - build_coercion_trace: candidate order, first-match stop, coerced-into
      suffix computed by the original type
"""

from __future__ import annotations

import pytest

from type_assertions.model import SimpleType
from type_assertions.settings import EngineSettings
from type_assertions.traces import (
    ancestors,
    build_coercion_trace,
    build_constraint_trace,
)
from type_assertions.types import AncestryError


class _Cyclic:
    """Type handle whose parent is itself."""

    display_name = "Cyclic"
    has_coercion = False
    coercion_candidates = ()
    source_definition = "cycle"

    @property
    def parent(self):
        return self

    def check(self, value):
        return True

    def coerce(self, value):
        return value


# ─── ancestors ────────────────────────────────────────────────────────────────


class TestAncestors:
    def test_yields_self_then_parents_to_root(self, fqdn) -> None:
        assert [t.display_name for t in ancestors(fqdn)] == ["FQDN", "Str", "Any"]

    def test_root_only(self, any_type) -> None:
        assert list(ancestors(any_type)) == [any_type]

    def test_cycle_hits_limit(self) -> None:
        with pytest.raises(AncestryError) as exc_info:
            list(ancestors(_Cyclic(), limit=5))
        assert exc_info.value.limit == 5
        assert "Cyclic" in str(exc_info.value)

    def test_chain_exactly_at_limit_is_allowed(self, fqdn) -> None:
        assert len(list(ancestors(fqdn, limit=3))) == 3


# ─── Constraint map ───────────────────────────────────────────────────────────


class TestConstraintTrace:
    def test_exact_format(self, fqdn) -> None:
        assert build_constraint_trace(fqdn, "x.c") == [
            "FQDN constraint map:",
            '    FQDN->check("x.c") ==> FAILED',
            "        is defined as: FQDN_RE.fullmatch(v)",
            '    Str->check("x.c") ==> PASSED',
            "        is defined as: isinstance(v, str)",
            '    Any->check("x.c") ==> PASSED',
            "        is defined as: True",
        ]

    def test_one_check_line_per_ancestor_regardless_of_outcome(self, fqdn) -> None:
        for value in ("example.com", ".com", 42, None):
            lines = build_constraint_trace(fqdn, value)
            checks = [line for line in lines if "->check(" in line]
            assert len(checks) == len(list(ancestors(fqdn)))

    def test_does_not_short_circuit_after_failure(self, fqdn) -> None:
        lines = build_constraint_trace(fqdn, 42)
        assert "    FQDN->check(42) ==> FAILED" in lines
        assert "    Str->check(42) ==> FAILED" in lines
        assert "    Any->check(42) ==> PASSED" in lines

    def test_long_value_is_shown_once_in_full(self, fqdn) -> None:
        value = "www123.prod.some.domain.example.com"
        lines = build_constraint_trace(fqdn, value)
        assert lines[1] == f'    Full value: "{value}"'
        assert "    FQDN->check(...) ==> PASSED" in lines
        assert sum(1 for line in lines if value in line) == 1

    def test_threshold_comes_from_settings(self, fqdn) -> None:
        lines = build_constraint_trace(fqdn, "x.c", settings=EngineSettings(full_value_threshold=2))
        assert lines[1] == '    Full value: "x.c"'
        assert "    FQDN->check(...) ==> FAILED" in lines

    def test_ancestry_limit_from_settings(self) -> None:
        with pytest.raises(AncestryError):
            build_constraint_trace(_Cyclic(), 1, settings=EngineSettings(ancestry_limit=3))


# ─── Coercion map ─────────────────────────────────────────────────────────────


class TestCoercionTrace:
    def _multi(self, fqdn: SimpleType, str_type: SimpleType, hostname: SimpleType) -> SimpleType:
        ints = SimpleType("Int", lambda v: isinstance(v, int) and not isinstance(v, bool))
        return fqdn.plus_coercions(
            (ints, lambda v: f"host{v}.ourdomain.com"),
            (hostname, lambda v: f"{v}.ourdomain.com"),
            (str_type, lambda v: "fallback.ourdomain.com"),
        )

    def test_exact_format_with_coercion(self, coercible_fqdn) -> None:
        assert build_coercion_trace(coercible_fqdn, "ftp001") == [
            "FQDN coercion map:",
            '    FQDN->check("ftp001") ==> FAILED',
            '    Hostname->check("ftp001") ==> PASSED (coerced into "ftp001.ourdomain.com")',
        ]

    def test_type_itself_passing_stops_immediately(self, coercible_fqdn) -> None:
        assert build_coercion_trace(coercible_fqdn, "example.com") == [
            "FQDN coercion map:",
            '    FQDN->check("example.com") ==> PASSED',
        ]

    def test_candidates_tried_in_order(self, fqdn, str_type, hostname) -> None:
        type_ = self._multi(fqdn, str_type, hostname)
        lines = build_coercion_trace(type_, "prod|ask|me")
        assert [line.split("->")[0].strip() for line in lines[1:]] == [
            "FQDN",
            "Int",
            "Hostname",
            "Str",
        ]
        assert lines[-1] == '    Str->check("prod|ask|me") ==> PASSED (coerced into "fallback.ourdomain.com")'

    def test_no_line_after_first_passed(self, fqdn, str_type, hostname) -> None:
        type_ = self._multi(fqdn, str_type, hostname)
        lines = build_coercion_trace(type_, 7)
        assert lines[-1] == '    Int->check(7) ==> PASSED (coerced into "host7.ourdomain.com")'
        passed = [i for i, line in enumerate(lines) if "==> PASSED" in line]
        assert passed == [len(lines) - 1]

    def test_no_candidate_matches(self, coercible_fqdn) -> None:
        lines = build_coercion_trace(coercible_fqdn, "prod|ask|me")
        assert lines[1:] == [
            '    FQDN->check("prod|ask|me") ==> FAILED',
            '    Hostname->check("prod|ask|me") ==> FAILED',
        ]

    def test_coerced_value_comes_from_original_type(self, fqdn, hostname) -> None:
        seen: list[str] = []

        class _Spy(SimpleType):
            def coerce(self, value):
                seen.append(self.name)
                return super().coerce(value)

        type_ = _Spy("FQDN", fqdn.constraint, parent=fqdn.parent, coercions=[(hostname, str.upper)])
        lines = build_coercion_trace(type_, "ftp001")
        assert lines[-1].endswith('(coerced into "FTP001")')
        assert seen == ["FQDN"]

    def test_long_value_abbreviated(self, coercible_fqdn) -> None:
        value = "a-very-long-hostname-that-keeps-going"
        lines = build_coercion_trace(coercible_fqdn, value)
        assert lines[1] == f'    Full value: "{value}"'
        assert lines[2] == "    FQDN->check(...) ==> FAILED"
        assert lines[3].startswith("    Hostname->check(...) ==> PASSED (coerced into ")
