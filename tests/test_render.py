"""Tests for type_assertions.render — single-line value rendering."""

from __future__ import annotations

import sys
from dataclasses import dataclass

import pytest

from type_assertions.render import abbreviate, render


@dataclass
class _Point:
    x: int
    y: int


@dataclass
class _Lazy:
    """Dataclass whose field raises something other than AttributeError on read."""

    payload: int = 0

    def __getattribute__(self, name: str):
        if name == "payload":
            raise RuntimeError("lazy field")
        return object.__getattribute__(self, name)


class _BadRepr:
    def __repr__(self) -> str:
        raise RuntimeError("no repr for you")


class TestScalars:
    def test_strings_are_double_quoted(self) -> None:
        assert render("example.com") == '"example.com"'

    def test_string_escapes(self) -> None:
        assert render('say "hi"\n') == '"say \\"hi\\"\\n"'

    def test_numbers_and_none(self) -> None:
        assert render(42) == "42"
        assert render(1.5) == "1.5"
        assert render(True) == "True"
        assert render(None) == "None"

    def test_bytes(self) -> None:
        assert render(b"ab") == "b'ab'"


class TestContainers:
    def test_list_and_tuple(self) -> None:
        assert render([1, "a"]) == '[1, "a"]'
        assert render((1,)) == "(1,)"
        assert render(()) == "()"

    def test_dict_keys_sorted(self) -> None:
        assert render({"b": 2, "a": 1}) == '{"a": 1, "b": 2}'

    def test_set_members_sorted(self) -> None:
        assert render({3, 1, 2}) == "{1, 2, 3}"
        assert render(set()) == "set()"

    def test_depth_bound(self) -> None:
        assert render([1, [2, [3, [4]]]]) == "[1, [2, [...]]]"
        assert render({"a": {"b": {"c": 1}}}) == '{"a": {"b": {...}}}'

    def test_custom_depth(self) -> None:
        assert render([1, [2]], max_depth=1) == "[1, [...]]"

    def test_circular_list_terminates(self) -> None:
        loop: list = []
        loop.append(loop)
        assert render(loop) == "[[[...]]]"

    def test_dataclass(self) -> None:
        assert render(_Point(1, 2)) == "_Point(x=1, y=2)"
        assert render([[_Point(1, 2)]]) == "[[_Point(...)]]"


class TestOther:
    def test_whitespace_collapsed(self) -> None:
        assert render("a  \t b") == '"a \\t b"'
        assert "\n" not in render(["line\none"])

    def test_bad_repr_never_raises(self) -> None:
        assert render(_BadRepr()) == "<_BadRepr object>"

    @pytest.mark.skipif(
        not hasattr(sys, "set_int_max_str_digits"), reason="no int digit limit"
    )
    def test_huge_int_never_raises(self) -> None:
        assert render(10**5000) == "<int object>"
        assert render([1, 10**5000]) == "[1, <int object>]"

    def test_dataclass_with_raising_field_never_raises(self) -> None:
        assert render(_Lazy()) == "<_Lazy object>"
        assert render([_Lazy()]) == "[<_Lazy object>]"

    def test_plain_object_uses_repr(self) -> None:
        class Thing:
            def __repr__(self) -> str:
                return "Thing(\n  1\n)"

        assert render(Thing()) == "Thing( 1 )"


class TestAbbreviate:
    def test_short_rendering_unchanged(self) -> None:
        assert abbreviate('"x"') == ('"x"', None)

    def test_exactly_threshold_is_not_abbreviated(self) -> None:
        text = "x" * 30
        assert abbreviate(text) == (text, None)

    def test_long_rendering(self) -> None:
        text = "x" * 31
        assert abbreviate(text) == ("...", f"    Full value: {text}")
