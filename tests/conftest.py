"""Shared pytest fixtures for the type_assertions test suite.

Provides a small domain-name type hierarchy built on SimpleType:

    Any -> Str -> Hostname                  (no coercion)
    Any -> Str -> FQDN                      (no coercion)
    Any -> Str -> CoercibleFQDN             (Hostname -> "<host>.ourdomain.com")
"""

from __future__ import annotations

import re

import pytest

from type_assertions.model import SimpleType
from type_assertions.reporting import Reporter

_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
HOST_RE = re.compile(_LABEL)
FQDN_RE = re.compile(rf"(?:{_LABEL}\.)+[A-Za-z]{{2,63}}")


@pytest.fixture
def reporter() -> Reporter:
    return Reporter()


@pytest.fixture
def any_type() -> SimpleType:
    return SimpleType("Any", source="True")


@pytest.fixture
def str_type(any_type: SimpleType) -> SimpleType:
    return any_type.where("Str", lambda v: isinstance(v, str), source="isinstance(v, str)")


@pytest.fixture
def hostname(str_type: SimpleType) -> SimpleType:
    return str_type.where(
        "Hostname", lambda v: HOST_RE.fullmatch(v) is not None, source="HOST_RE.fullmatch(v)"
    )


@pytest.fixture
def fqdn(str_type: SimpleType) -> SimpleType:
    """FQDN without any coercion."""
    return str_type.where(
        "FQDN", lambda v: FQDN_RE.fullmatch(v) is not None, source="FQDN_RE.fullmatch(v)"
    )


@pytest.fixture
def coercible_fqdn(fqdn: SimpleType, hostname: SimpleType) -> SimpleType:
    """FQDN that turns bare hostnames into names under ourdomain.com."""
    return fqdn.plus_coercions((hostname, lambda v: f"{v}.ourdomain.com"))
