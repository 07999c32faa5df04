from __future__ import annotations

import pytest
from pydantic import ValidationError

from bnfc.core.errors import UsageError
from bnfc.options.model import (
    XML_NONE,
    AlexVersion,
    HappyMode,
    SharedOptions,
    Target,
    build_options,
    target_from_value,
)


def test_defaults() -> None:
    opts = SharedOptions()
    assert opts.target is Target.HASKELL
    assert opts.alex_mode is AlexVersion.ALEX3
    assert opts.glr is HappyMode.STANDARD
    assert opts.xml == XML_NONE
    assert opts.in_package is None
    assert opts.lang == ""


def test_target_values_roundtrip() -> None:
    for target in Target:
        assert target_from_value(target.value) is target
    assert target_from_value("fortran") is None


def test_frozen_and_extra_forbidden() -> None:
    opts = SharedOptions(lang="Calc")
    with pytest.raises(ValidationError):
        opts.lang = "Other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        SharedOptions(colour="blue")  # type: ignore[call-arg]


@pytest.mark.parametrize("package", ["org.example", "A", "a_b.c1"])
def test_valid_packages(package: str) -> None:
    assert build_options(in_package=package).in_package == package


@pytest.mark.parametrize("fields", [{"xml": 3}, {"xml": -1}, {"in_package": "a..b"}, {"in_package": "1abc"}])
def test_build_options_reports_usage_error(fields: dict) -> None:
    with pytest.raises(UsageError, match="invalid option"):
        build_options(**fields)
