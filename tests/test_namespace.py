"""Tests for namespace validation and subdirectory resolution."""

from __future__ import annotations

import pytest

from dialectgen.errors import ConfigError
from dialectgen.namespace import default_namespace, resolve_namespace_subdir, validate_namespace


def test_two_level_namespace_resolves_to_dialect_segment() -> None:
    assert resolve_namespace_subdir("mlir::bril") == "bril"


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
def test_absent_or_blank_namespace_has_no_subdir(value) -> None:
    assert resolve_namespace_subdir(value) is None


def test_surrounding_whitespace_is_trimmed() -> None:
    assert resolve_namespace_subdir("  mlir::bril  ") == "bril"


def test_single_level_suggests_two_level_form() -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve_namespace_subdir("bril")

    message = str(excinfo.value)
    assert "must use the 'mlir::namespace' pattern" in message
    assert "Did you mean 'mlir::bril'" in message


def test_root_alone_is_single_level() -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve_namespace_subdir("mlir")

    assert "must use the 'mlir::namespace' pattern" in str(excinfo.value)


def test_three_levels_are_rejected() -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve_namespace_subdir("mlir::foo::bar")

    assert "has more than 2 levels" in str(excinfo.value)


@pytest.mark.parametrize("value", ["mlir::bril::", "::mlir::bril", "::bril"])
def test_leading_or_trailing_separator_is_rejected(value: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve_namespace_subdir(value)

    assert "invalid leading or trailing '::'" in str(excinfo.value)
    assert value in str(excinfo.value)


def test_wrong_root_is_rejected() -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve_namespace_subdir("llvm::bril")

    message = str(excinfo.value)
    assert "must use the 'mlir::namespace' pattern" in message
    assert "'llvm'" in message


def test_resolution_is_idempotent() -> None:
    assert resolve_namespace_subdir("mlir::toy") == resolve_namespace_subdir("mlir::toy")


def test_validate_namespace_defaults_to_dialect_name() -> None:
    assert default_namespace("math_ext") == "mlir::math_ext"
    assert validate_namespace(None, "math_ext") == "mlir::math_ext"
    assert validate_namespace(" mlir::bril ", "ignored") == "mlir::bril"


@pytest.mark.parametrize("value", ["mlir:::bril", "mlir::bril x", "mlir::1bril", "mlir::bril-ext"])
def test_dialect_segment_must_be_identifier(value: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve_namespace_subdir(value)

    message = str(excinfo.value)
    assert "invalid dialect segment" in message
    assert value in message


def test_identifier_segment_with_underscore_resolves() -> None:
    assert resolve_namespace_subdir("mlir::math_ext") == "math_ext"
