"""Tests for Rust binding module rendering."""

from __future__ import annotations

from pathlib import Path

from dialectgen.codegen import bindings_filename, handle_symbol, render_bindings, write_bindings


def test_bindings_expose_registration_functions() -> None:
    text = render_bindings("my_dialect")

    assert "mod my_dialect_registration" in text
    assert "pub use my_dialect_registration::" in text
    for function in ("dialect_handle", "register", "load", "insert_into_registry"):
        assert f"pub fn {function}(" in text
    assert "::melior::dialect::DialectHandle" in text


def test_bindings_link_static_library_and_symbol() -> None:
    text = render_bindings("operand_test")

    assert handle_symbol("operand_test") == "mlirGetDialectHandle__operand_test__"
    assert "fn mlirGetDialectHandle__operand_test__()" in text
    assert '#[link(name = "operand_test_dialect", kind = "static")]' in text


def test_bindings_are_balanced() -> None:
    text = render_bindings("bril")

    assert text.count("{") == text.count("}")
    assert text.count("(") == text.count(")")


def test_distinct_dialects_do_not_collide() -> None:
    first = render_bindings("alpha")
    second = render_bindings("beta")

    assert "mod alpha_registration" in first
    assert "beta" not in first
    assert "mod beta_registration" in second
    assert "alpha" not in second


def test_write_bindings(tmp_path: Path) -> None:
    path = write_bindings(tmp_path, "bril", render_bindings("bril"))

    assert path.name == bindings_filename("bril") == "bril_register.rs"
    assert "mlirGetDialectHandle__bril__" in path.read_text(encoding="utf-8")
