"""Rust binding module synthesis for melior."""

from __future__ import annotations

from pathlib import Path

from ..toolchain import library_name
from .renderer import TemplateRenderer, write_text

BINDINGS_TEMPLATE = "register.rs.j2"


def handle_symbol(dialect_name: str) -> str:
    """C symbol defined by MLIR_DEFINE_CAPI_DIALECT_REGISTRATION for a dialect."""
    return f"mlirGetDialectHandle__{dialect_name}__"


def module_name(dialect_name: str) -> str:
    return f"{dialect_name}_registration"


def render_bindings(dialect_name: str, *, renderer: TemplateRenderer | None = None) -> str:
    """Render the module exposing dialect_handle/register/load/insert_into_registry."""
    renderer = renderer or TemplateRenderer()
    context = {
        "dialect_name": dialect_name,
        "module_name": module_name(dialect_name),
        "handle_symbol": handle_symbol(dialect_name),
        "library": library_name(dialect_name),
    }
    return renderer.render(BINDINGS_TEMPLATE, context)


def bindings_filename(dialect_name: str) -> str:
    return f"{dialect_name}_register.rs"


def write_bindings(output_dir: Path, dialect_name: str, text: str) -> Path:
    return write_text(Path(output_dir) / bindings_filename(dialect_name), text)


__all__ = [
    "bindings_filename",
    "handle_symbol",
    "module_name",
    "render_bindings",
    "write_bindings",
]
