"""Synthesis of the C++ registration shim and the Rust binding module."""

from __future__ import annotations

from .bindings import bindings_filename, handle_symbol, render_bindings, write_bindings
from .renderer import TemplateRenderer, to_class_name
from .shim import ShimSynthesizer, include_path, render_shim, shim_filename, write_shim

__all__ = [
    "ShimSynthesizer",
    "TemplateRenderer",
    "bindings_filename",
    "handle_symbol",
    "include_path",
    "render_bindings",
    "render_shim",
    "shim_filename",
    "to_class_name",
    "write_bindings",
    "write_shim",
]
