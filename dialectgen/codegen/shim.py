"""C++ registration shim synthesis."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..constants import NAMESPACE_SEPARATOR, REGISTRATION_MACRO
from ..models import Capability, CapabilityFlags, StemProvenance
from ..namespace import default_namespace
from ..tblgen import fragment_name
from .renderer import TemplateRenderer, to_class_name, write_text

SHIM_TEMPLATE = "shim.cpp.j2"

# Include order follows declaration dependencies: enums are used by
# attributes, attributes and types by operations.
_INCLUDE_ORDER: Tuple[Capability, ...] = (
    Capability.DIALECT,
    Capability.ENUMS,
    Capability.ATTRS,
    Capability.TYPES,
    Capability.OPS,
)

_CLASS_GUARDS: Dict[Capability, str] = {
    Capability.ATTRS: "GET_ATTRDEF_CLASSES",
    Capability.TYPES: "GET_TYPEDEF_CLASSES",
    Capability.OPS: "GET_OP_CLASSES",
}

# (capability, Dialect method, list guard)
_REGISTRATIONS: Tuple[Tuple[Capability, str, str], ...] = (
    (Capability.OPS, "addOperations", "GET_OP_LIST"),
    (Capability.TYPES, "addTypes", "GET_TYPEDEF_LIST"),
    (Capability.ATTRS, "addAttributes", "GET_ATTRDEF_LIST"),
)


@dataclass(frozen=True)
class IncludeBlock:
    path: str
    guard: Optional[str] = None


@dataclass(frozen=True)
class Registration:
    method: str
    guard: str
    paths: Tuple[str, ...]


def include_path(stem: str, capability: Capability, subdir: Optional[str], *, defs: bool) -> str:
    name = fragment_name(stem, capability, defs=defs)
    return f"{subdir}/{name}" if subdir else name


class ShimSynthesizer:
    """Produces the C++ source that registers a dialect through the MLIR C API."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def render(
        self,
        dialect_name: str,
        cpp_namespace: Optional[str],
        options: CapabilityFlags,
        provenance: StemProvenance,
        subdir: Optional[str],
    ) -> str:
        namespace = (cpp_namespace or "").strip() or default_namespace(dialect_name)
        context = {
            "dialect_name": dialect_name,
            "class_name": to_class_name(dialect_name),
            "cpp_namespace": namespace,
            "namespace_parts": namespace.split(NAMESPACE_SEPARATOR),
            "options": options,
            "declarations": self._blocks(options, provenance, subdir, defs=False),
            "definitions": self._blocks(options, provenance, subdir, defs=True),
            "registrations": self._registrations(options, provenance, subdir),
            "registration_macro": REGISTRATION_MACRO,
        }
        return self.renderer.render(SHIM_TEMPLATE, context)

    @staticmethod
    def _blocks(
        options: CapabilityFlags,
        provenance: StemProvenance,
        subdir: Optional[str],
        *,
        defs: bool,
    ) -> List[IncludeBlock]:
        blocks: List[IncludeBlock] = []
        for capability in _INCLUDE_ORDER:
            if not options.has(capability):
                continue
            guard = _CLASS_GUARDS.get(capability)
            for stem in provenance.stems_for(capability):
                blocks.append(IncludeBlock(path=include_path(stem, capability, subdir, defs=defs), guard=guard))
        return blocks

    @staticmethod
    def _registrations(
        options: CapabilityFlags,
        provenance: StemProvenance,
        subdir: Optional[str],
    ) -> List[Registration]:
        registrations: List[Registration] = []
        for capability, method, guard in _REGISTRATIONS:
            stems = provenance.stems_for(capability)
            if not options.has(capability) or not stems:
                continue
            paths = tuple(include_path(stem, capability, subdir, defs=True) for stem in stems)
            registrations.append(Registration(method=method, guard=guard, paths=paths))
        return registrations


def render_shim(
    dialect_name: str,
    cpp_namespace: Optional[str],
    options: CapabilityFlags,
    provenance: StemProvenance,
    subdir: Optional[str],
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    return ShimSynthesizer(renderer).render(dialect_name, cpp_namespace, options, provenance, subdir)


def shim_filename(dialect_name: str) -> str:
    return f"{dialect_name}_capi.cpp"


def write_shim(output_dir: Path, dialect_name: str, text: str) -> Path:
    return write_text(Path(output_dir) / shim_filename(dialect_name), text)


__all__ = ["ShimSynthesizer", "include_path", "render_shim", "shim_filename", "write_shim"]
