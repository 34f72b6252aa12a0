"""Core data models shared across dialectgen components."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .constants import FRAGMENT_SUFFIXES, GENERATOR_ACTIONS


class Capability(str, Enum):
    """Kinds of entity a TableGen file can define, in canonical emission order."""

    DIALECT = "dialect"
    OPS = "ops"
    TYPES = "types"
    ATTRS = "attrs"
    ENUMS = "enums"
    FUNCTION_INTERFACE = "function_interface"

    @property
    def generates(self) -> bool:
        """True when mlir-tblgen has a decls/defs pass for this capability."""
        return self.value in GENERATOR_ACTIONS

    @property
    def actions(self) -> Tuple[str, str]:
        return GENERATOR_ACTIONS[self.value]

    @property
    def suffixes(self) -> Tuple[str, str]:
        return FRAGMENT_SUFFIXES[self.value]


@dataclass(frozen=True)
class CapabilityFlags:
    """What a TableGen file (or a whole dialect) defines."""

    has_dialect: bool = False
    has_ops: bool = False
    has_types: bool = False
    has_attrs: bool = False
    has_enums: bool = False
    has_function_interface: bool = False

    def has(self, capability: Capability) -> bool:
        return bool(getattr(self, f"has_{capability.value}"))

    def has_any(self) -> bool:
        """Return True when any generator-backed capability is set."""
        return any(self.has(capability) for capability in Capability if capability.generates)

    def capabilities(self) -> List[Capability]:
        return [capability for capability in Capability if self.has(capability)]

    def __or__(self, other: "CapabilityFlags") -> "CapabilityFlags":
        if not isinstance(other, CapabilityFlags):
            return NotImplemented
        return CapabilityFlags(
            **{item.name: getattr(self, item.name) or getattr(other, item.name) for item in fields(self)}
        )


@dataclass(frozen=True)
class StemProvenance:
    """Stems of the files that contributed each capability, in input order."""

    stems: Dict[Capability, Tuple[str, ...]] = field(default_factory=dict)

    def stems_for(self, capability: Capability) -> Tuple[str, ...]:
        return self.stems.get(capability, ())

    def first(self, capability: Capability) -> Optional[str]:
        stems = self.stems_for(capability)
        return stems[0] if stems else None


@dataclass(frozen=True)
class ClassifiedFile:
    """A single input file with its stem and detected capabilities."""

    path: Path
    stem: str
    flags: CapabilityFlags


@dataclass(frozen=True)
class GeneratedFragment:
    """One `.inc` file written by mlir-tblgen."""

    source: Path
    capability: Capability
    action: str
    path: Path


__all__ = [
    "Capability",
    "CapabilityFlags",
    "ClassifiedFile",
    "GeneratedFragment",
    "StemProvenance",
]
