"""Shallow TableGen classification by text pattern."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Sequence

from .base import Recognizer
from ..errors import ConfigError
from ..logging import get_logger
from ..models import Capability, CapabilityFlags

# `def <Name> :` with the parent on the right-hand side. Anchoring on `def`
# keeps `class Foo_Op<...> : Op<...>` template declarations out.
_DEF_PREFIX = r"\bdef\s+\w+\s*:\s*"

# Enum info records look like attributes by name but are handled by the enum pass.
_ENUM_INFO_PARENT = r"(?!\w*(?:Int|Bit|I\d+|Bit\d+)EnumAttr<)"


class DefinitionRecognizer(Recognizer):
    """Matches `def` records whose parent is one of the given right-hand forms."""

    def __init__(self, capability: Capability, parent_pattern: str) -> None:
        self.capability = capability
        self.parent_pattern = parent_pattern
        self._regex = re.compile(_DEF_PREFIX + parent_pattern)

    def matches(self, text: str) -> bool:
        return self._regex.search(text) is not None

    def __repr__(self) -> str:
        return f"DefinitionRecognizer({self.capability.value!r}, {self.parent_pattern!r})"


class TokenRecognizer(Recognizer):
    """Matches when any of the given tokens appears anywhere in the text."""

    def __init__(self, capability: Capability, tokens: Sequence[str]) -> None:
        self.capability = capability
        self.tokens = tuple(tokens)

    def matches(self, text: str) -> bool:
        return any(token in text for token in self.tokens)

    def __repr__(self) -> str:
        return f"TokenRecognizer({self.capability.value!r}, {self.tokens!r})"


def default_recognizers() -> list[Recognizer]:
    """Return the built-in recognizers in canonical capability order."""
    return [
        DefinitionRecognizer(Capability.DIALECT, r"Dialect\s*\{"),
        DefinitionRecognizer(Capability.OPS, r"\w*_?Op<"),
        DefinitionRecognizer(Capability.TYPES, r"(?:\w*_?Type<|TypeDef<)"),
        DefinitionRecognizer(Capability.ATTRS, _ENUM_INFO_PARENT + r"(?:\w*_?Attr<|AttrDef<)"),
        TokenRecognizer(Capability.ENUMS, ("EnumAttr", "IntEnumAttr", "BitEnumAttr")),
        TokenRecognizer(Capability.FUNCTION_INTERFACE, ("FunctionOpInterface",)),
    ]


class TableGenAnalyzer:
    """Detects which generator passes a TableGen file needs."""

    def __init__(self, recognizers: Iterable[Recognizer] | None = None) -> None:
        self.recognizers = list(recognizers) if recognizers is not None else default_recognizers()
        self.logger = get_logger("analyzers.tablegen")

    def classify_text(self, text: str) -> CapabilityFlags:
        detected = {recognizer.capability for recognizer in self.recognizers if recognizer.matches(text)}
        return CapabilityFlags(
            **{f"has_{capability.value}": capability in detected for capability in Capability}
        )

    def classify_file(self, path: Path) -> CapabilityFlags:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read TableGen file '{path}': {exc}") from exc
        except UnicodeDecodeError as exc:
            raise ConfigError(f"TableGen file '{path}' is not valid UTF-8: {exc}") from exc
        flags = self.classify_text(text)
        self.logger.debug(
            "Classified %s: %s",
            path,
            ", ".join(capability.value for capability in flags.capabilities()) or "no definitions",
        )
        return flags


def classify_text(text: str) -> CapabilityFlags:
    """Classify TableGen source text with the built-in recognizers."""
    return TableGenAnalyzer().classify_text(text)


def classify_file(path: Path) -> CapabilityFlags:
    """Read a TableGen file once and classify it with the built-in recognizers."""
    return TableGenAnalyzer().classify_file(path)
