"""TableGen content classification."""

from __future__ import annotations

from .base import Recognizer
from .tablegen import (
    DefinitionRecognizer,
    TableGenAnalyzer,
    TokenRecognizer,
    classify_file,
    classify_text,
    default_recognizers,
)

__all__ = [
    "DefinitionRecognizer",
    "Recognizer",
    "TableGenAnalyzer",
    "TokenRecognizer",
    "classify_file",
    "classify_text",
    "default_recognizers",
]
