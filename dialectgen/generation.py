"""Folding per-file classifications into dialect-wide generation options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from .analyzers import TableGenAnalyzer
from .errors import ConfigError
from .models import Capability, CapabilityFlags, ClassifiedFile, StemProvenance


@dataclass(frozen=True)
class Aggregate:
    """Dialect-wide capabilities plus the stems that contributed each one."""

    files: Tuple[ClassifiedFile, ...]
    options: CapabilityFlags
    provenance: StemProvenance


def file_stem(path: Path) -> str:
    """Return the base name of a TableGen file without its extension."""
    stem = Path(path).stem
    if not stem or stem in {".", ".."}:
        raise ConfigError(f"Invalid TD file path: '{path}' has no file stem")
    return stem


def classify_files(
    paths: Sequence[Path], analyzer: TableGenAnalyzer | None = None
) -> List[ClassifiedFile]:
    """Classify every input file; stems are checked before any file is read.

    Fragment names are derived from the stem alone, so two inputs sharing a
    stem would write the same `.inc` files and are rejected.
    """
    analyzer = analyzer or TableGenAnalyzer()
    stems = [file_stem(path) for path in paths]
    seen: Dict[str, Path] = {}
    for path, stem in zip(paths, stems):
        if stem not in seen:
            seen[stem] = Path(path)
            continue
        if seen[stem] == Path(path):
            raise ConfigError(f"TableGen file '{path}' is listed more than once")
        raise ConfigError(
            f"TableGen files '{seen[stem]}' and '{path}' share the stem '{stem}'; "
            "their generated fragments would overwrite each other. Rename one of them."
        )
    return [
        ClassifiedFile(path=Path(path), stem=stem, flags=analyzer.classify_file(Path(path)))
        for path, stem in zip(paths, stems)
    ]


def aggregate(files: Iterable[ClassifiedFile]) -> Aggregate:
    """OR every file's flags together and track provenance per capability."""
    classified = tuple(files)
    options = CapabilityFlags()
    stems: Dict[Capability, List[str]] = {}
    for item in classified:
        options = options | item.flags
        for capability in item.flags.capabilities():
            contributors = stems.setdefault(capability, [])
            if item.stem not in contributors:
                contributors.append(item.stem)

    provenance = StemProvenance(
        stems={capability: tuple(stems[capability]) for capability in Capability if capability in stems}
    )
    return Aggregate(files=classified, options=options, provenance=provenance)


def check_dialect_definition(result: Aggregate) -> None:
    """Require exactly one input file to define the dialect itself."""
    dialect_files = [item for item in result.files if item.flags.has_dialect]
    if not dialect_files:
        names = ", ".join(str(item.path) for item in result.files) or "(none)"
        raise ConfigError(f"No TableGen file defines a Dialect record (inputs: {names})")
    if len(dialect_files) > 1:
        names = ", ".join(str(item.path) for item in dialect_files)
        raise ConfigError(f"Dialect is defined in more than one TableGen file: {names}")


__all__ = ["Aggregate", "aggregate", "check_dialect_definition", "classify_files", "file_stem"]
