"""Build configuration and loading of the project file (.dialectgen.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import yaml

from .constants import CONFIG_FILENAME, IDENTIFIER_PATTERN
from .errors import ConfigError

_IDENTIFIER = re.compile(IDENTIFIER_PATTERN)


@dataclass(frozen=True)
class BuildConfig:
    """Everything the pipeline needs to build one dialect.

    Each `with_*` method returns an updated copy; the record itself never changes.
    """

    name: str
    cpp_namespace: Optional[str] = None
    td_files: Tuple[Path, ...] = ()
    include_dirs: Tuple[Path, ...] = ()
    cpp_files: Tuple[Path, ...] = ()
    output_dir: Optional[Path] = None

    def with_cpp_namespace(self, namespace: str) -> "BuildConfig":
        return replace(self, cpp_namespace=namespace)

    def with_td_files(self, paths: Iterable[str | Path]) -> "BuildConfig":
        return replace(self, td_files=self.td_files + _as_paths(paths))

    def with_include_dirs(self, paths: Iterable[str | Path]) -> "BuildConfig":
        return replace(self, include_dirs=self.include_dirs + _as_paths(paths))

    def with_cpp_files(self, paths: Iterable[str | Path]) -> "BuildConfig":
        return replace(self, cpp_files=self.cpp_files + _as_paths(paths))

    def with_output_dir(self, path: str | Path) -> "BuildConfig":
        return replace(self, output_dir=Path(path))

    def validate(self) -> None:
        """Reject configurations that can never build, before any work starts."""
        if not self.name or not self.name.strip():
            raise ConfigError("Dialect name must be a non-empty string")
        if not _IDENTIFIER.match(self.name):
            raise ConfigError(
                f"Dialect name '{self.name}' must be a C identifier (letters, digits, underscores)"
            )
        if not self.td_files:
            raise ConfigError(f"Dialect '{self.name}' has no TableGen files; add at least one td_file")


@dataclass
class ProjectConfig:
    """Represents the settings defined in .dialectgen.yml."""

    root: Path
    build: BuildConfig
    templates_dir: Optional[Path] = None


def load_config(config_path: Path) -> ProjectConfig:
    """Load a project file; relative paths resolve against its directory."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        raise ConfigError(f"Project file not found: {config_file}")

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    dialect_data = _as_dict(data.get("dialect"))
    name = _as_str(dialect_data.get("name"))
    if not name:
        raise ConfigError(f"{config_file.name} must define dialect.name")

    build = BuildConfig(
        name=name,
        cpp_namespace=_as_str(dialect_data.get("namespace")),
        td_files=_resolve_all(root, _as_str_list(dialect_data.get("td_files"))),
        include_dirs=_resolve_all(root, _as_str_list(dialect_data.get("include_dirs"))),
        cpp_files=_resolve_all(root, _as_str_list(dialect_data.get("cpp_files"))),
    )

    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        build = build.with_output_dir(root / output_dir)

    templates_dir_str = _as_str(data.get("templates_dir"))
    templates_dir = root / templates_dir_str if templates_dir_str else None

    return ProjectConfig(root=root, build=build, templates_dir=templates_dir)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _resolve_all(root: Path, values: Sequence[str]) -> Tuple[Path, ...]:
    return tuple(root / value for value in values)


def _as_paths(paths: Iterable[str | Path]) -> Tuple[Path, ...]:
    if isinstance(paths, (str, Path)):
        return (Path(paths),)
    return tuple(Path(path) for path in paths)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["BuildConfig", "ProjectConfig", "load_config"]
