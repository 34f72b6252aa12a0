"""Jinja2 environment shared by the shim and binding synthesizers."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from jinja2 import Environment, FileSystemLoader

from ..errors import BuildError

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")


class TemplateRenderer:
    """Renders packaged templates, letting a user directory shadow them by name."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, template_name: str, context: Mapping[str, object]) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES))
        # ensure uniqueness preserving order
        seen: set[str] = set()
        ordered: list[str] = []
        for directory in directories:
            if directory not in seen:
                ordered.append(directory)
                seen.add(directory)
        loader = FileSystemLoader(ordered)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


def write_text(path: Path, text: str) -> Path:
    """Write generated text, wrapping I/O failures with the destination path."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise BuildError(f"Failed to write {path}: {exc}") from exc
    return path


def to_class_name(name: str) -> str:
    """Convert a dialect name to its C++ class prefix: `math_ext` -> `MathExt`."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


__all__ = ["TemplateRenderer", "to_class_name", "write_text"]
