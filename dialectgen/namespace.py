"""C++ namespace validation and include subdirectory resolution."""

from __future__ import annotations

import re
from typing import Optional

from .constants import IDENTIFIER_PATTERN, NAMESPACE_SEPARATOR, ROOT_NAMESPACE
from .errors import ConfigError

_PATTERN_HINT = f"'{ROOT_NAMESPACE}{NAMESPACE_SEPARATOR}namespace'"
_IDENTIFIER = re.compile(IDENTIFIER_PATTERN)


def default_namespace(dialect_name: str) -> str:
    """Return the namespace used when none is configured, e.g. `mlir::toy`."""
    return f"{ROOT_NAMESPACE}{NAMESPACE_SEPARATOR}{dialect_name}"


def resolve_namespace_subdir(namespace: Optional[str]) -> Optional[str]:
    """Map `mlir::<dialect>` to the `<dialect>` subdirectory for generated includes.

    Returns None when no namespace is configured (or it is blank), in which
    case fragments live directly under `inc/`. Anything other than exactly two
    non-empty segments rooted at `mlir` is rejected, since the subdirectory
    ends up in every include path of the synthesized shim.
    """
    if namespace is None:
        return None
    trimmed = namespace.strip()
    if not trimmed:
        return None

    if trimmed.startswith(NAMESPACE_SEPARATOR) or trimmed.endswith(NAMESPACE_SEPARATOR):
        raise ConfigError(
            f"cpp_namespace '{namespace}' has invalid leading or trailing '{NAMESPACE_SEPARATOR}'."
        )

    parts = trimmed.split(NAMESPACE_SEPARATOR)
    if len(parts) == 1:
        raise ConfigError(
            f"cpp_namespace '{namespace}' must use the {_PATTERN_HINT} pattern. "
            f"Did you mean '{default_namespace(parts[0])}'?"
        )
    if len(parts) > 2:
        raise ConfigError(
            f"cpp_namespace '{namespace}' has more than 2 levels. "
            f"Only {_PATTERN_HINT} pattern is supported."
        )

    root, dialect = (part.strip() for part in parts)
    if root != ROOT_NAMESPACE:
        raise ConfigError(
            f"cpp_namespace '{namespace}' must use the {_PATTERN_HINT} pattern; "
            f"the first segment must be '{ROOT_NAMESPACE}', not '{root}'."
        )
    if not dialect:
        raise ConfigError(f"cpp_namespace '{namespace}' has an empty dialect segment.")
    if not _IDENTIFIER.match(dialect):
        raise ConfigError(
            f"cpp_namespace '{namespace}' has an invalid dialect segment '{dialect}'; "
            "it must be a C identifier (letters, digits, underscores)."
        )
    return dialect


def validate_namespace(namespace: Optional[str], dialect_name: str) -> str:
    """Return the namespace the shim is wrapped in, defaulting to `mlir::<dialect>`."""
    subdir = resolve_namespace_subdir(namespace)
    if subdir is None:
        return default_namespace(dialect_name)
    return default_namespace(subdir)


__all__ = ["default_namespace", "resolve_namespace_subdir", "validate_namespace"]
