"""Build-time registration of custom MLIR dialects from TableGen definitions."""

from __future__ import annotations

from .builder import BuildResult, DialectBuilder
from .config import BuildConfig, load_config
from .errors import (
    BuildError,
    CompileError,
    ConfigError,
    DialectGenError,
    GeneratorError,
    ToolchainNotFoundError,
)
from .models import Capability, CapabilityFlags, StemProvenance

__version__ = "0.1.0"

__all__ = [
    "BuildConfig",
    "BuildError",
    "BuildResult",
    "Capability",
    "CapabilityFlags",
    "CompileError",
    "ConfigError",
    "DialectBuilder",
    "DialectGenError",
    "GeneratorError",
    "StemProvenance",
    "ToolchainNotFoundError",
    "load_config",
]
