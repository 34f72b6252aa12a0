"""Error hierarchy raised by the dialect build pipeline."""

from __future__ import annotations

from pathlib import Path


class DialectGenError(RuntimeError):
    """Base class for every failure surfaced by dialectgen."""


class ConfigError(DialectGenError):
    """Raised when the build configuration is missing or malformed."""


class ToolchainNotFoundError(DialectGenError):
    """Raised when the LLVM/MLIR installation or one of its tools cannot be located."""

    def __init__(self, message: str | None = None, *, path: Path | None = None) -> None:
        if message is None:
            if path is not None:
                message = f"Could not find mlir-tblgen binary at {path}"
            else:
                message = (
                    "Could not find LLVM/MLIR installation. Ensure llvm-config is in PATH, "
                    "or set LLVM_PREFIX (or MLIR_SYS_<major>0_PREFIX to override the "
                    "prefix reported by llvm-config)."
                )
        super().__init__(message)
        self.path = path


class GeneratorError(DialectGenError):
    """Raised when mlir-tblgen exits with a non-zero status."""

    def __init__(self, action: str, stderr: str) -> None:
        detail = stderr.strip() or "(no diagnostic output)"
        super().__init__(f"mlir-tblgen {action} failed:\n{detail}")
        self.action = action
        self.stderr = stderr


class CompileError(DialectGenError):
    """Raised when the C++ shim or the static archive cannot be built."""


class BuildError(DialectGenError):
    """Raised for pipeline misuse and wrapped I/O failures."""


__all__ = [
    "BuildError",
    "CompileError",
    "ConfigError",
    "DialectGenError",
    "GeneratorError",
    "ToolchainNotFoundError",
]
