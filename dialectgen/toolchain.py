"""LLVM/MLIR install discovery and static library compilation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .constants import (
    AR_ENV,
    CXX_ENV,
    CXX_FLAGS,
    LLVM_CONFIG_BINARY,
    LLVM_PREFIX_ENV,
    MLIR_LINK_LIBRARIES,
    TBLGEN_BINARY,
)
from .errors import CompileError, ToolchainNotFoundError
from .logging import get_logger
from .process import CommandRunner, SubprocessRunner

_logger = get_logger("toolchain")


@dataclass(frozen=True)
class Toolchain:
    """Paths inside an LLVM/MLIR install prefix."""

    prefix: Path

    @property
    def include_dir(self) -> Path:
        return self.prefix / "include"

    @property
    def lib_dir(self) -> Path:
        return self.prefix / "lib"

    @property
    def tblgen_path(self) -> Path:
        return self.prefix / "bin" / TBLGEN_BINARY

    @property
    def link_libraries(self) -> tuple[str, ...]:
        return MLIR_LINK_LIBRARIES

    def require_tblgen(self) -> Path:
        path = self.tblgen_path
        if not path.exists():
            raise ToolchainNotFoundError(path=path)
        return path


def library_name(dialect_name: str) -> str:
    """Static library name the shim is archived under, without `lib`/`.a`."""
    return f"{dialect_name}_dialect"


def version_prefix_env(major: int) -> str:
    """Name of the override variable for an LLVM major version, e.g. MLIR_SYS_210_PREFIX."""
    return f"MLIR_SYS_{major}0_PREFIX"


def discover_llvm_prefix(
    runner: CommandRunner | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Locate the LLVM install prefix.

    Order: `llvm-config --prefix` (with `MLIR_SYS_<major>0_PREFIX` taking
    precedence once the version is known), then `LLVM_PREFIX`.
    """
    runner = runner or SubprocessRunner()
    env = os.environ if environ is None else environ

    prefix = _llvm_config(runner, "--prefix")
    if prefix:
        version = _llvm_config(runner, "--version")
        major = _parse_major(version)
        if major is not None:
            override = env.get(version_prefix_env(major))
            if override:
                _logger.debug("Using %s=%s", version_prefix_env(major), override)
                return Path(override)
        return Path(prefix)

    fallback = env.get(LLVM_PREFIX_ENV)
    if fallback:
        return Path(fallback)

    raise ToolchainNotFoundError()


def discover_toolchain(
    runner: CommandRunner | None = None,
    environ: Mapping[str, str] | None = None,
) -> Toolchain:
    prefix = discover_llvm_prefix(runner, environ)
    _logger.info("Using LLVM/MLIR install at %s", prefix)
    return Toolchain(prefix=prefix)


def _llvm_config(runner: CommandRunner, arg: str) -> Optional[str]:
    try:
        result = runner.run([LLVM_CONFIG_BINARY, arg])
    except ToolchainNotFoundError:
        return None
    if not result.ok:
        return None
    value = result.stdout.strip()
    return value or None


def _parse_major(version: Optional[str]) -> Optional[int]:
    if not version:
        return None
    head = version.split(".", 1)[0].strip()
    try:
        return int(head)
    except ValueError:
        return None


class StaticLibraryCompiler:
    """Compiles the shim and extra sources into `lib<name>_dialect.a`."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        cxx: str | None = None,
        ar: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        env = os.environ if environ is None else environ
        self._runner = runner or SubprocessRunner()
        self.cxx = cxx or env.get(CXX_ENV) or "c++"
        self.ar = ar or env.get(AR_ENV) or "ar"
        self.logger = get_logger("toolchain.compiler")

    def compile(
        self,
        dialect_name: str,
        sources: Sequence[Path],
        include_dirs: Sequence[Path],
        inc_dir: Path,
        toolchain: Toolchain,
        build_dir: Path,
    ) -> Path:
        """Compile every source to an object file and archive them; return the archive path."""
        objects_dir = Path(build_dir) / "obj"
        try:
            objects_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CompileError(f"Failed to create object directory {objects_dir}: {exc}") from exc

        objects: List[Path] = []
        for index, source in enumerate(sources):
            obj = objects_dir / f"{index:02d}-{Path(source).stem}.o"
            args = self.compile_command(source, obj, include_dirs, inc_dir, toolchain)
            self.logger.debug("Compiling %s", source)
            result = self._runner.run(args)
            if not result.ok:
                raise CompileError(f"Compiling {source} failed:\n{result.stderr.strip()}")
            objects.append(obj)

        archive = Path(build_dir) / f"lib{library_name(dialect_name)}.a"
        try:
            archive.unlink(missing_ok=True)
        except OSError as exc:
            raise CompileError(f"Failed to remove stale archive {archive}: {exc}") from exc
        result = self._runner.run([self.ar, "rcs", str(archive), *[str(obj) for obj in objects]])
        if not result.ok:
            raise CompileError(f"Archiving {archive.name} failed:\n{result.stderr.strip()}")
        return archive

    def compile_command(
        self,
        source: Path,
        output: Path,
        include_dirs: Sequence[Path],
        inc_dir: Path,
        toolchain: Toolchain,
    ) -> List[str]:
        args = [self.cxx, *CXX_FLAGS]
        # LLVM headers and generated fragments are compiled as system headers.
        args.extend(["-isystem", str(toolchain.include_dir), "-isystem", str(inc_dir)])
        args.append(f"-I{inc_dir}")
        args.extend(f"-I{directory}" for directory in include_dirs)
        args.extend(["-c", str(source), "-o", str(output)])
        return args


__all__ = [
    "StaticLibraryCompiler",
    "Toolchain",
    "discover_llvm_prefix",
    "discover_toolchain",
    "library_name",
    "version_prefix_env",
]
