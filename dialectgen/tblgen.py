"""mlir-tblgen execution wrapper."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .errors import GeneratorError
from .generation import file_stem
from .logging import get_logger
from .models import Capability, CapabilityFlags, GeneratedFragment
from .process import CommandRunner, SubprocessRunner


def fragment_name(stem: str, capability: Capability, *, defs: bool) -> str:
    """Return the `.inc` file name mlir-tblgen writes for a stem and pass."""
    decls_suffix, defs_suffix = capability.suffixes
    return f"{stem}{defs_suffix if defs else decls_suffix}"


class TblgenInvoker:
    """Runs the decls and defs passes a TableGen file needs.

    Output names are derived from the TD file stem (`BrilOps.td` produces
    `BrilOpsDialect.h.inc`, `BrilOps.h.inc`, ...), matching MLIR convention.
    """

    def __init__(
        self,
        tblgen_path: Path,
        *,
        llvm_include: Path | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.tblgen_path = Path(tblgen_path)
        self.llvm_include = llvm_include
        self._runner = runner or SubprocessRunner()
        self.logger = get_logger("tblgen")

    def generate_for_file(
        self,
        td_file: Path,
        include_dirs: Sequence[Path],
        output_dir: Path,
        dialect_name: str,
        flags: CapabilityFlags,
    ) -> List[GeneratedFragment]:
        stem = file_stem(td_file)
        fragments: List[GeneratedFragment] = []
        for capability in flags.capabilities():
            if not capability.generates:
                continue
            for defs, action in enumerate(capability.actions):
                output = Path(output_dir) / fragment_name(stem, capability, defs=bool(defs))
                self.run_tblgen(td_file, include_dirs, output, action, dialect_name)
                fragments.append(
                    GeneratedFragment(source=Path(td_file), capability=capability, action=action, path=output)
                )
        return fragments

    def build_command(
        self,
        td_file: Path,
        include_dirs: Sequence[Path],
        output: Path,
        action: str,
        dialect_name: str | None,
    ) -> List[str]:
        args = [str(self.tblgen_path), action, str(td_file), "-o", str(output)]
        if self.llvm_include is not None:
            args.extend(["-I", str(self.llvm_include)])
        for include_dir in include_dirs:
            args.extend(["-I", str(include_dir)])
        if dialect_name:
            args.append(f"--dialect={dialect_name}")
        return args

    def run_tblgen(
        self,
        td_file: Path,
        include_dirs: Sequence[Path],
        output: Path,
        action: str,
        dialect_name: str | None,
    ) -> None:
        args = self.build_command(td_file, include_dirs, output, action, dialect_name)
        self.logger.debug("Running %s", " ".join(args))
        result = self._runner.run(args)
        if not result.ok:
            raise GeneratorError(action, result.stderr)


__all__ = ["TblgenInvoker", "fragment_name"]
