"""External process execution used for llvm-config, mlir-tblgen and the C++ toolchain."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from .errors import ToolchainNotFoundError


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external process invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Runs one external command to completion."""

    def run(self, args: Sequence[str | Path], *, cwd: Path | None = None) -> CommandResult:
        ...


class SubprocessRunner:
    """Default runner backed by `subprocess.run` with captured output."""

    def run(self, args: Sequence[str | Path], *, cwd: Path | None = None) -> CommandResult:
        argv = [str(arg) for arg in args]
        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                check=False,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            raise ToolchainNotFoundError(f"Unable to locate '{argv[0]}': {exc}") from exc
        return CommandResult(
            args=tuple(argv),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


__all__ = ["CommandResult", "CommandRunner", "SubprocessRunner"]
