"""Tests for mlir-tblgen command construction and execution."""

from __future__ import annotations

from pathlib import Path

import pytest

from dialectgen.errors import GeneratorError
from dialectgen.models import Capability, CapabilityFlags
from dialectgen.tblgen import TblgenInvoker, fragment_name
from tests._fixtures.td_project import RecordingRunner


def _invoker(runner: RecordingRunner, tmp_path: Path) -> TblgenInvoker:
    return TblgenInvoker(
        tmp_path / "llvm" / "bin" / "mlir-tblgen",
        llvm_include=tmp_path / "llvm" / "include",
        runner=runner,
    )


@pytest.mark.parametrize(
    ("capability", "decls", "defs"),
    [
        (Capability.DIALECT, "BrilOpsDialect.h.inc", "BrilOpsDialect.cpp.inc"),
        (Capability.OPS, "BrilOps.h.inc", "BrilOps.cpp.inc"),
        (Capability.TYPES, "BrilOpsTypes.h.inc", "BrilOpsTypes.cpp.inc"),
        (Capability.ATTRS, "BrilOpsAttrs.h.inc", "BrilOpsAttrs.cpp.inc"),
        (Capability.ENUMS, "BrilOpsEnums.h.inc", "BrilOpsEnums.cpp.inc"),
    ],
)
def test_fragment_names_follow_stem_suffix_convention(capability, decls, defs) -> None:
    assert fragment_name("BrilOps", capability, defs=False) == decls
    assert fragment_name("BrilOps", capability, defs=True) == defs


def test_build_command_shape(tmp_path: Path) -> None:
    invoker = _invoker(RecordingRunner(), tmp_path)

    args = invoker.build_command(
        Path("src/Bril.td"),
        [Path("src"), Path("vendor")],
        Path("out/Bril.h.inc"),
        "-gen-op-decls",
        "bril",
    )

    assert args == [
        str(tmp_path / "llvm" / "bin" / "mlir-tblgen"),
        "-gen-op-decls",
        "src/Bril.td",
        "-o",
        "out/Bril.h.inc",
        "-I",
        str(tmp_path / "llvm" / "include"),
        "-I",
        "src",
        "-I",
        "vendor",
        "--dialect=bril",
    ]


def test_generate_runs_decls_then_defs_in_canonical_order(tmp_path: Path) -> None:
    runner = RecordingRunner()
    out_dir = tmp_path / "inc"
    flags = CapabilityFlags(
        has_types=True, has_dialect=True, has_ops=True, has_function_interface=True
    )

    fragments = _invoker(runner, tmp_path).generate_for_file(
        tmp_path / "Bril.td", [tmp_path], out_dir, "bril", flags
    )

    assert [call[1] for call in runner.calls] == [
        "-gen-dialect-decls",
        "-gen-dialect-defs",
        "-gen-op-decls",
        "-gen-op-defs",
        "-gen-typedef-decls",
        "-gen-typedef-defs",
    ]
    assert [fragment.path.name for fragment in fragments] == [
        "BrilDialect.h.inc",
        "BrilDialect.cpp.inc",
        "Bril.h.inc",
        "Bril.cpp.inc",
        "BrilTypes.h.inc",
        "BrilTypes.cpp.inc",
    ]
    assert all(fragment.path.exists() for fragment in fragments)
    assert fragments[2].capability is Capability.OPS


def test_generate_with_no_capabilities_runs_nothing(tmp_path: Path) -> None:
    runner = RecordingRunner()

    fragments = _invoker(runner, tmp_path).generate_for_file(
        tmp_path / "Helpers.td", [], tmp_path / "inc", "bril", CapabilityFlags()
    )

    assert fragments == []
    assert runner.calls == []


def test_failed_pass_raises_generator_error_with_diagnostics(tmp_path: Path) -> None:
    runner = RecordingRunner(fail_on=["-gen-op-defs"], stderr="Bril.td:3:1: error: unknown class\n")

    with pytest.raises(GeneratorError) as excinfo:
        _invoker(runner, tmp_path).generate_for_file(
            tmp_path / "Bril.td", [], tmp_path / "inc", "bril", CapabilityFlags(has_ops=True)
        )

    error = excinfo.value
    assert error.action == "-gen-op-defs"
    assert "unknown class" in error.stderr
    assert "mlir-tblgen -gen-op-defs failed" in str(error)
    assert "unknown class" in str(error)
    # The decls pass ran before the failing defs pass, and nothing after it.
    assert [call[1] for call in runner.calls] == ["-gen-op-decls", "-gen-op-defs"]
