"""Shared constants for classification, generation and synthesis."""

from __future__ import annotations

ROOT_NAMESPACE = "mlir"
NAMESPACE_SEPARATOR = "::"

# C identifier; used for dialect names and namespace segments.
IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

OUT_DIR_ENV = "OUT_DIR"
LLVM_PREFIX_ENV = "LLVM_PREFIX"
CXX_ENV = "CXX"
AR_ENV = "AR"

TBLGEN_BINARY = "mlir-tblgen"
LLVM_CONFIG_BINARY = "llvm-config"

INC_DIRNAME = "inc"
CONFIG_FILENAME = ".dialectgen.yml"

# (decls action, defs action) and (decls suffix, defs suffix) per capability.
# Output names follow the MLIR convention `<stem><suffix>`.
GENERATOR_ACTIONS: dict[str, tuple[str, str]] = {
    "dialect": ("-gen-dialect-decls", "-gen-dialect-defs"),
    "ops": ("-gen-op-decls", "-gen-op-defs"),
    "types": ("-gen-typedef-decls", "-gen-typedef-defs"),
    "attrs": ("-gen-attrdef-decls", "-gen-attrdef-defs"),
    "enums": ("-gen-enum-decls", "-gen-enum-defs"),
}

FRAGMENT_SUFFIXES: dict[str, tuple[str, str]] = {
    "dialect": ("Dialect.h.inc", "Dialect.cpp.inc"),
    "ops": (".h.inc", ".cpp.inc"),
    "types": ("Types.h.inc", "Types.cpp.inc"),
    "attrs": ("Attrs.h.inc", "Attrs.cpp.inc"),
    "enums": ("Enums.h.inc", "Enums.cpp.inc"),
}

REGISTRATION_MACRO = "MLIR_DEFINE_CAPI_DIALECT_REGISTRATION"

MLIR_LINK_LIBRARIES: tuple[str, ...] = ("MLIRIR", "MLIRSupport", "MLIRCAPIIR")

CXX_FLAGS: tuple[str, ...] = (
    "-std=c++17",
    "-fno-rtti",
    "-fno-exceptions",
    "-fPIC",
    "-Wno-unused-parameter",
    "-DMLIR_CAPI_BUILDING_LIBRARY=1",
)


__all__ = [
    "AR_ENV",
    "CONFIG_FILENAME",
    "CXX_ENV",
    "CXX_FLAGS",
    "FRAGMENT_SUFFIXES",
    "GENERATOR_ACTIONS",
    "IDENTIFIER_PATTERN",
    "INC_DIRNAME",
    "LLVM_CONFIG_BINARY",
    "LLVM_PREFIX_ENV",
    "MLIR_LINK_LIBRARIES",
    "NAMESPACE_SEPARATOR",
    "OUT_DIR_ENV",
    "REGISTRATION_MACRO",
    "ROOT_NAMESPACE",
    "TBLGEN_BINARY",
]
