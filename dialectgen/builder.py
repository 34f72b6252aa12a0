"""Dialect build pipeline: classify, generate, synthesize, compile."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping

from .analyzers import TableGenAnalyzer
from .codegen import ShimSynthesizer, TemplateRenderer, render_bindings, write_bindings, write_shim
from .config import BuildConfig
from .constants import INC_DIRNAME, OUT_DIR_ENV
from .errors import BuildError, ConfigError
from .generation import Aggregate, aggregate, check_dialect_definition, classify_files
from .logging import get_logger
from .models import CapabilityFlags, GeneratedFragment, StemProvenance
from .namespace import resolve_namespace_subdir, validate_namespace
from .process import CommandRunner, SubprocessRunner
from .tblgen import TblgenInvoker
from .toolchain import StaticLibraryCompiler, Toolchain, discover_toolchain, library_name


@dataclass
class BuildResult:
    """Artifacts produced by a successful dialect build."""

    name: str
    cpp_namespace: str
    output_dir: Path
    inc_dir: Path
    shim_path: Path
    archive_path: Path
    bindings_path: Path
    options: CapabilityFlags
    provenance: StemProvenance
    fragments: List[GeneratedFragment] = field(default_factory=list)
    link_search_paths: List[Path] = field(default_factory=list)
    link_libraries: List[str] = field(default_factory=list)
    watched_files: List[Path] = field(default_factory=list)


class DialectBuilder:
    """Fluent front end over `BuildConfig` whose `build()` may run only once.

    Every setter returns a new builder; the builder it was called on is left
    untouched. After `build()` the builder is spent and any further call on it
    raises `BuildError`.

        DialectBuilder("bril")
            .td_file("src/dialect/bril/BrilDialect.td")
            .td_file("src/dialect/bril/BrilOps.td")
            .include_dir("src/dialect")
            .cpp_namespace("mlir::bril")
            .build()
    """

    def __init__(
        self,
        name: str,
        *,
        runner: CommandRunner | None = None,
        toolchain: Toolchain | None = None,
        compiler: StaticLibraryCompiler | None = None,
        analyzer: TableGenAnalyzer | None = None,
        templates_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config = BuildConfig(name=name)
        self._runner = runner
        self._toolchain = toolchain
        self._compiler = compiler
        self._analyzer = analyzer
        self._templates_dir = templates_dir
        self._environ = environ
        self._consumed = False
        self.logger = get_logger("builder")

    @classmethod
    def from_config(cls, config: BuildConfig, **collaborators: object) -> "DialectBuilder":
        builder = cls(config.name, **collaborators)  # type: ignore[arg-type]
        builder._config = config
        return builder

    @property
    def config(self) -> BuildConfig:
        return self._config

    # ------------------------------------------------------------------
    # Fluent configuration

    def cpp_namespace(self, namespace: str) -> "DialectBuilder":
        """Set the C++ namespace; must follow the `mlir::<name>` pattern."""
        return self._derive(self._config.with_cpp_namespace(namespace))

    def td_file(self, path: str | Path) -> "DialectBuilder":
        return self._derive(self._config.with_td_files([path]))

    def td_files(self, paths: Iterable[str | Path]) -> "DialectBuilder":
        return self._derive(self._config.with_td_files(paths))

    def include_dir(self, path: str | Path) -> "DialectBuilder":
        return self._derive(self._config.with_include_dirs([path]))

    def include_dirs(self, paths: Iterable[str | Path]) -> "DialectBuilder":
        return self._derive(self._config.with_include_dirs(paths))

    def cpp_file(self, path: str | Path) -> "DialectBuilder":
        """Add a C++ source (verifiers, canonicalizers, ...) compiled with the shim."""
        return self._derive(self._config.with_cpp_files([path]))

    def cpp_files(self, paths: Iterable[str | Path]) -> "DialectBuilder":
        return self._derive(self._config.with_cpp_files(paths))

    def output_dir(self, path: str | Path) -> "DialectBuilder":
        """Override the output directory; defaults to the OUT_DIR environment variable."""
        return self._derive(self._config.with_output_dir(path))

    # ------------------------------------------------------------------
    # Terminal operation

    def build(self) -> BuildResult:
        """Generate, synthesize and compile the dialect registration code."""
        self._ensure_unconsumed()
        self._consumed = True

        config = self._config
        config.validate()
        output_dir = self._resolve_output_dir()
        subdir = resolve_namespace_subdir(config.cpp_namespace)
        cpp_namespace = validate_namespace(config.cpp_namespace, config.name)

        classified = aggregate(classify_files(config.td_files, self._analyzer))
        check_dialect_definition(classified)
        self.logger.info(
            "Building dialect '%s' (%s) from %d TableGen file(s): %s",
            config.name,
            cpp_namespace,
            len(config.td_files),
            ", ".join(capability.value for capability in classified.options.capabilities()),
        )

        runner = self._runner or SubprocessRunner()
        toolchain = self._toolchain or discover_toolchain(runner, self._environ)
        tblgen_path = toolchain.require_tblgen()

        inc_base = output_dir / INC_DIRNAME
        inc_dir = inc_base / subdir if subdir else inc_base
        _make_dirs(inc_dir)

        fragments = self._generate(classified, inc_dir, tblgen_path, toolchain, runner)

        renderer = TemplateRenderer(self._templates_dir)
        shim_text = ShimSynthesizer(renderer).render(
            config.name, cpp_namespace, classified.options, classified.provenance, subdir
        )
        shim_path = write_shim(output_dir, config.name, shim_text)
        self.logger.info("Wrote %s", shim_path)

        compiler = self._compiler or StaticLibraryCompiler(runner, environ=self._environ)
        # Includes are written as `<subdir>/<stem>...`, so the base inc/ dir is searched.
        archive_path = compiler.compile(
            config.name,
            [shim_path, *config.cpp_files],
            list(config.include_dirs),
            inc_base,
            toolchain,
            output_dir,
        )
        self.logger.info("Compiled %s", archive_path)

        bindings_path = write_bindings(output_dir, config.name, render_bindings(config.name, renderer=renderer))
        self.logger.info("Wrote %s", bindings_path)

        watched = [*config.td_files, *config.cpp_files]
        for path in watched:
            self.logger.debug("Build inputs include %s", path)

        return BuildResult(
            name=config.name,
            cpp_namespace=cpp_namespace,
            output_dir=output_dir,
            inc_dir=inc_dir,
            shim_path=shim_path,
            archive_path=archive_path,
            bindings_path=bindings_path,
            options=classified.options,
            provenance=classified.provenance,
            fragments=fragments,
            link_search_paths=[output_dir, toolchain.lib_dir],
            link_libraries=[library_name(config.name), *toolchain.link_libraries],
            watched_files=watched,
        )

    # ------------------------------------------------------------------
    # Helpers

    def _derive(self, config: BuildConfig) -> "DialectBuilder":
        self._ensure_unconsumed()
        builder = DialectBuilder(
            config.name,
            runner=self._runner,
            toolchain=self._toolchain,
            compiler=self._compiler,
            analyzer=self._analyzer,
            templates_dir=self._templates_dir,
            environ=self._environ,
        )
        builder._config = config
        return builder

    def _ensure_unconsumed(self) -> None:
        if self._consumed:
            raise BuildError(
                f"DialectBuilder for '{self._config.name}' has already been built; create a new builder"
            )

    def _resolve_output_dir(self) -> Path:
        if self._config.output_dir is not None:
            return Path(self._config.output_dir)
        env = os.environ if self._environ is None else self._environ
        value = env.get(OUT_DIR_ENV)
        if not value:
            raise ConfigError(
                f"{OUT_DIR_ENV} environment variable not set and no output_dir configured. "
                "Run from a build script or set output_dir explicitly."
            )
        return Path(value)

    def _generate(
        self,
        classified: Aggregate,
        inc_dir: Path,
        tblgen_path: Path,
        toolchain: Toolchain,
        runner: CommandRunner,
    ) -> List[GeneratedFragment]:
        invoker = TblgenInvoker(tblgen_path, llvm_include=toolchain.include_dir, runner=runner)
        fragments: List[GeneratedFragment] = []
        for item in classified.files:
            if not item.flags.has_any():
                self.logger.debug("No generator passes for %s", item.path)
                continue
            fragments.extend(
                invoker.generate_for_file(
                    item.path,
                    list(self._config.include_dirs),
                    inc_dir,
                    self._config.name,
                    item.flags,
                )
            )
        self.logger.info("Generated %d fragment(s) under %s", len(fragments), inc_dir)
        return fragments


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildError(f"Failed to create directory {path}: {exc}") from exc


__all__ = ["BuildResult", "DialectBuilder"]
