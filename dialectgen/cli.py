"""CLI entrypoints for dialectgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analyzers import TableGenAnalyzer
from .builder import DialectBuilder
from .config import load_config
from .errors import DialectGenError
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records (including debug output with --verbose) to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dialectgen",
        description="Generate MLIR dialect registration code from TableGen definitions.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Run mlir-tblgen, synthesize the C API shim and Rust bindings, and compile them.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_log_file_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project file or directory containing .dialectgen.yml (defaults to current directory).",
    )
    build_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory (overrides output_dir and the OUT_DIR environment variable).",
    )

    detect_parser = subparsers.add_parser(
        "detect",
        help="Show which definitions each TableGen file contains.",
    )
    _add_verbose_option(detect_parser, suppress_default=True)
    _add_log_file_option(detect_parser, suppress_default=True)
    detect_parser.add_argument("files", nargs="+", help="TableGen files to classify.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dialectgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    try:
        configure_logging(verbose=bool(args.verbose), log_file=log_file)
    except OSError as exc:
        parser.exit(1, f"Cannot open log file {log_file}: {exc}\n")

    if args.command == "build":
        try:
            project = load_config(Path(args.path))
            config = project.build
            if args.out_dir:
                config = config.with_output_dir(Path(args.out_dir))
            result = DialectBuilder.from_config(config, templates_dir=project.templates_dir).build()
        except DialectGenError as exc:
            parser.exit(1, f"dialectgen build failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Shim: {_relativize(result.shim_path)}")
        print(f"Library: {_relativize(result.archive_path)}")
        print(f"Bindings: {_relativize(result.bindings_path)}")
        print(f"Fragments: {len(result.fragments)} under {_relativize(result.inc_dir)}")
    elif args.command == "detect":
        analyzer = TableGenAnalyzer()
        for name in args.files:
            try:
                flags = analyzer.classify_file(Path(name))
            except DialectGenError as exc:
                parser.exit(1, f"{exc}\n")
            detected = ", ".join(capability.value for capability in flags.capabilities())
            print(f"{name}: {detected or '(no definitions)'}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
