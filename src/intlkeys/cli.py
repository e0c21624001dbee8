"""Command-line front end.

Checks every translation document of a project once, the same way an editor
integration checks open documents, and prints the annotations.

Exit codes:
    0: No annotations.
    1: At least one annotation was reported.
    2: Configuration error (invalid settings, missing translations folder).

Usage:
    intlkeys check [PROJECT_ROOT] [--folder F] [--mode M] [--format FMT]
                   [--keep-empty] [--current-only] [--no-color] [-v | -q]

Python 3.13+.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from intlkeys.config import load_config
from intlkeys.constants import JSON_SUFFIX
from intlkeys.diagnostics import ConfigurationError, DiagnosticFormatter, OutputFormat
from intlkeys.enums import ComparisonPolicy, TranslationsMode
from intlkeys.translation.mode import resolve_mode
from intlkeys.workspace.pipeline import run_pass

if TYPE_CHECKING:
    from intlkeys.config import CheckerConfig
    from intlkeys.translation.mode import ModeResolution

__all__ = ["main"]

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_CONFIG_ERROR = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="intlkeys",
        description="Detect missing keys across JSON translation files.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Check every translation document once.")
    check.add_argument(
        "project_root",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory).",
    )
    check.add_argument(
        "--folder",
        help="Translations folder relative to the project root (overrides pyproject.toml).",
    )
    check.add_argument(
        "--mode",
        choices=[m.value for m in TranslationsMode],
        help="Layout of the translations folder (overrides pyproject.toml).",
    )
    check.add_argument(
        "--format",
        dest="output_format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Output style (default: rust).",
    )
    check.add_argument(
        "--keep-empty",
        action="store_true",
        help="Count blank strings as present translations.",
    )
    check.add_argument(
        "--current-only",
        action="store_true",
        help="Only compare keys that exist in the checked document.",
    )
    check.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors.",
    )
    verbosity = check.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Log pass details (repeat for debug output).",
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors.",
    )
    return parser.parse_args(argv)


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _apply_overrides(config: CheckerConfig, args: argparse.Namespace) -> CheckerConfig:
    changes: dict[str, object] = {}
    if args.folder is not None:
        changes["translations_folder"] = args.folder
    if args.mode is not None:
        changes["mode"] = args.mode
    if args.keep_empty:
        changes["empty_values_missing"] = False
    if args.current_only:
        changes["comparison"] = ComparisonPolicy.CURRENT_ONLY
    return dataclasses.replace(config, **changes) if changes else config


def _translation_documents(root: Path, resolution: ModeResolution) -> list[Path]:
    """Every document a pass can run on, sorted by path."""
    if resolution.single_file:
        documents = [p for p in root.glob(f"*{JSON_SUFFIX}") if p.is_file()]
    else:
        documents = [
            p
            for locale_dir in root.iterdir()
            if locale_dir.is_dir()
            for p in locale_dir.rglob(f"*{JSON_SUFFIX}")
            if p.is_file()
        ]
    return sorted(documents)


def _display_path(document: Path, project_root: Path) -> str:
    try:
        return document.relative_to(project_root).as_posix()
    except ValueError:
        return str(document)


def _check(args: argparse.Namespace) -> int:
    project_root: Path = args.project_root
    try:
        config = _apply_overrides(load_config(project_root), args)
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIG_ERROR

    root = config.translations_root(project_root)
    if root is None:
        logger.error(
            "Translations folder '%s' not found in %s", config.translations_folder, project_root
        )
        return EXIT_CONFIG_ERROR

    resolution = resolve_mode(root, config.mode)
    formatter = DiagnosticFormatter(
        output_format=OutputFormat(args.output_format),
        color=not args.no_color and sys.stdout.isatty(),
    )

    total = 0
    documents = _translation_documents(root, resolution)
    for document in documents:
        try:
            text = document.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", document, e)
            continue
        result = run_pass(root, document, text, config, resolution=resolution)
        if result is None or not result.diagnostics:
            continue
        total += len(result.diagnostics)
        display = _display_path(document, project_root)
        print(formatter.format_all(result.diagnostics, document=display))
        if formatter.output_format != OutputFormat.JSON:
            print()

    if formatter.output_format != OutputFormat.JSON:
        print(
            f"{total} annotation(s) in {len(documents)} document(s) "
            f"({resolution.mode}: {resolution.reason})",
            file=sys.stderr,
        )
    return EXIT_FINDINGS if total else EXIT_CLEAN


def main(argv: list[str] | None = None) -> int:
    """Run the command line front end."""
    args = _parse_args(argv)
    _configure_logging(args.verbose, args.quiet)
    match args.command:
        case "check":
            return _check(args)
    return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
