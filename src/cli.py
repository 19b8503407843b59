"""
Command-line interface for linting JavaScript files.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List

from analyzer import Diagnostic
from frontend import (
    SEVERITY_FILTERS,
    LintOptions,
    LintResult,
    filter_diagnostics,
    format_diagnostic,
    lint_file,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_text(result: LintResult, diagnostics: Iterable[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        sys.stdout.write(format_diagnostic(diagnostic, result.source_name) + "\n")


def check_command(args: argparse.Namespace) -> int:
    options = LintOptions(
        source_type="module" if args.module else "script",
        extra_ambient_names=tuple(args.globals or ()),
    )

    failed = False
    report = []
    for raw_path in args.inputs:
        input_path = Path(raw_path)
        if not input_path.exists():
            sys.stderr.write(f"ERROR: Input file not found: {input_path}\n")
            failed = True
            continue
        try:
            result = lint_file(input_path, options)
        except (OSError, UnicodeDecodeError) as exc:
            sys.stderr.write(f"ERROR: Failed to read {input_path}: {exc}\n")
            failed = True
            continue

        if result.has_errors:
            failed = True
        if args.strict and result.diagnostics:
            failed = True

        selected = filter_diagnostics(result.diagnostics, severity=args.severity, query=args.query)
        if args.json:
            report.append(
                {
                    "source": result.source_name,
                    "diagnostics": [diagnostic.to_dict() for diagnostic in selected],
                }
            )
        else:
            _print_text(result, selected)

    if args.json:
        sys.stdout.write(json.dumps(report, ensure_ascii=False, indent=2) + "\n")

    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopelint",
        description="Report undefined names, TDZ violations and unused declarations in JavaScript",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Lint one or more JavaScript files")
    check_parser.add_argument("inputs", nargs="+", help="Paths to JavaScript files")
    check_parser.add_argument(
        "--module",
        action="store_true",
        help="Parse the input as an ES module (enables import/export syntax).",
    )
    check_parser.add_argument(
        "--global",
        dest="globals",
        action="append",
        metavar="NAME",
        help="Treat NAME as provided by the host environment (repeatable).",
    )
    check_parser.add_argument(
        "--severity",
        choices=SEVERITY_FILTERS,
        default="all",
        help="Only print diagnostics of this severity.",
    )
    check_parser.add_argument(
        "--query",
        default="",
        help="Only print diagnostics whose message, rule or position contains this text.",
    )
    check_parser.add_argument("--json", action="store_true", help="Print diagnostics as JSON.")
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors for the exit status.",
    )
    check_parser.set_defaults(func=check_command)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
