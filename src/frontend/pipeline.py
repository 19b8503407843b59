"""
Front-end integration stitching together parsing and scope analysis.

`lint_source` owns the parser collaborator: it parses the text, maps a parse
failure to a single synthetic `syntax` diagnostic, and otherwise hands the
AST to the analyzer. Each call is self-contained, so callers that lint an
evolving buffer can run calls independently and drop results whose
`source_hash` no longer matches the current text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

from analyzer import (
    DEFAULT_AMBIENT_NAMES,
    RULE_SYNTAX,
    Diagnostic,
    Severity,
    SourcePosition,
    analyze,
)
from parser import ParseError, ParseResult, hash_source, parse_js

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LintOptions:
    source_type: str = "script"
    extra_ambient_names: Tuple[str, ...] = ()

    @property
    def ambient_names(self) -> FrozenSet[str]:
        return DEFAULT_AMBIENT_NAMES | frozenset(self.extra_ambient_names)


@dataclass(frozen=True)
class LintResult:
    """Combined output of the parse and analysis steps."""

    parse: Optional[ParseResult]
    diagnostics: List[Diagnostic]
    source_hash: str
    source_name: str

    @property
    def has_ast(self) -> bool:
        return self.parse is not None and self.parse.ast is not None

    @property
    def has_errors(self) -> bool:
        return any(item.severity == Severity.ERROR for item in self.diagnostics)


def syntax_diagnostic(error: ParseError) -> Diagnostic:
    """Map a parser failure onto the shared diagnostic shape."""
    return Diagnostic(
        message=error.description,
        position=SourcePosition(line=error.line or 1, column=error.column or 1),
        severity=Severity.ERROR,
        rule_id=RULE_SYNTAX,
    )


def lint_source(
    source: str,
    *,
    source_name: str = "<input>",
    options: Optional[LintOptions] = None,
) -> LintResult:
    """
    Parse and analyze JavaScript source text.

    Args:
        source: Raw JavaScript source text.
        source_name: Identifier used in diagnostics, e.g. file path.
        options: Source type and additional ambient names.

    Returns:
        LintResult whose diagnostics hold either the analyzer findings or a
        single `syntax` error when the source does not parse.
    """
    options = options or LintOptions()

    if not source.strip():
        return LintResult(
            parse=None,
            diagnostics=[],
            source_hash=hash_source(source),
            source_name=source_name,
        )

    parse_result = parse_js(source, source_name=source_name, source_type=options.source_type)
    if parse_result.ast is None:
        error = parse_result.errors[0] if parse_result.errors else ParseError(
            description="Failed to parse source.", line=None, column=None
        )
        diagnostics = [syntax_diagnostic(error)]
    else:
        diagnostics = analyze(parse_result.ast, ambient_names=options.ambient_names)

    logger.debug("Linted %s: %d diagnostic(s)", source_name, len(diagnostics))
    return LintResult(
        parse=parse_result,
        diagnostics=diagnostics,
        source_hash=parse_result.source_hash,
        source_name=source_name,
    )


def lint_file(path: Union[str, Path], options: Optional[LintOptions] = None) -> LintResult:
    """
    Read a UTF-8 file and lint its contents.

    Raises:
        OSError: If the file cannot be read.
    """
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    return lint_source(source, source_name=str(path), options=options)


__all__ = ["LintOptions", "LintResult", "lint_file", "lint_source", "syntax_diagnostic"]
