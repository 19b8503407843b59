"""
JavaScript parsing built on top of the Python `esprima` port.

`parse_js` returns the JSON-compatible AST with `loc` and `range` data on
every node, which is what the scope analyzer needs to anchor diagnostics and
removal fixes. A failed parse is reported as a single `ParseError` carrying
esprima's failure location instead of an exception, unless the caller asks
for strict behaviour.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import esprima

logger = logging.getLogger(__name__)

SOURCE_TYPES = ("script", "module")


@dataclass(frozen=True)
class ParseError:
    """Parser failure with its 1-based location, when esprima reports one."""

    description: str
    line: Optional[int]
    column: Optional[int]


@dataclass(frozen=True)
class ParseResult:
    """The AST (None on failure) plus metadata about the parse run."""

    ast: Any
    errors: List[ParseError]
    source_hash: str
    source_name: str

    @property
    def ok(self) -> bool:
        return self.ast is not None


def hash_source(source: str) -> str:
    """Deterministic digest so callers can tell stale results apart."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


def _to_parse_error(exc: Exception) -> ParseError:
    description = getattr(exc, "description", None) or str(exc) or "Failed to parse source."
    line = getattr(exc, "lineNumber", None)
    column = getattr(exc, "column", None)
    return ParseError(
        description=str(description),
        line=line if isinstance(line, int) else None,
        column=column if isinstance(column, int) else None,
    )


def parse_js(
    source: str,
    *,
    source_name: str = "<input>",
    source_type: str = "script",
    strict: bool = False,
) -> ParseResult:
    """
    Parse JavaScript source text into an esprima AST.

    Args:
        source: Raw JavaScript source code.
        source_name: Label used for diagnostics (defaults to `<input>`).
        source_type: `"script"` or `"module"`; modules enable import/export.
        strict: Re-raise esprima's exception instead of returning it as a
            `ParseError`.

    Returns:
        ParseResult with the AST, or with `ast=None` and exactly one error.

    Raises:
        ValueError: If `source_type` is not supported.
        esprima.Error: If parsing fails and `strict` is True.
    """
    if source_type not in SOURCE_TYPES:
        raise ValueError(f"Unsupported source type: {source_type!r}")

    options = dict(loc=True, range=True)
    parser = esprima.parseModule if source_type == "module" else esprima.parseScript
    try:
        ast = parser(source, **options)
    except esprima.Error as exc:
        if strict:
            raise
        error = _to_parse_error(exc)
        logger.debug(
            "Parsing %s failed at %s:%s: %s",
            source_name,
            error.line,
            error.column,
            error.description,
        )
        return ParseResult(
            ast=None,
            errors=[error],
            source_hash=hash_source(source),
            source_name=source_name,
        )

    raw_ast = ast.toDict() if hasattr(ast, "toDict") else ast
    return ParseResult(
        ast=raw_ast,
        errors=[],
        source_hash=hash_source(source),
        source_name=source_name,
    )


__all__ = ["ParseError", "ParseResult", "SOURCE_TYPES", "hash_source", "parse_js"]
