"""
Diagnostic records produced by the scope analyzer and the lint pipeline.

Positions are 1-based (line and column) so they can be handed to editors
without adjustment. Spans are half-open character offsets into the original
source and back the machine-applicable `remove` fixes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

RULE_UNDEFINED = "undefined-name"
RULE_TDZ = "use-before-declaration"
RULE_UNUSED = "unused-declaration"
RULE_SYNTAX = "syntax"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class SourcePosition:
    line: int
    column: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class SourceSpan:
    """Half-open `[start, end)` offsets into the source text."""

    start: int
    end: int

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class Fix:
    span: SourceSpan
    kind: str = "remove"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **self.span.to_dict()}


@dataclass(frozen=True)
class Diagnostic:
    """A single finding anchored at a line/column position."""

    message: str
    position: SourcePosition
    severity: Severity
    end_position: Optional[SourcePosition] = None
    rule_id: Optional[str] = None
    fix: Optional[Fix] = None

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation, used by `--json` output."""
        payload: Dict[str, Any] = {
            "message": self.message,
            "severity": self.severity.value,
            "ruleId": self.rule_id,
            "line": self.position.line,
            "column": self.position.column,
        }
        if self.end_position is not None:
            payload["endLine"] = self.end_position.line
            payload["endColumn"] = self.end_position.column
        if self.fix is not None:
            payload["fix"] = self.fix.to_dict()
        return payload


def apply_fix(source: str, fix: Fix) -> str:
    """
    Apply a removal fix to the text it was computed against.

    Fixes are independent of each other: offsets are not adjusted for other
    pending fixes, so re-run the analysis after applying one.

    Raises:
        ValueError: If the span does not fit inside `source`.
    """
    if fix.kind != "remove":
        raise ValueError(f"Unsupported fix kind: {fix.kind!r}")
    start, end = fix.span.start, fix.span.end
    if start < 0 or end < start or end > len(source):
        raise ValueError(
            f"Fix span [{start}, {end}) is outside of the source text (length {len(source)})"
        )
    return source[:start] + source[end:]


__all__ = [
    "Diagnostic",
    "Fix",
    "RULE_SYNTAX",
    "RULE_TDZ",
    "RULE_UNDEFINED",
    "RULE_UNUSED",
    "Severity",
    "SourcePosition",
    "SourceSpan",
    "apply_fix",
]
