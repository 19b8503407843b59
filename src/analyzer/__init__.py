"""Scope analysis and linting for JavaScript ASTs."""

from .convert import AnalysisError, to_typed_program
from .diagnostics import (
    RULE_SYNTAX,
    RULE_TDZ,
    RULE_UNDEFINED,
    RULE_UNUSED,
    Diagnostic,
    Fix,
    Severity,
    SourcePosition,
    SourceSpan,
    apply_fix,
)
from .scope_tracker import (
    DEFAULT_AMBIENT_NAMES,
    AnalysisContext,
    Declaration,
    DeclarationKind,
    Scope,
    ScopeAnalyzer,
    analyze,
)
from .suggestions import levenshtein, suggest_name

__all__ = [
    "AnalysisContext",
    "AnalysisError",
    "DEFAULT_AMBIENT_NAMES",
    "Declaration",
    "DeclarationKind",
    "Diagnostic",
    "Fix",
    "RULE_SYNTAX",
    "RULE_TDZ",
    "RULE_UNDEFINED",
    "RULE_UNUSED",
    "Scope",
    "ScopeAnalyzer",
    "Severity",
    "SourcePosition",
    "SourceSpan",
    "analyze",
    "apply_fix",
    "levenshtein",
    "suggest_name",
    "to_typed_program",
]
