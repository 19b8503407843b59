"""Front-end pipeline glue for parsing, analysis and reporting."""

from .pipeline import LintOptions, LintResult, lint_file, lint_source, syntax_diagnostic
from .reporting import SEVERITY_FILTERS, count_by_severity, filter_diagnostics, format_diagnostic

__all__ = [
    "LintOptions",
    "LintResult",
    "SEVERITY_FILTERS",
    "count_by_severity",
    "filter_diagnostics",
    "format_diagnostic",
    "lint_file",
    "lint_source",
    "syntax_diagnostic",
]
