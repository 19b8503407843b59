"""
Helpers for presenting diagnostics as a flat, filterable list.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from analyzer import Diagnostic, Severity

SEVERITY_FILTERS = ("all", "error", "warning")


def _haystack(diagnostic: Diagnostic) -> str:
    return (
        f"{diagnostic.message} {diagnostic.rule_id or ''} "
        f"{diagnostic.line}:{diagnostic.column}"
    ).lower()


def filter_diagnostics(
    diagnostics: Iterable[Diagnostic], *, severity: str = "all", query: str = ""
) -> List[Diagnostic]:
    """
    Keep diagnostics matching a severity and a free-text query.

    The query is case-insensitive and matched against the message, the rule
    id and the `line:column` anchor.
    """
    if severity not in SEVERITY_FILTERS:
        raise ValueError(f"Unknown severity filter: {severity!r}")
    needle = query.strip().lower()

    selected: List[Diagnostic] = []
    for diagnostic in diagnostics:
        if severity != "all" and diagnostic.severity.value != severity:
            continue
        if needle and needle not in _haystack(diagnostic):
            continue
        selected.append(diagnostic)
    return selected


def count_by_severity(diagnostics: Iterable[Diagnostic]) -> Dict[str, int]:
    counts = {severity.value: 0 for severity in Severity}
    for diagnostic in diagnostics:
        counts[diagnostic.severity.value] += 1
    return counts


def format_diagnostic(diagnostic: Diagnostic, source_name: str) -> str:
    line = f"{diagnostic.severity.value.upper()} {source_name}:{diagnostic.line}:{diagnostic.column}: {diagnostic.message}"
    if diagnostic.rule_id:
        line += f" [{diagnostic.rule_id}]"
    return line


__all__ = ["SEVERITY_FILTERS", "count_by_severity", "filter_diagnostics", "format_diagnostic"]
