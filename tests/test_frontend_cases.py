from pathlib import Path

import esprima
import pytest

from analyzer import RULE_SYNTAX, Fix, Severity, SourcePosition, SourceSpan, apply_fix
from frontend import (
    LintOptions,
    count_by_severity,
    filter_diagnostics,
    format_diagnostic,
    lint_file,
    lint_source,
)
from parser import parse_js

CASES_DIR = Path(__file__).parent / "cases"


TEST_CASES = [
    ("greet.js", []),
    ("scopes.js", []),
    ("tdz.js", ["'total' is used before declaration (TDZ)"]),
    ("typo.js", ["'consol' is not defined. Did you mean 'console'?"]),
    (
        "unused.js",
        ["'answer' is declared but never used", "'helper' is declared but never used"],
    ),
]


@pytest.mark.parametrize("file_name, expected_messages", TEST_CASES)
def test_frontend_lints_cases(file_name, expected_messages):
    result = lint_file(CASES_DIR / file_name)

    assert result.has_ast
    assert [d.message for d in result.diagnostics] == expected_messages


def test_module_source_type():
    result = lint_file(CASES_DIR / "module_import.js", LintOptions(source_type="module"))
    assert result.diagnostics == []


def test_module_syntax_fails_in_script_mode():
    result = lint_file(CASES_DIR / "module_import.js")
    assert not result.has_ast
    assert [d.rule_id for d in result.diagnostics] == [RULE_SYNTAX]


def test_parse_failure_becomes_single_syntax_error():
    result = lint_file(CASES_DIR / "broken.js")

    assert not result.has_ast
    assert len(result.diagnostics) == 1
    diagnostic = result.diagnostics[0]
    assert diagnostic.rule_id == RULE_SYNTAX
    assert diagnostic.severity == Severity.ERROR
    assert diagnostic.line == 1
    assert diagnostic.column >= 1
    assert diagnostic.fix is None
    assert result.has_errors


def test_parse_error_carries_location():
    result = parse_js("let a = 1;\nconst = 2;\n")
    assert result.ast is None
    assert len(result.errors) == 1
    assert result.errors[0].line == 2
    assert result.errors[0].description


def test_strict_parse_raises_esprima_error():
    with pytest.raises(esprima.Error):
        parse_js("const = 1;", strict=True)


def test_parse_rejects_unknown_source_type():
    with pytest.raises(ValueError):
        parse_js("1;", source_type="jsx")


def test_blank_source_is_not_parsed():
    result = lint_source("   \n\t\n")
    assert result.parse is None
    assert result.diagnostics == []


def test_source_hash_identifies_text():
    first = lint_source("const a = 1;")
    second = lint_source("const a = 1;")
    third = lint_source("const b = 1;")
    assert first.source_hash == second.source_hash
    assert first.source_hash != third.source_hash


def test_extra_ambient_names_option():
    options = LintOptions(extra_ambient_names=("require", "module"))
    assert "console" in options.ambient_names
    result = lint_source('module.exports = require("x");', options=options)
    assert result.diagnostics == []


def test_fix_application_then_relint():
    source = (CASES_DIR / "unused.js").read_text(encoding="utf-8")
    result = lint_source(source)
    helper_warning = result.diagnostics[1]

    fixed = apply_fix(source, helper_warning.fix)

    assert "helper" not in fixed
    relinted = lint_source(fixed)
    assert [d.message for d in relinted.diagnostics] == ["'answer' is declared but never used"]


def test_apply_fix_rejects_out_of_range_span():
    with pytest.raises(ValueError):
        apply_fix("abc", Fix(span=SourceSpan(start=2, end=10)))


def _mixed_diagnostics():
    source = "console.log(total);\nlet total = 1;\nconst spare = 2;\nconsol.log(1);\n"
    return lint_source(source).diagnostics


def test_filter_by_severity():
    diagnostics = _mixed_diagnostics()

    errors = filter_diagnostics(diagnostics, severity="error")
    warnings = filter_diagnostics(diagnostics, severity="warning")

    assert len(errors) == 2
    assert [d.message for d in warnings] == ["'spare' is declared but never used"]
    assert len(filter_diagnostics(diagnostics)) == len(diagnostics)
    assert count_by_severity(diagnostics) == {"error": 2, "warning": 1}


def test_filter_by_query():
    diagnostics = _mixed_diagnostics()

    assert [d.line for d in filter_diagnostics(diagnostics, query="  TDZ ")] == [1]
    assert [d.line for d in filter_diagnostics(diagnostics, query="4:1")] == [4]
    assert [d.line for d in filter_diagnostics(diagnostics, query="unused-declaration")] == [3]
    assert filter_diagnostics(diagnostics, severity="warning", query="tdz") == []


def test_filter_rejects_unknown_severity():
    with pytest.raises(ValueError):
        filter_diagnostics([], severity="info")


def test_format_diagnostic():
    diagnostic = _mixed_diagnostics()[0]
    assert format_diagnostic(diagnostic, "a.js") == (
        "ERROR a.js:1:13: 'total' is used before declaration (TDZ) [use-before-declaration]"
    )
    assert diagnostic.position == SourcePosition(line=1, column=13)
