import pytest

from analyzer import (
    AnalysisError,
    Severity,
    SourcePosition,
    SourceSpan,
    analyze,
    to_typed_program,
)
from analyzer.nodes import (
    Generic,
    Identifier,
    Program,
    VariableDeclaration,
    VariableDeclarator,
)


def _location(start: int, end: int, line: int = 1):
    return {
        "start": SourcePosition(line=line, column=start + 1),
        "end": SourcePosition(line=line, column=end + 1),
        "span": SourceSpan(start=start, end=end),
    }


def _let(name: str, start: int) -> VariableDeclaration:
    # `let <name>;` starting at offset `start`
    ident = Identifier(name=name, **_location(start + 4, start + 4 + len(name)))
    declarator = VariableDeclarator(id=ident, init=None, **_location(start + 4, start + 4 + len(name)))
    return VariableDeclaration(
        kind="let",
        declarations=(declarator,),
        **_location(start, start + 5 + len(name)),
    )


def test_redeclaration_in_same_scope_keeps_first():
    # let a; let a;
    program = Program(body=(_let("a", 0), _let("a", 7)), **_location(0, 13))

    diagnostics = analyze(program)

    assert len(diagnostics) == 1
    assert diagnostics[0].message == "'a' is declared but never used"
    assert diagnostics[0].severity == Severity.WARNING
    assert diagnostics[0].position == SourcePosition(line=1, column=5)
    assert diagnostics[0].fix.span == SourceSpan(start=4, end=5)


def test_empty_program():
    assert analyze(Program(body=(), **_location(0, 0))) == []


def test_unknown_variant_children_are_visited():
    reference = Identifier(name="missing", **_location(0, 7))
    program = Program(
        body=(Generic(type="ExpressionStatement", body=(reference,), **_location(0, 8)),),
        **_location(0, 8),
    )
    diagnostics = analyze(program)
    assert [d.message for d in diagnostics] == ["'missing' is not defined"]


def test_dictionary_without_locations_is_tolerated():
    tree = {
        "type": "Program",
        "body": [
            {
                "type": "ExpressionStatement",
                "expression": {"type": "Identifier", "name": "foo"},
            },
            {"type": "SomethingNew", "payload": {"type": "Identifier", "name": "console"}},
            {"type": "VariableDeclaration", "kind": "const", "declarations": [None]},
        ],
    }
    diagnostics = analyze(tree)

    assert len(diagnostics) == 1
    assert diagnostics[0].message == "'foo' is not defined"
    assert diagnostics[0].position == SourcePosition(line=1, column=1)


def test_converter_drops_non_reference_identifiers():
    tree = {
        "type": "Program",
        "body": [
            {
                "type": "BreakStatement",
                "label": {"type": "Identifier", "name": "outer"},
            },
            {
                "type": "ExpressionStatement",
                "expression": {
                    "type": "ObjectExpression",
                    "properties": [
                        {
                            "type": "Property",
                            "computed": False,
                            "key": {"type": "Identifier", "name": "key"},
                            "value": {"type": "Literal", "value": 1},
                        }
                    ],
                },
            },
        ],
    }
    program = to_typed_program(tree)
    assert analyze(program) == []


def test_destructuring_targets_are_skipped():
    tree = {
        "type": "Program",
        "body": [
            {
                "type": "VariableDeclaration",
                "kind": "const",
                "declarations": [
                    {
                        "type": "VariableDeclarator",
                        "id": {
                            "type": "ObjectPattern",
                            "properties": [],
                        },
                        "init": {"type": "Identifier", "name": "document"},
                    }
                ],
            }
        ],
    }
    assert analyze(tree) == []


def test_root_must_be_program():
    with pytest.raises(AnalysisError):
        analyze({"type": "ExpressionStatement"})
    with pytest.raises(AnalysisError):
        analyze(None)
