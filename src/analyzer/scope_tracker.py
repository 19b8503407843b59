"""
Scope analysis and linting for JavaScript ASTs.

The analyzer walks the typed AST with a stack of lexical scopes. Every scope
is pre-populated with the declarations hoisted into it before its statements
are visited, identifiers are resolved innermost-first against the stack, and
unused declarations are reported the moment their scope closes. Findings are
returned as `Diagnostic` values in detection order; nothing in the traversal
raises on unknown node kinds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

from .convert import to_typed_program
from .diagnostics import (
    RULE_TDZ,
    RULE_UNDEFINED,
    RULE_UNUSED,
    Diagnostic,
    Fix,
    Severity,
    SourcePosition,
    SourceSpan,
)
from .nodes import (
    ArrowFunction,
    Block,
    CatchClause,
    ClassDeclaration,
    FunctionDeclaration,
    FunctionExpression,
    Generic,
    Identifier,
    ImportBinding,
    ImportDeclaration,
    MemberExpression,
    Node,
    Parameter,
    Program,
    VariableDeclaration,
    VariableDeclarator,
)
from .suggestions import suggest_name

logger = logging.getLogger(__name__)

DEFAULT_AMBIENT_NAMES: FrozenSet[str] = frozenset(
    {
        "console",
        "window",
        "document",
        "name",
        "location",
        "navigator",
        "setTimeout",
        "setInterval",
        "clearTimeout",
        "clearInterval",
    }
)


class DeclarationKind(str, Enum):
    VAR = "var"
    LET = "let"
    CONST = "const"
    PARAMETER = "parameter"
    FUNCTION = "function"
    CLASS = "class"
    CATCH_PARAMETER = "catch_parameter"
    IMPORT = "import"
    FUNCTION_NAME = "function_name"


_TDZ_KINDS = {
    DeclarationKind.LET,
    DeclarationKind.CONST,
    DeclarationKind.PARAMETER,
    DeclarationKind.CLASS,
}

# A function expression's own name is only visible inside it and never reported.
_UNTRACKED_KINDS = {DeclarationKind.FUNCTION_NAME}

_EXPORT_TYPES = {"ExportNamedDeclaration", "ExportDefaultDeclaration"}

_VARIABLE_KINDS = {
    "var": DeclarationKind.VAR,
    "let": DeclarationKind.LET,
    "const": DeclarationKind.CONST,
}


@dataclass(frozen=True)
class Declaration:
    """A name bound in exactly one scope."""

    name: str
    kind: DeclarationKind
    declared_at: SourcePosition
    end_position: SourcePosition
    span: SourceSpan
    fix_span: Optional[SourceSpan]


@dataclass
class Scope:
    declarations: Dict[str, Declaration] = field(default_factory=dict)
    used_names: Set[str] = field(default_factory=set)

    def declare(self, declaration: Declaration) -> None:
        """Register a declaration; the first one for a name wins."""
        self.declarations.setdefault(declaration.name, declaration)


@dataclass
class AnalysisContext:
    """Mutable state of one analysis run, threaded through every visitor."""

    ambient_names: FrozenSet[str]
    scopes: List[Scope] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    reported_unused: Set[SourceSpan] = field(default_factory=set)

    @property
    def current_scope(self) -> Scope:
        return self.scopes[-1]

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def visible_names(self) -> Set[str]:
        names: Set[str] = set(self.ambient_names)
        for scope in self.scopes:
            names.update(scope.declarations)
        return names


def _declaration(
    name: str,
    kind: DeclarationKind,
    node: Node,
    declared_at: Optional[SourcePosition] = None,
    fix_span: Optional[SourceSpan] = None,
    removable: bool = True,
) -> Declaration:
    return Declaration(
        name=name,
        kind=kind,
        declared_at=declared_at or node.start,
        end_position=node.end,
        span=node.span,
        fix_span=(fix_span or node.span) if removable else None,
    )


class ScopeAnalyzer:
    """Resolves identifiers against lexical scopes and reports findings."""

    def __init__(self, ambient_names: Optional[Iterable[str]] = None) -> None:
        if ambient_names is None:
            ambient_names = DEFAULT_AMBIENT_NAMES
        self._ambient_names = frozenset(ambient_names)

    def analyze(self, ast: Any) -> List[Diagnostic]:
        program = to_typed_program(ast)
        context = AnalysisContext(ambient_names=self._ambient_names)
        self._visit(program, context)
        logger.debug("Scope analysis produced %d diagnostic(s)", len(context.diagnostics))
        return context.diagnostics

    # ------------------------------------------------------------------ scopes

    def _enter_scope(self, context: AnalysisContext) -> Scope:
        scope = Scope()
        context.scopes.append(scope)
        return scope

    def _exit_scope(self, context: AnalysisContext) -> None:
        scope = context.scopes.pop()
        for name, declaration in scope.declarations.items():
            if name in scope.used_names or declaration.kind in _UNTRACKED_KINDS:
                continue
            if declaration.span in context.reported_unused:
                continue
            context.reported_unused.add(declaration.span)
            context.report(
                Diagnostic(
                    message=f"'{name}' is declared but never used",
                    position=declaration.declared_at,
                    end_position=declaration.end_position,
                    severity=Severity.WARNING,
                    rule_id=RULE_UNUSED,
                    fix=Fix(span=declaration.fix_span) if declaration.fix_span is not None else None,
                )
            )

    def _hoist(self, node: Node, scope: Scope, *, lexical: bool, var: bool) -> None:
        for child in node.children():
            self._collect(child, scope, lexical=lexical, var=var)

    def _collect(self, node: Node, scope: Scope, *, lexical: bool, var: bool) -> None:
        """
        Register the declarations of `node` that belong to `scope`.

        Lexical declarations (let, const, class) stop at the first nested
        block; `var` and imports keep going until a function boundary.
        Function declarations are registered when the traversal reaches them.
        """
        if isinstance(node, (FunctionDeclaration, FunctionExpression, ArrowFunction)):
            return
        if isinstance(node, ClassDeclaration):
            if lexical and node.id is not None:
                scope.declare(_declaration(node.id.name, DeclarationKind.CLASS, node))
            return
        if isinstance(node, ImportDeclaration):
            if var:
                # Only a lone specifier can be removed without leaving a dangling comma.
                whole = node.span if len(node.bindings) == 1 else None
                for binding in node.bindings:
                    scope.declare(
                        _declaration(
                            binding.local.name,
                            DeclarationKind.IMPORT,
                            binding,
                            fix_span=whole,
                            removable=whole is not None,
                        )
                    )
            return
        if isinstance(node, VariableDeclaration):
            wanted = var if node.kind == "var" else lexical
            if wanted:
                kind = _VARIABLE_KINDS.get(node.kind, DeclarationKind.LET)
                for declarator in node.declarations:
                    if declarator.id is not None:
                        scope.declare(_declaration(declarator.id.name, kind, declarator))
        if isinstance(node, (Block, CatchClause)):
            if not var:
                return
            lexical = False
        for child in node.children():
            self._collect(child, scope, lexical=lexical, var=var)

    # -------------------------------------------------------------- resolution

    def _use(self, node: Identifier, context: AnalysisContext) -> None:
        name = node.name
        for scope in reversed(context.scopes):
            declaration = scope.declarations.get(name)
            if declaration is None:
                continue
            scope.used_names.add(name)
            if declaration.kind in _TDZ_KINDS and node.start.line < declaration.declared_at.line:
                context.report(
                    Diagnostic(
                        message=f"'{name}' is used before declaration (TDZ)",
                        position=node.start,
                        end_position=node.end,
                        severity=Severity.ERROR,
                        rule_id=RULE_TDZ,
                    )
                )
            return

        if name in context.ambient_names:
            return

        suggestion = suggest_name(name, context.visible_names())
        message = f"'{name}' is not defined"
        if suggestion:
            message = f"{message}. Did you mean '{suggestion}'?"
        context.report(
            Diagnostic(
                message=message,
                position=node.start,
                end_position=node.end,
                severity=Severity.ERROR,
                rule_id=RULE_UNDEFINED,
            )
        )

    # ---------------------------------------------------------------- visitors

    def _visit(self, node: Optional[Node], context: AnalysisContext) -> None:
        if node is None:
            return
        handler = getattr(self, f"_visit_{type(node).__name__}", None)
        if handler:
            handler(node, context)

    def _visit_children(self, node: Node, context: AnalysisContext) -> None:
        for child in node.children():
            self._visit(child, context)

    def _visit_Program(self, node: Program, context: AnalysisContext) -> None:
        scope = self._enter_scope(context)
        self._hoist(node, scope, lexical=True, var=True)
        self._visit_children(node, context)
        self._exit_scope(context)

    def _visit_Block(self, node: Block, context: AnalysisContext) -> None:
        scope = self._enter_scope(context)
        self._hoist(node, scope, lexical=True, var=False)
        self._visit_children(node, context)
        self._exit_scope(context)

    def _visit_FunctionDeclaration(self, node: FunctionDeclaration, context: AnalysisContext) -> None:
        if node.id is not None:
            context.current_scope.declare(
                _declaration(node.id.name, DeclarationKind.FUNCTION, node)
            )
        self._visit_function(node, context)

    def _visit_FunctionExpression(self, node: FunctionExpression, context: AnalysisContext) -> None:
        self._visit_function(node, context)

    def _visit_ArrowFunction(self, node: ArrowFunction, context: AnalysisContext) -> None:
        self._visit_function(node, context)

    def _visit_function(self, node: Any, context: AnalysisContext) -> None:
        scope = self._enter_scope(context)
        self._hoist(node, scope, lexical=False, var=True)
        for param in node.params:
            if param.binding is not None:
                scope.declare(
                    _declaration(
                        param.binding.name,
                        DeclarationKind.PARAMETER,
                        param,
                        declared_at=param.binding.start,
                    )
                )
        if isinstance(node, FunctionExpression) and node.id is not None:
            scope.declare(_declaration(node.id.name, DeclarationKind.FUNCTION_NAME, node.id))
        self._visit_children(node, context)
        self._exit_scope(context)

    def _visit_Parameter(self, node: Parameter, context: AnalysisContext) -> None:
        self._visit_children(node, context)

    def _visit_CatchClause(self, node: CatchClause, context: AnalysisContext) -> None:
        scope = self._enter_scope(context)
        if node.param is not None:
            # Dropping the binding would need `catch {}`, which the parser rejects.
            scope.declare(
                _declaration(
                    node.param.name, DeclarationKind.CATCH_PARAMETER, node.param, removable=False
                )
            )
        self._visit_children(node, context)
        self._exit_scope(context)

    def _visit_VariableDeclaration(self, node: VariableDeclaration, context: AnalysisContext) -> None:
        self._visit_children(node, context)

    def _visit_VariableDeclarator(self, node: VariableDeclarator, context: AnalysisContext) -> None:
        self._visit_children(node, context)

    def _visit_Identifier(self, node: Identifier, context: AnalysisContext) -> None:
        self._use(node, context)

    def _visit_MemberExpression(self, node: MemberExpression, context: AnalysisContext) -> None:
        self._visit_children(node, context)

    def _visit_ClassDeclaration(self, node: ClassDeclaration, context: AnalysisContext) -> None:
        self._visit_children(node, context)

    def _visit_ImportDeclaration(self, node: ImportDeclaration, context: AnalysisContext) -> None:
        # Bindings were hoisted with the enclosing scope; nothing here is a reference.
        return None

    def _visit_ImportBinding(self, node: ImportBinding, context: AnalysisContext) -> None:
        return None

    def _visit_Generic(self, node: Generic, context: AnalysisContext) -> None:
        self._visit_children(node, context)
        if node.type in _EXPORT_TYPES:
            self._mark_exported(node, context)

    def _mark_exported(self, node: Generic, context: AnalysisContext) -> None:
        """Exported declarations are used by the importing module."""
        scope = context.current_scope
        for child in node.children():
            names: List[str] = []
            if isinstance(child, (FunctionDeclaration, ClassDeclaration)) and child.id is not None:
                names.append(child.id.name)
            elif isinstance(child, VariableDeclaration):
                names.extend(d.id.name for d in child.declarations if d.id is not None)
            for name in names:
                if name in scope.declarations:
                    scope.used_names.add(name)


def analyze(ast: Any, *, ambient_names: Optional[Iterable[str]] = None) -> List[Diagnostic]:
    """
    Lint a parsed JavaScript program.

    Args:
        ast: esprima-compatible dictionary AST (result of `parse_js`) or a
            typed `Program`.
        ambient_names: Names provided by the host environment; defaults to
            `DEFAULT_AMBIENT_NAMES`.

    Returns:
        Diagnostics in the order they were detected.

    Raises:
        AnalysisError: If the root node is not a Program.
    """
    return ScopeAnalyzer(ambient_names=ambient_names).analyze(ast)


__all__ = [
    "AnalysisContext",
    "DEFAULT_AMBIENT_NAMES",
    "Declaration",
    "DeclarationKind",
    "Scope",
    "ScopeAnalyzer",
    "analyze",
]
