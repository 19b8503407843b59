"""
Conversion from esprima's JSON-compatible AST into the typed node variants.

esprima reports 0-based columns; they are shifted to the 1-based convention
used by diagnostics here. Nodes without location data fall back to 1:1 and
an empty span rather than failing, so partially synthesised trees can still
be analyzed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .diagnostics import SourcePosition, SourceSpan
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

_METADATA_KEYS = {"type", "loc", "range"}

# Identifier slots that name something other than a variable.
_NON_REFERENCE_FIELDS = {
    "LabeledStatement": {"label"},
    "BreakStatement": {"label"},
    "ContinueStatement": {"label"},
    "MetaProperty": {"meta", "property"},
    "ExportSpecifier": {"exported"},
    "ClassExpression": {"id"},
}

# Node kinds whose `key` is only an expression when `computed` is set.
_KEYED_NODES = {"Property", "MethodDefinition", "PropertyDefinition"}


class AnalysisError(ValueError):
    """Raised when the analyzer input is not a Program tree."""


def _point(node: Dict[str, Any], edge: str) -> SourcePosition:
    loc = node.get("loc") or {}
    point = loc.get(edge) or {}
    line = point.get("line")
    column = point.get("column")
    return SourcePosition(
        line=line if isinstance(line, int) and line >= 1 else 1,
        column=column + 1 if isinstance(column, int) and column >= 0 else 1,
    )


def _span(node: Dict[str, Any]) -> SourceSpan:
    bounds = node.get("range")
    if isinstance(bounds, (list, tuple)) and len(bounds) == 2:
        return SourceSpan(start=int(bounds[0]), end=int(bounds[1]))
    return SourceSpan(start=0, end=0)


def _location(node: Dict[str, Any]) -> Dict[str, Any]:
    return {"start": _point(node, "start"), "end": _point(node, "end"), "span": _span(node)}


def _is_type(node: Any, node_type: str) -> bool:
    return isinstance(node, dict) and node.get("type") == node_type


class _Converter:
    def convert(self, node: Any) -> Optional[Node]:
        if not isinstance(node, dict):
            return None
        node_type = node.get("type")
        if not isinstance(node_type, str):
            return None
        handler = getattr(self, f"_convert_{node_type}", None)
        if handler:
            return handler(node)
        return self._convert_generic(node, node_type)

    def _convert_all(self, nodes: Any) -> Tuple[Node, ...]:
        if not isinstance(nodes, list):
            return ()
        converted = (self.convert(node) for node in nodes)
        return tuple(node for node in converted if node is not None)

    def _identifier(self, node: Any) -> Optional[Identifier]:
        if _is_type(node, "Identifier"):
            return self._convert_Identifier(node)
        return None

    def _convert_generic(self, node: Dict[str, Any], node_type: str) -> Generic:
        skipped = set(_METADATA_KEYS) | _NON_REFERENCE_FIELDS.get(node_type, set())
        if node_type in _KEYED_NODES and not node.get("computed"):
            skipped.add("key")

        children: List[Node] = []
        for key, value in node.items():
            if key in skipped:
                continue
            if isinstance(value, list):
                children.extend(self._convert_all(value))
            else:
                child = self.convert(value)
                if child is not None:
                    children.append(child)
        # esprima fills fields in constructor order, which is not always source order.
        children.sort(key=lambda child: child.span.start)
        return Generic(type=node_type, body=tuple(children), **_location(node))

    # ----------------------------------------------------------------- variants

    def _convert_Identifier(self, node: Dict[str, Any]) -> Identifier:
        return Identifier(name=str(node.get("name") or ""), **_location(node))

    def _convert_Program(self, node: Dict[str, Any]) -> Program:
        return Program(body=self._convert_all(node.get("body")), **_location(node))

    def _convert_BlockStatement(self, node: Dict[str, Any]) -> Block:
        return Block(body=self._convert_all(node.get("body")), **_location(node))

    def _function_parts(self, node: Dict[str, Any]) -> Dict[str, Any]:
        params = node.get("params") if isinstance(node.get("params"), list) else []
        body = self.convert(node.get("body"))
        if body is None:
            # A missing body still has to open a scope for the parameters.
            body = Block(body=(), **_location(node))
        return {
            "params": tuple(self._parameter(param) for param in params if isinstance(param, dict)),
            "body": body,
        }

    def _convert_FunctionDeclaration(self, node: Dict[str, Any]) -> FunctionDeclaration:
        return FunctionDeclaration(
            id=self._identifier(node.get("id")),
            **self._function_parts(node),
            **_location(node),
        )

    def _convert_FunctionExpression(self, node: Dict[str, Any]) -> FunctionExpression:
        return FunctionExpression(
            id=self._identifier(node.get("id")),
            **self._function_parts(node),
            **_location(node),
        )

    def _convert_ArrowFunctionExpression(self, node: Dict[str, Any]) -> ArrowFunction:
        return ArrowFunction(**self._function_parts(node), **_location(node))

    def _parameter(self, node: Dict[str, Any]) -> Parameter:
        binding: Optional[Identifier] = None
        default: Optional[Node] = None
        if _is_type(node, "Identifier"):
            binding = self._convert_Identifier(node)
        elif _is_type(node, "AssignmentPattern"):
            binding = self._identifier(node.get("left"))
            default = self.convert(node.get("right"))
        elif _is_type(node, "RestElement"):
            binding = self._identifier(node.get("argument"))
        return Parameter(binding=binding, default=default, **_location(node))

    def _convert_VariableDeclaration(self, node: Dict[str, Any]) -> VariableDeclaration:
        declarators = node.get("declarations") if isinstance(node.get("declarations"), list) else []
        return VariableDeclaration(
            kind=str(node.get("kind") or "var"),
            declarations=tuple(
                self._convert_VariableDeclarator(declarator)
                for declarator in declarators
                if isinstance(declarator, dict)
            ),
            **_location(node),
        )

    def _convert_VariableDeclarator(self, node: Dict[str, Any]) -> VariableDeclarator:
        return VariableDeclarator(
            id=self._identifier(node.get("id")),
            init=self.convert(node.get("init")),
            **_location(node),
        )

    def _convert_MemberExpression(self, node: Dict[str, Any]) -> Node:
        target = self.convert(node.get("object"))
        prop = self.convert(node.get("property"))
        if target is None or prop is None:
            return self._convert_generic(node, "MemberExpression")
        return MemberExpression(
            object=target,
            property=prop,
            computed=bool(node.get("computed")),
            **_location(node),
        )

    def _convert_ClassDeclaration(self, node: Dict[str, Any]) -> ClassDeclaration:
        members: List[Node] = []
        superclass = self.convert(node.get("superClass"))
        if superclass is not None:
            members.append(superclass)
        class_body = node.get("body")
        if isinstance(class_body, dict):
            members.extend(self._convert_all(class_body.get("body")))
        return ClassDeclaration(
            id=self._identifier(node.get("id")),
            body=tuple(members),
            **_location(node),
        )

    def _convert_CatchClause(self, node: Dict[str, Any]) -> CatchClause:
        body = self.convert(node.get("body"))
        if body is None:
            body = Block(body=(), **_location(node))
        return CatchClause(param=self._identifier(node.get("param")), body=body, **_location(node))

    def _convert_ImportDeclaration(self, node: Dict[str, Any]) -> ImportDeclaration:
        bindings: List[ImportBinding] = []
        specifiers = node.get("specifiers") if isinstance(node.get("specifiers"), list) else []
        for specifier in specifiers:
            if not isinstance(specifier, dict):
                continue
            local = self._identifier(specifier.get("local"))
            if local is not None:
                bindings.append(ImportBinding(local=local, **_location(specifier)))
        return ImportDeclaration(bindings=tuple(bindings), **_location(node))


def to_typed_program(ast: Any) -> Program:
    """
    Convert an esprima dictionary AST (or pass through a typed one).

    Raises:
        AnalysisError: If the root is not a `Program` node.
    """
    if isinstance(ast, Program):
        return ast
    if not _is_type(ast, "Program"):
        raise AnalysisError("Expected Program node at the root.")
    return _Converter()._convert_Program(ast)


__all__ = ["AnalysisError", "to_typed_program"]
