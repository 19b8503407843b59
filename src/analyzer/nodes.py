"""
Typed JavaScript AST variants consumed by the scope analyzer.

The analyzer only cares about a handful of node kinds; everything else is
folded into `Generic`, which keeps its child nodes in source order so
identifiers nested in arbitrary expressions are still visited.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .diagnostics import SourcePosition, SourceSpan


@dataclass(frozen=True)
class Node:
    start: SourcePosition
    end: SourcePosition
    span: SourceSpan

    def children(self) -> Iterator["Node"]:
        return iter(())


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class Program(Node):
    body: Tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.body)


@dataclass(frozen=True)
class Block(Node):
    body: Tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.body)


@dataclass(frozen=True)
class Parameter(Node):
    """A formal parameter slot; `binding` is None for destructuring patterns."""

    binding: Optional[Identifier]
    default: Optional[Node]

    def children(self) -> Iterator[Node]:
        if self.default is not None:
            yield self.default


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    id: Optional[Identifier]
    params: Tuple[Parameter, ...]
    body: Node

    def children(self) -> Iterator[Node]:
        yield from self.params
        yield self.body


@dataclass(frozen=True)
class FunctionExpression(Node):
    id: Optional[Identifier]
    params: Tuple[Parameter, ...]
    body: Node

    def children(self) -> Iterator[Node]:
        yield from self.params
        yield self.body


@dataclass(frozen=True)
class ArrowFunction(Node):
    params: Tuple[Parameter, ...]
    body: Node

    def children(self) -> Iterator[Node]:
        yield from self.params
        yield self.body


@dataclass(frozen=True)
class VariableDeclarator(Node):
    id: Optional[Identifier]
    init: Optional[Node]

    def children(self) -> Iterator[Node]:
        if self.init is not None:
            yield self.init


@dataclass(frozen=True)
class VariableDeclaration(Node):
    kind: str
    declarations: Tuple[VariableDeclarator, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.declarations)


@dataclass(frozen=True)
class MemberExpression(Node):
    object: Node
    property: Node
    computed: bool

    def children(self) -> Iterator[Node]:
        yield self.object
        if self.computed:
            yield self.property


@dataclass(frozen=True)
class ClassDeclaration(Node):
    id: Optional[Identifier]
    body: Tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.body)


@dataclass(frozen=True)
class CatchClause(Node):
    param: Optional[Identifier]
    body: Node

    def children(self) -> Iterator[Node]:
        yield self.body


@dataclass(frozen=True)
class ImportBinding(Node):
    local: Identifier


@dataclass(frozen=True)
class ImportDeclaration(Node):
    bindings: Tuple[ImportBinding, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.bindings)


@dataclass(frozen=True)
class Generic(Node):
    """Any node kind without analyzer-specific semantics."""

    type: str
    body: Tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.body)


__all__ = [
    "ArrowFunction",
    "Block",
    "CatchClause",
    "ClassDeclaration",
    "FunctionDeclaration",
    "FunctionExpression",
    "Generic",
    "Identifier",
    "ImportBinding",
    "ImportDeclaration",
    "MemberExpression",
    "Node",
    "Parameter",
    "Program",
    "VariableDeclaration",
    "VariableDeclarator",
]
