"""Abstract Syntax Tree (AST) definitions for the mini-tun language.

The AST classes defined in this module represent the syntactic structure
of parsed mini-tun programs. Nodes are frozen dataclasses holding tuples, so
a tree cannot change once the parser has built it. Every node class carries
a ``node_type`` ("Statement" or "Expression") and a ``node_name`` tag used by
the JSON serializer and in error messages.

``to_source`` renders a node back into source-like text; the interpreter
uses it to display function values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Tuple, Union


STATEMENT = 'Statement'
EXPRESSION = 'Expression'


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    node_type: ClassVar[str] = ''
    node_name: ClassVar[str] = 'Node'

    def to_source(self) -> str:
        raise NotImplementedError(f"to_source: unexpected node type {self.node_name}")


# Expressions

@dataclass(frozen=True)
class LiteralExpression(Node):
    node_type: ClassVar[str] = EXPRESSION
    node_name: ClassVar[str] = 'LiteralExpression'
    value: int

    def to_source(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class IdentifierExpression(Node):
    node_type: ClassVar[str] = EXPRESSION
    node_name: ClassVar[str] = 'IdentifierExpression'
    name: str

    def to_source(self) -> str:
        return self.name


@dataclass(frozen=True)
class ComplexExpression(Node):
    node_type: ClassVar[str] = EXPRESSION
    node_name: ClassVar[str] = 'ComplexExpression'
    left: 'Expression'
    operator: str  # '+' or '-'
    right: 'Expression'

    def chain(self) -> Tuple[List[Tuple['Expression', str]], 'Expression']:
        """Flatten ``a + (b - (c ...))`` into ``[(a, '+'), (b, '-'), ...]`` and the tail.

        Long operator chains nest one level per operator, so consumers walk
        them with this loop instead of recursing down ``right``.
        """
        links: List[Tuple['Expression', str]] = []
        node: 'Expression' = self
        while isinstance(node, ComplexExpression):
            links.append((node.left, node.operator))
            node = node.right
        return links, node

    def to_source(self) -> str:
        links, tail = self.chain()
        parts = [f"{left.to_source()} {op} " for left, op in links]
        return ''.join(parts) + tail.to_source()


@dataclass(frozen=True)
class FunctionLiteral(Node):
    node_type: ClassVar[str] = EXPRESSION
    node_name: ClassVar[str] = 'FunctionLiteral'
    parameters: Tuple[str, ...]
    body: 'BlockStatement'

    def to_source(self) -> str:
        params = ','.join(self.parameters)
        body = ''.join(stmt.to_source() + ';' for stmt in self.body.statements)
        return f"function({params}) {{{body}}}"


@dataclass(frozen=True)
class FunctionCall(Node):
    node_type: ClassVar[str] = EXPRESSION
    node_name: ClassVar[str] = 'FunctionCall'
    function_name: str
    arguments: Tuple['Expression', ...]

    def to_source(self) -> str:
        args = ', '.join(arg.to_source() for arg in self.arguments)
        return f"{self.function_name}({args})"


# Statements

@dataclass(frozen=True)
class VariableAssignment(Node):
    node_type: ClassVar[str] = STATEMENT
    node_name: ClassVar[str] = 'VariableAssignment'
    name: str
    value: 'Expression'

    def to_source(self) -> str:
        return f"let {self.name} = {self.value.to_source()}"


@dataclass(frozen=True)
class ReturnStatement(Node):
    node_type: ClassVar[str] = STATEMENT
    node_name: ClassVar[str] = 'ReturnStatement'
    value: 'Expression'

    def to_source(self) -> str:
        return f"return {self.value.to_source()}"


@dataclass(frozen=True)
class BlockStatement(Node):
    node_type: ClassVar[str] = STATEMENT
    node_name: ClassVar[str] = 'BlockStatement'
    statements: Tuple['Statement', ...]

    def to_source(self) -> str:
        return '{' + ''.join(stmt.to_source() + ';' for stmt in self.statements) + '}'


@dataclass(frozen=True)
class Program:
    statements: Tuple['Statement', ...]

    def to_source(self) -> str:
        return '\n'.join(stmt.to_source() for stmt in self.statements)


Expression = Union[
    LiteralExpression, IdentifierExpression, ComplexExpression,
    FunctionLiteral, FunctionCall,
]
Statement = Union[VariableAssignment, ReturnStatement, BlockStatement]
