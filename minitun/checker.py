"""Scope checker for mini-tun programs.

No types are inferred here. The checker makes one pass over the program
and verifies that every identifier refers to a name bound by an *earlier*
statement of the same scope:

* the top level is one scope; a statement's own name becomes visible only
  after its expression has been checked, so ``let a = a`` and forward
  references are rejected;
* each function literal opens a fresh scope holding only its parameters.
  Names bound at top level are not visible inside a function body, even
  though the interpreter would find them in the caller's bindings at run
  time.

The first unresolved name raises ScopeError. A statement where an
expression belongs, or the reverse, raises CheckError.
"""

from __future__ import annotations

from typing import List, Optional, Set

from .ast import (
    Program, VariableAssignment, ReturnStatement, BlockStatement,
    LiteralExpression, IdentifierExpression, ComplexExpression,
    FunctionLiteral, FunctionCall, Node,
)
from .errors import CheckError, ScopeError


class Scope:
    """The set of names defined so far in one scope."""
    def __init__(self, names: Optional[Set[str]] = None, in_function: bool = False):
        self.names: Set[str] = set(names or ())
        self.in_function = in_function

    def define(self, name: str):
        self.names.add(name)

    def require(self, refs: List[str]):
        for ref in refs:
            if ref not in self.names:
                raise ScopeError(ref, self.in_function)


class Checker:
    def check(self, program: Program) -> None:
        self.check_statements(program.statements, Scope())

    def check_statements(self, statements, scope: Scope) -> None:
        for stmt in statements:
            scope.require(self.statement_refs(stmt))
            if isinstance(stmt, VariableAssignment):
                scope.define(stmt.name)

    def statement_refs(self, stmt: Node) -> List[str]:
        if isinstance(stmt, VariableAssignment):
            return self.expression_refs(stmt.value)
        if isinstance(stmt, ReturnStatement):
            return self.expression_refs(stmt.value)
        if isinstance(stmt, BlockStatement):
            # a bare block opens no scope of its own
            refs: List[str] = []
            for inner in stmt.statements:
                refs.extend(self.statement_refs(inner))
            return refs
        raise CheckError(f"unexpected statement type {_node_name(stmt)}")

    def expression_refs(self, expr: Node) -> List[str]:
        """Names an expression reads from its enclosing scope, in source order.

        Function literals are checked on the spot against their own scope
        and contribute nothing to the enclosing one.
        """
        if isinstance(expr, LiteralExpression):
            return []
        if isinstance(expr, IdentifierExpression):
            return [expr.name]
        if isinstance(expr, ComplexExpression):
            links, tail = expr.chain()
            refs = []
            for left, _ in links:
                refs.extend(self.expression_refs(left))
            return refs + self.expression_refs(tail)
        if isinstance(expr, FunctionCall):
            refs = [expr.function_name]
            for arg in expr.arguments:
                refs.extend(self.expression_refs(arg))
            return refs
        if isinstance(expr, FunctionLiteral):
            body_scope = Scope(set(expr.parameters), in_function=True)
            self.check_statements(expr.body.statements, body_scope)
            return []
        raise CheckError(f"unexpected expression type {_node_name(expr)}")


def _node_name(node) -> str:
    return getattr(node, 'node_name', type(node).__name__)


def check(program: Program) -> None:
    """Raise ScopeError for the first unresolved identifier in ``program``.

    A tree the checker cannot walk raises CheckError.
    """
    try:
        Checker().check(program)
    except RecursionError:
        raise CheckError('program nesting too deep') from None
