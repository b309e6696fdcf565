"""Parser for the mini-tun language.

A recursive-descent parser over the token list produced by the scanner. It
looks at most one token past the current one and never backtracks; the
first unexpected token raises ParseError and no partial tree is returned.

Grammar::

    Program           := Statement*
    Statement         := 'let' IDENT '=' Expression | 'return' Expression
    Expression        := ComplexExpression     if the next token is + or -
                       | FunctionLiteral
                       | LiteralExpression
                       | FunctionCall          IDENT followed by '('
                       | IdentifierExpression
    ComplexExpression := (IDENT | INT) ('+' | '-') Expression
    FunctionLiteral   := 'function' '(' (IDENT (',' IDENT)*)? ')' '{' Statement* '}'
    FunctionCall      := IDENT '(' (Expression (',' Expression)*)? ')'

Because the operator check peeks one token past the head of an expression
and the right operand is a whole Expression, ``a + b - c`` parses as
``a + (b - c)``. The operands of a chain are read in a loop and folded from
the right, so the chain length is not bounded by the Python stack.
"""

from __future__ import annotations

from typing import List, Sequence

from . import tokens as tk
from .ast import (
    Program, VariableAssignment, ReturnStatement, BlockStatement,
    LiteralExpression, IdentifierExpression, ComplexExpression,
    FunctionLiteral, FunctionCall, Expression, Statement,
)
from .errors import ParseError
from .scanner import scan
from .tokens import Token


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        if not tokens or tokens[-1].kind != tk.EOF:
            tokens = list(tokens) + [Token(tk.EOF, '')]
        self.tokens = list(tokens)
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def peek_next(self) -> Token:
        if self.pos + 1 < len(self.tokens):
            return self.tokens[self.pos + 1]
        return self.tokens[-1]

    def match(self, kind: str) -> bool:
        return self.peek().kind == kind

    def consume(self, kind: str, context: str = '') -> Token:
        token = self.peek()
        if token.kind != kind:
            raise ParseError(kind, token, context)
        if kind != tk.EOF:
            self.pos += 1
        return token

    def parse_program(self) -> Program:
        statements: List[Statement] = []
        while not self.match(tk.EOF):
            statements.append(self.parse_statement())
        return Program(tuple(statements))

    def parse_statement(self) -> Statement:
        token = self.peek()
        if token.kind == tk.LET:
            return self.parse_let_statement()
        if token.kind == tk.RETURN:
            return self.parse_return_statement()
        raise ParseError(f"{tk.LET} or {tk.RETURN}", token, 'statement')

    def parse_let_statement(self) -> VariableAssignment:
        self.consume(tk.LET)
        name_token = self.consume(tk.IDENTIFIER, 'let statement')
        self.consume(tk.EQUAL, 'let statement')
        value = self.parse_expression()
        return VariableAssignment(name_token.literal, value)

    def parse_return_statement(self) -> ReturnStatement:
        self.consume(tk.RETURN)
        return ReturnStatement(self.parse_expression())

    def parse_expression(self) -> Expression:
        token = self.peek()
        if self.peek_next().kind in tk.OPERATORS:
            return self.parse_complex_expression()
        if token.kind == tk.FUNCTION:
            return self.parse_function_literal()
        if token.kind == tk.INT:
            return self.parse_literal()
        if token.kind == tk.IDENTIFIER:
            if self.peek_next().kind == tk.LPAREN:
                return self.parse_function_call()
            return self.parse_identifier()
        raise ParseError('expression', token, 'expression')

    def parse_complex_expression(self) -> ComplexExpression:
        links = []
        while self.peek_next().kind in tk.OPERATORS:
            token = self.peek()
            if token.kind == tk.IDENTIFIER:
                left = self.parse_identifier()
            elif token.kind == tk.INT:
                left = self.parse_literal()
            else:
                raise ParseError(f"{tk.IDENTIFIER} or {tk.INT}", token, 'left operand')
            operator = self.peek()
            self.pos += 1
            links.append((left, operator.literal))
        # the operand after the last operator is never itself a chain
        node = self.parse_expression()
        for left, operator in reversed(links):
            node = ComplexExpression(left, operator, node)
        return node

    def parse_literal(self) -> LiteralExpression:
        token = self.consume(tk.INT)
        return LiteralExpression(int(token.literal))

    def parse_identifier(self) -> IdentifierExpression:
        token = self.consume(tk.IDENTIFIER)
        return IdentifierExpression(token.literal)

    def parse_function_literal(self) -> FunctionLiteral:
        self.consume(tk.FUNCTION)
        self.consume(tk.LPAREN, 'function parameters')
        params: List[str] = []
        if not self.match(tk.RPAREN):
            params.append(self.consume(tk.IDENTIFIER, 'function parameters').literal)
            while self.match(tk.COMMA):
                self.consume(tk.COMMA)
                params.append(self.consume(tk.IDENTIFIER, 'function parameters').literal)
        self.consume(tk.RPAREN, 'function parameters')
        body = self.parse_block()
        return FunctionLiteral(tuple(params), body)

    def parse_block(self) -> BlockStatement:
        self.consume(tk.LBRACE, 'function body')
        statements: List[Statement] = []
        while not self.match(tk.RBRACE):
            if self.match(tk.EOF):
                raise ParseError(tk.RBRACE, self.peek(), 'unterminated function body')
            statements.append(self.parse_statement())
        self.consume(tk.RBRACE)
        return BlockStatement(tuple(statements))

    def parse_function_call(self) -> FunctionCall:
        name_token = self.consume(tk.IDENTIFIER)
        self.consume(tk.LPAREN, 'function call')
        args: List[Expression] = []
        if not self.match(tk.RPAREN):
            args.append(self.parse_expression())
            while self.match(tk.COMMA):
                self.consume(tk.COMMA)
                args.append(self.parse_expression())
        self.consume(tk.RPAREN, 'function call')
        return FunctionCall(name_token.literal, tuple(args))


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a token list into a Program."""
    parser = Parser(tokens)
    try:
        return parser.parse_program()
    except RecursionError:
        raise ParseError('shallower nesting', parser.peek(), 'nesting too deep') from None


def parse_program(source: str) -> Program:
    """Scan and parse mini-tun source code into a Program.

    Raises ScanError or ParseError on the first problem found.
    """
    return parse(scan(source))
