"""Token model for the mini-tun language.

A token is the pair of its kind and the literal text it was scanned from.
Source positions are kept for error messages only and do not take part in
token equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


EOF = 'EOF'
IDENTIFIER = 'IDENTIFIER'
FUNCTION = 'FUNCTION'
LET = 'LET'
RETURN = 'RETURN'
EQUAL = 'EQUAL'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
LBRACE = 'LBRACE'
RBRACE = 'RBRACE'
COMMA = 'COMMA'
PLUS = 'PLUS'
MINUS = 'MINUS'
INT = 'INT'

KEYWORDS: Dict[str, str] = {
    'function': FUNCTION,
    'let': LET,
    'return': RETURN,
}

# Single-character tokens and their kinds
PUNCTUATION: Dict[str, str] = {
    '+': PLUS,
    '-': MINUS,
    '=': EQUAL,
    '(': LPAREN,
    ')': RPAREN,
    '{': LBRACE,
    '}': RBRACE,
    ',': COMMA,
}

OPERATORS = (PLUS, MINUS)


@dataclass(frozen=True)
class Token:
    kind: str
    literal: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{{Type: {self.kind}, Literal: {self.literal}}}"

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.kind == EOF:
            return 'end of input'
        where = f" at {self.line}:{self.column}" if self.line else ''
        return f"{self.kind} {self.literal!r}{where}"


def lookup_word(word: str) -> str:
    """Classify a run of letters, digits and underscores.

    Keywords win, then base-10 integer literals; everything else is an
    identifier, including malformed runs such as ``12abc``.
    """
    if word in KEYWORDS:
        return KEYWORDS[word]
    if word.isascii() and word.isdigit():
        return INT
    return IDENTIFIER
