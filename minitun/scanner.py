"""Scanner for the mini-tun language.

The lexical rules are written as a Lark terminal grammar and tokenized with
Lark's basic lexer. Every run of letters, digits and underscores comes out of
Lark as a single ``WORD`` terminal; classifying a word as a keyword, an
integer literal or an identifier is done here, so the token kinds stay the
ones the parser expects.
"""

from __future__ import annotations

from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import ScanError
from .tokens import Token, EOF, PUNCTUATION, lookup_word


TUN_LEXICON = r"""
    start: _token*
    _token: PLUS | MINUS | EQUAL | LPAREN | RPAREN | LBRACE | RBRACE | COMMA | WORD

    PLUS: "+"
    MINUS: "-"
    EQUAL: "="
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    COMMA: ","
    WORD: /[A-Za-z0-9_]+/

    WS: /[ \t\r\n]+/
    %ignore WS
"""


TUN_LEXER = Lark(
    TUN_LEXICON,
    parser='lalr',
    lexer='basic',
)


def scan(text: str) -> List[Token]:
    """Convert source text into a list of tokens ending with one EOF token.

    Raises ScanError on a character that cannot start any token.
    """
    tokens: List[Token] = []
    try:
        for lt in TUN_LEXER.lex(text):
            literal = str(lt)
            if lt.type == 'WORD':
                kind = lookup_word(literal)
            else:
                kind = PUNCTUATION[literal]
            tokens.append(Token(kind, literal, lt.line, lt.column))
    except UnexpectedCharacters as e:
        raise ScanError(e.char, e.line, e.column) from None
    tokens.append(Token(EOF, ''))
    return tokens
