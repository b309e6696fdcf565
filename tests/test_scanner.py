import pytest

from minitun import tokens as tk
from minitun.errors import ScanError
from minitun.scanner import scan
from minitun.tokens import Token


def test_let_statement():
    assert scan('let x = 10') == [
        Token(tk.LET, 'let'),
        Token(tk.IDENTIFIER, 'x'),
        Token(tk.EQUAL, '='),
        Token(tk.INT, '10'),
        Token(tk.EOF, ''),
    ]


def test_function_literal_without_spaces():
    source = 'let x = function(bar,b,c){\n\treturn bar+b-c\n}'
    kinds = [t.kind for t in scan(source)]
    assert kinds == [
        tk.LET, tk.IDENTIFIER, tk.EQUAL, tk.FUNCTION, tk.LPAREN,
        tk.IDENTIFIER, tk.COMMA, tk.IDENTIFIER, tk.COMMA, tk.IDENTIFIER, tk.RPAREN,
        tk.LBRACE, tk.RETURN, tk.IDENTIFIER, tk.PLUS, tk.IDENTIFIER, tk.MINUS, tk.IDENTIFIER,
        tk.RBRACE, tk.EOF,
    ]


def test_empty_source_is_just_eof():
    assert scan('') == [Token(tk.EOF, '')]
    assert scan(' \t\n') == [Token(tk.EOF, '')]


def test_word_classification():
    toks = scan('letter functional return_ 007 12abc _x')
    assert [(t.kind, t.literal) for t in toks[:-1]] == [
        (tk.IDENTIFIER, 'letter'),
        (tk.IDENTIFIER, 'functional'),
        (tk.IDENTIFIER, 'return_'),
        (tk.INT, '007'),
        (tk.IDENTIFIER, '12abc'),
        (tk.IDENTIFIER, '_x'),
    ]


def test_positions():
    toks = scan('let a = 1\nlet b = a')
    assert (toks[0].line, toks[0].column) == (1, 1)
    assert (toks[4].line, toks[4].column) == (2, 1)
    assert (toks[7].line, toks[7].column) == (2, 9)


def test_illegal_character():
    with pytest.raises(ScanError) as excinfo:
        scan('let a = 2 * 3')
    assert excinfo.value.char == '*'
    assert (excinfo.value.line, excinfo.value.column) == (1, 11)
