# mini-tun language package
# This package provides a scanner, parser, scope checker and interpreter for mini-tun.
from .errors import MiniTunError, ScanError, ParseError, CheckError, ScopeError, RuntimeFailure
from .scanner import scan
from .parser import parse, parse_program
from .checker import check
from .interpreter import run_program, format_bindings, Interpreter

__all__ = [
    'scan',
    'parse',
    'parse_program',
    'check',
    'run_program',
    'format_bindings',
    'Interpreter',
    'MiniTunError',
    'ScanError',
    'ParseError',
    'CheckError',
    'ScopeError',
    'RuntimeFailure',
]
