"""Exception types raised by the mini-tun toolchain.

Each pipeline stage has its own exception class so callers can tell a scan
failure from a parse, scope or runtime failure. All of them derive from
MiniTunError.
"""

from typing import Any, Optional

from minitun.types import ErrorVal
from minitun.tokens import Token


class MiniTunError(Exception):
    """Base class for every error reported by the toolchain."""


class ScanError(MiniTunError):
    """A character that cannot start any token."""
    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"unexpected character {char!r} at {line}:{column}")
        self.char = char
        self.line = line
        self.column = column


class ParseError(MiniTunError):
    """Unexpected token at a grammar decision point."""
    def __init__(self, expected: str, actual: Token, context: Optional[str] = None):
        msg = f"expected {expected}, got {actual.describe()}"
        if context:
            msg = f"{context}: {msg}"
        super().__init__(msg)
        self.expected = expected
        self.actual = actual


class CheckError(MiniTunError):
    """The scope checker could not walk the program tree."""


class ScopeError(CheckError):
    """Reference to a name that is not visible at the point of use."""
    def __init__(self, name: str, in_function: bool = False):
        where = ' in function body' if in_function else ''
        super().__init__(f"undefined variable{where}: {name}")
        self.name = name
        self.in_function = in_function


class AstDecodeError(MiniTunError):
    """A serialized AST object that does not describe a valid node."""


class AstEncodeError(MiniTunError):
    """A program tree that cannot be written out as JSON."""


class RuntimeFailure(MiniTunError):
    """Exception type used to propagate mini-tun runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err


class ReturnSignal(Exception):
    """Internal exception to handle return statements in functions."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value
