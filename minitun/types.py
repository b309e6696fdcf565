"""Runtime value helpers for mini-tun.

A runtime value is one of:

* a Python ``int``;
* a ``FunctionLiteral`` node, which is what a function literal evaluates
  to (it captures nothing at definition time);
* ``NO_VALUE``, the result of a call whose body ends without a return.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ast import FunctionLiteral


class NoneVal:
    """Marker object for the result of a call that returned nothing."""
    def __repr__(self) -> str:
        return 'None'


NO_VALUE = NoneVal()


@dataclass
class ErrorVal:
    """Name and message of a runtime failure."""
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_function(value: Any) -> bool:
    return isinstance(value, FunctionLiteral)


def type_name(value: Any) -> str:
    """Return the mini-tun type name of a runtime value."""
    if is_integer(value):
        return 'Integer'
    if is_function(value):
        return 'Function'
    if isinstance(value, NoneVal):
        return 'None'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert a runtime value to its display form.

    Integers print numerically and function values print as reconstructed
    source text.
    """
    if is_integer(value):
        return str(value)
    if is_function(value):
        return value.to_source()
    if isinstance(value, NoneVal):
        return 'None'
    return str(value)
