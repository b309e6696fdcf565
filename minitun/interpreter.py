"""Tree-walking interpreter for the mini-tun language.

Statements run strictly in order against one mutable top-level
environment. Calling a function copies the caller's whole environment,
binds the arguments over the copy and runs the body there; the callee sees
the caller's bindings as of the call, never those of the place where the
function was defined, and nothing it assigns flows back.

``run_program`` drives the full pipeline (scan, parse, scope check,
execute) and returns the final top-level bindings.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Program, VariableAssignment, ReturnStatement, BlockStatement,
    LiteralExpression, IdentifierExpression, ComplexExpression,
    FunctionLiteral, FunctionCall, Node,
)
from .checker import check
from .environment import Environment
from .errors import RuntimeFailure, ReturnSignal
from .parser import parse_program
from .types import NO_VALUE, NoneVal, ErrorVal, is_integer, is_function, to_string, type_name


class Interpreter:
    """Core interpreter that executes a mini-tun Program."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.debug_started = False
        self.depth = 0

    def open_debug(self):
        # first run truncates the trace, later runs append to it
        if self.debug_level > 0 and self.debug_file and self.debug_fp is None:
            self.debug_fp = open(self.debug_file, 'a' if self.debug_started else 'w')
            self.debug_started = True

    def debug(self, msg: str):
        if self.debug_level > 0:
            line = '  ' * self.depth + msg
            if self.debug_fp:
                self.debug_fp.write(line + '\n')
                self.debug_fp.flush()
            else:
                print(line)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Dict[str, Any]:
        """Execute ``program`` and return the final top-level bindings."""
        if env is None:
            env = Environment()
        self.open_debug()
        try:
            for stmt in program.statements:
                self.execute(stmt, env)
        except RecursionError:
            raise RuntimeFailure(ErrorVal('RecursionLimit', 'maximum call depth exceeded')) from None
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        return env.bindings()

    def execute(self, node: Node, env: Environment):
        if self.debug_level >= 1 and isinstance(node, Node):
            self.debug(f"exec {node.to_source()}")
        if isinstance(node, VariableAssignment):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"bind {node.name}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, ReturnStatement):
            if self.depth == 0:
                if self.debug_level >= 2:
                    self.debug("skip return outside function")
                return
            raise ReturnSignal(self.evaluate(node.value, env))
        if isinstance(node, BlockStatement):
            for stmt in node.statements:
                self.execute(stmt, env)
            return
        raise RuntimeFailure(ErrorVal('UnsupportedNode', f'cannot execute {_node_name(node)}'))

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, LiteralExpression):
            return node.value
        if isinstance(node, IdentifierExpression):
            return env.get(node.name)
        if isinstance(node, ComplexExpression):
            links, tail = node.chain()
            operands = [(self.evaluate_integer(left, env), op) for left, op in links]
            result = self.evaluate_integer(tail, env)
            for left, op in reversed(operands):
                result = self.apply_binary_op(op, left, result)
            return result
        if isinstance(node, FunctionLiteral):
            return node
        if isinstance(node, FunctionCall):
            result = self.call_function(node, env)
            if self.debug_level >= 3:
                self.debug(f"{node.to_source()} -> {to_string(result)}")
            return result
        raise RuntimeFailure(ErrorVal('UnsupportedNode', f'cannot evaluate {_node_name(node)}'))

    def evaluate_integer(self, node: Node, env: Environment) -> int:
        """Evaluate an expression whose value must be an integer."""
        value = self.evaluate(node, env)
        if is_integer(value):
            return value
        if isinstance(value, NoneVal):
            raise RuntimeFailure(ErrorVal('MissingReturn', f'{node.to_source()} did not return a value'))
        raise RuntimeFailure(ErrorVal('TypeMismatch', f'expected Integer, got {type_name(value)} from {node.to_source()}'))

    def call_function(self, node: FunctionCall, env: Environment) -> Any:
        func = env.get(node.function_name)
        if not is_function(func):
            raise RuntimeFailure(ErrorVal('NotCallable', f'{node.function_name} is not a function ({type_name(func)})'))
        params = func.parameters
        if len(node.arguments) > len(params):
            raise RuntimeFailure(ErrorVal(
                'ArityMismatch',
                f'{node.function_name} takes {len(params)} arguments, got {len(node.arguments)}',
            ))
        args = [self.evaluate_integer(arg, env) for arg in node.arguments]
        # parameters without an argument stay unbound, hiding any caller binding of that name
        call_env = env.snapshot(unbind=params[len(args):])
        for name, value in zip(params, args):
            call_env.set(name, value)
        if self.debug_level >= 3:
            self.debug(f"call {node.function_name}({', '.join(map(str, args))})")
        self.depth += 1
        try:
            for stmt in func.body.statements:
                self.execute(stmt, call_env)
        except ReturnSignal as r:
            return r.value
        finally:
            self.depth -= 1
        return NO_VALUE

    def apply_binary_op(self, op: str, a: int, b: int) -> int:
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        raise RuntimeFailure(ErrorVal('UnsupportedOperator', f'unsupported operator {op}'))


def _node_name(node: Any) -> str:
    return getattr(node, 'node_name', type(node).__name__)


def format_bindings(bindings: Dict[str, Any]) -> str:
    """Render bindings as ``name = value`` lines, sorted by name."""
    return '\n'.join(f"{name} = {to_string(bindings[name])}" for name in sorted(bindings))


def run_program(source: str, debug_level: int = 0) -> Dict[str, Any]:
    """Scan, parse, scope check and execute ``source``.

    Returns the final top-level bindings. Each stage raises its own error
    type on the first problem it finds.
    """
    program = parse_program(source)
    check(program)
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program)
