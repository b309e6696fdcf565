"""JSON serialization/deserialization for the mini-tun AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Each node becomes an object with a
``NodeInfo`` header naming its kind, followed by its fields:

    {
        "NodeInfo": {"NodeType": "Statement", "NodeName": "VariableAssignment"},
        "VariableName": "a",
        "Value": {...}
    }

``dump_program`` produces the indented, field-labelled text used for debug
display; ``ast_from_obj`` reads the same structure back so a saved AST can
be executed. Decoding checks that every position holds the kind of node
it admits (a statement list only statements, an operand only expressions)
and that literal values are integers.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Tuple

from .ast import (
    Program,
    VariableAssignment,
    ReturnStatement,
    BlockStatement,
    LiteralExpression,
    IdentifierExpression,
    ComplexExpression,
    FunctionLiteral,
    FunctionCall,
    Node,
    STATEMENT,
    EXPRESSION,
)
from .errors import AstDecodeError, AstEncodeError


def _info(node: Any) -> Dict[str, str]:
    return {"NodeType": node.node_type, "NodeName": node.node_name}


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Program):
        return {"Statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, VariableAssignment):
        return {"NodeInfo": _info(node), "VariableName": node.name, "Value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStatement):
        return {"NodeInfo": _info(node), "ReturnValue": ast_to_obj(node.value)}
    if isinstance(node, BlockStatement):
        return {"NodeInfo": _info(node), "Statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LiteralExpression):
        return {"NodeInfo": _info(node), "Value": node.value}
    if isinstance(node, IdentifierExpression):
        return {"NodeInfo": _info(node), "Value": node.name}
    if isinstance(node, ComplexExpression):
        # build the Right-nested objects from the tail outwards
        links, tail = node.chain()
        obj = ast_to_obj(tail)
        for left, operator in reversed(links):
            obj = {
                "NodeInfo": _info(ComplexExpression),
                "Left": ast_to_obj(left),
                "Operator": operator,
                "Right": obj,
            }
        return obj
    if isinstance(node, FunctionLiteral):
        return {
            "NodeInfo": _info(node),
            "Parameters": list(node.parameters),
            "Body": ast_to_obj(node.body),
        }
    if isinstance(node, FunctionCall):
        return {
            "NodeInfo": _info(node),
            "FunctionName": node.function_name,
            "Arguments": [ast_to_obj(a) for a in node.arguments],
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def dump_program(program: Program) -> str:
    try:
        return json.dumps(ast_to_obj(program), indent=4)
    except RecursionError:
        raise AstEncodeError("program nesting too deep to serialize") from None


def program_from_obj(obj: Any) -> Program:
    if not isinstance(obj, dict) or not isinstance(obj.get("Statements"), list):
        raise AstDecodeError("expected an object with a Statements list")
    return Program(_statements(obj["Statements"]))


def _slot(obj: Any, node_type: str) -> Node:
    """Decode ``obj`` for a position that only admits ``node_type`` nodes."""
    node = ast_from_obj(obj)
    if node.node_type != node_type:
        raise AstDecodeError(f"{node.node_name} is not a valid {node_type}")
    return node


def _statements(objs: Any) -> Tuple[Node, ...]:
    if not isinstance(objs, list):
        raise AstDecodeError(f"expected a list of statements, got {objs!r}")
    return tuple(_slot(s, STATEMENT) for s in objs)


def _expressions(objs: Any) -> Tuple[Node, ...]:
    if not isinstance(objs, list):
        raise AstDecodeError(f"expected a list of expressions, got {objs!r}")
    return tuple(_slot(a, EXPRESSION) for a in objs)


def _string(obj: Dict[str, Any], key: str) -> str:
    value = obj[key]
    if not isinstance(value, str):
        raise AstDecodeError(f"{key} must be a string, got {value!r}")
    return value


def _integer(obj: Dict[str, Any], key: str) -> int:
    value = obj[key]
    # bool is an int subclass but never a literal
    if not isinstance(value, int) or isinstance(value, bool):
        raise AstDecodeError(f"{key} must be an integer, got {value!r}")
    return value


def _node_name(obj: Any) -> str:
    if not isinstance(obj, dict):
        raise AstDecodeError(f"Invalid AST object: {obj!r}")
    info = obj.get("NodeInfo")
    if not isinstance(info, dict) or "NodeName" not in info:
        raise AstDecodeError(f"AST object has no NodeInfo.NodeName: {obj!r}")
    return info["NodeName"]


def ast_from_obj(obj: Any) -> Node:
    t = _node_name(obj)
    try:
        if t == "ComplexExpression":
            # walk down the Right links, then fold back up
            links = []
            while _node_name(obj) == "ComplexExpression":
                links.append((_slot(obj["Left"], EXPRESSION), _string(obj, "Operator")))
                obj = obj["Right"]
            node = _slot(obj, EXPRESSION)
            for left, operator in reversed(links):
                node = ComplexExpression(left=left, operator=operator, right=node)
            return node
        if t == "VariableAssignment":
            return VariableAssignment(name=_string(obj, "VariableName"), value=_slot(obj["Value"], EXPRESSION))
        if t == "ReturnStatement":
            return ReturnStatement(value=_slot(obj["ReturnValue"], EXPRESSION))
        if t == "BlockStatement":
            return BlockStatement(statements=_statements(obj["Statements"]))
        if t == "LiteralExpression":
            return LiteralExpression(value=_integer(obj, "Value"))
        if t == "IdentifierExpression":
            return IdentifierExpression(name=_string(obj, "Value"))
        if t == "FunctionLiteral":
            body = ast_from_obj(obj["Body"])
            if not isinstance(body, BlockStatement):
                raise AstDecodeError("FunctionLiteral body must be a BlockStatement")
            params = obj["Parameters"]
            if not isinstance(params, list) or not all(isinstance(p, str) for p in params):
                raise AstDecodeError(f"Parameters must be a list of names, got {params!r}")
            return FunctionLiteral(parameters=tuple(params), body=body)
        if t == "FunctionCall":
            return FunctionCall(
                function_name=_string(obj, "FunctionName"),
                arguments=_expressions(obj["Arguments"]),
            )
    except (KeyError, TypeError) as e:
        raise AstDecodeError(f"malformed AST object: {e}") from e

    raise AstDecodeError(f"Unknown AST node type: {t}")


def load_program(text: str) -> Program:
    """Parse JSON text previously written by ``dump_program``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AstDecodeError(f"invalid JSON: {e}") from e
    except RecursionError:
        raise AstDecodeError("AST nesting too deep") from None
    try:
        return program_from_obj(data)
    except RecursionError:
        raise AstDecodeError("AST nesting too deep") from None
