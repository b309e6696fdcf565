import json

import pytest

from minitun.ast_json import ast_to_obj, dump_program, load_program
from minitun.errors import AstDecodeError, RuntimeFailure
from minitun.interpreter import Interpreter
from minitun.parser import parse_program


SOURCE = 'let a = 1\nlet add = function(a, b) {\n\treturn a + b\n}\nlet e = add(a, 2)'


def test_dump_is_indented_and_labelled():
    text = dump_program(parse_program('let a = 1'))
    assert json.loads(text) == {
        'Statements': [{
            'NodeInfo': {'NodeType': 'Statement', 'NodeName': 'VariableAssignment'},
            'VariableName': 'a',
            'Value': {
                'NodeInfo': {'NodeType': 'Expression', 'NodeName': 'LiteralExpression'},
                'Value': 1,
            },
        }],
    }
    assert '\n    "Statements"' in text


def test_function_literal_fields():
    fn = ast_to_obj(parse_program(SOURCE).statements[1].value)
    assert fn['Parameters'] == ['a', 'b']
    assert fn['Body']['NodeInfo']['NodeName'] == 'BlockStatement'
    ret = fn['Body']['Statements'][0]
    assert ret['ReturnValue']['Operator'] == '+'


def test_saved_ast_runs():
    program = parse_program(SOURCE)
    loaded = load_program(dump_program(program))
    assert loaded == program
    assert Interpreter().run(loaded)['e'] == 3


def test_loaded_unknown_operator_is_a_runtime_failure():
    text = dump_program(parse_program('let r = 2 + 3')).replace('"+"', '"*"')
    with pytest.raises(RuntimeFailure) as excinfo:
        Interpreter().run(load_program(text))
    assert excinfo.value.err.name == 'UnsupportedOperator'


@pytest.mark.parametrize('text', [
    'not json',
    '[]',
    '{"Statements": [{"NodeInfo": {"NodeName": "WhileLoop"}}]}',
    '{"Statements": [{"NodeInfo": {"NodeName": "VariableAssignment"}}]}',
    '{"Statements": [{"VariableName": "a"}]}',
    # an expression where a statement belongs
    '{"Statements":[{"NodeInfo":{"NodeType":"Expression","NodeName":"LiteralExpression"},"Value":1}]}',
    # a statement where an expression belongs
    '{"Statements": [{"NodeInfo": {"NodeName": "VariableAssignment"}, "VariableName": "a",'
    ' "Value": {"NodeInfo": {"NodeName": "ReturnStatement"},'
    ' "ReturnValue": {"NodeInfo": {"NodeName": "LiteralExpression"}, "Value": 1}}}]}',
    '{"Statements": [{"NodeInfo": {"NodeName": "ReturnStatement"}, "ReturnValue":'
    ' {"NodeInfo": {"NodeName": "FunctionCall"}, "FunctionName": "f", "Arguments":'
    ' [{"NodeInfo": {"NodeName": "BlockStatement"}, "Statements": []}]}}]}',
    '{"Statements": [{"NodeInfo": {"NodeName": "VariableAssignment"}, "VariableName": 7,'
    ' "Value": {"NodeInfo": {"NodeName": "LiteralExpression"}, "Value": 1}}]}',
])
def test_malformed_ast(text):
    with pytest.raises(AstDecodeError):
        load_program(text)


@pytest.mark.parametrize('value', ['1.9', '"12"', 'true', 'null'])
def test_literal_value_must_be_an_integer(value):
    text = (
        '{"Statements": [{"NodeInfo": {"NodeName": "VariableAssignment"}, "VariableName": "a",'
        ' "Value": {"NodeInfo": {"NodeName": "LiteralExpression"}, "Value": ' + value + '}}]}'
    )
    with pytest.raises(AstDecodeError):
        load_program(text)


def test_operator_chain_round_trip():
    program = parse_program('let r = ' + ' - '.join(['3'] * 101))
    loaded = load_program(dump_program(program))
    assert loaded == program
    assert Interpreter().run(loaded) == {'r': 3}
