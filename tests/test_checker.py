import pytest

from minitun.ast import Program, VariableAssignment, ReturnStatement, LiteralExpression
from minitun.checker import check
from minitun.errors import CheckError, ScopeError
from minitun.parser import parse_program


def check_source(source):
    check(parse_program(source))


def test_sequential_definitions_pass():
    check_source('let a = 1\nlet b = a + 2\nlet f = function(x) { return x }\nlet c = f(b)')


def test_forward_reference():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let a = b\nlet b = 1')
    assert excinfo.value.name == 'b'


def test_self_reference():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let a = a')
    assert excinfo.value.name == 'a'


def test_self_reference_after_earlier_binding_is_fine():
    check_source('let a = 1\nlet a = a + 1')


def test_unknown_callee():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let r = g(1)')
    assert excinfo.value.name == 'g'


def test_call_arguments_are_checked():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let f = function(x) { return x }\nlet r = f(1, 2 + y)')
    assert excinfo.value.name == 'y'


def test_first_error_wins():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let r = p + q')
    assert excinfo.value.name == 'p'


def test_body_sees_parameters_and_earlier_locals():
    check_source('let f = function(x, y) {\n let s = x + y\n let t = s - 1\n return t\n}')


def test_body_local_used_before_definition():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let f = function(x) {\n return t\n let t = x\n}')
    assert excinfo.value.name == 't'
    assert excinfo.value.in_function


def test_body_cannot_see_globals():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let a = 1\nlet f = function(x) { return x + a }')
    assert excinfo.value.name == 'a'
    assert excinfo.value.in_function
    assert 'function body' in str(excinfo.value)


def test_body_cannot_call_global_function():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let id = function(x) { return x }\nlet f = function(y) { return id(y) }')
    assert excinfo.value.name == 'id'


def test_nested_function_does_not_see_enclosing_parameters():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let f = function(x) {\n let g = function(y) { return x + y }\n return 1\n}')
    assert excinfo.value.name == 'x'


def test_function_locals_do_not_leak():
    with pytest.raises(ScopeError) as excinfo:
        check_source('let f = function(x) { let inner = x\n return inner }\nlet r = inner')
    assert excinfo.value.name == 'inner'


def test_top_level_return_references_are_checked():
    check_source('let a = 1\nreturn a')
    with pytest.raises(ScopeError):
        check_source('return a')


def test_long_operator_chain():
    terms = ['a'] * 1000
    check_source('let a = 1\nlet r = ' + ' + '.join(terms))
    with pytest.raises(ScopeError) as excinfo:
        check_source('let a = 1\nlet r = ' + ' + '.join(terms + ['b']))
    assert excinfo.value.name == 'b'


@pytest.mark.parametrize('program', [
    Program((LiteralExpression(1),)),
    Program((VariableAssignment('a', ReturnStatement(LiteralExpression(1))),)),
])
def test_misplaced_node_is_a_check_error(program):
    with pytest.raises(CheckError) as excinfo:
        check(program)
    assert not isinstance(excinfo.value, ScopeError)
