from pathlib import Path

from minitun.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_nested_calls():
    with open(EXAMPLES / 'program_4.tun', 'r', encoding='utf-8') as f:
        source = f.read()
    bindings = run_program(source)
    assert bindings['c'] == 3
    assert bindings['e'] == 4
