"""CLI entry point for the mini-tun toolchain.

Usage:
    python -m minitun [-v|-vv|-vvv] tokens <program_file>
    python -m minitun [-v...] ast <program_file>
    python -m minitun [-v...] check <program_file>
    python -m minitun [-v...] run <program_file>
    python -m minitun [-v...] run --ast <ast_json_file>

Commands:
  tokens        Print the token list
  ast           Print the program AST as indented JSON
  check         Scope check the program and print "ok"
  run           Scope check and execute, then print the final bindings

Options:
  -v            Increase debug verbosity (can be repeated)
  --ast         Execute a previously emitted AST JSON file (run only)

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit status: 1 file open failure, 2 file read failure, 3 scan failure,
4 parse or AST file failure, 5 scope check failure, 6 execution failure.
"""

import argparse
import sys

from .ast_json import dump_program, load_program
from .checker import check
from .errors import ScanError, ParseError, CheckError, RuntimeFailure, AstDecodeError, AstEncodeError
from .interpreter import Interpreter, format_bindings
from .parser import parse
from .scanner import scan

EXIT_OPEN = 1
EXIT_READ = 2
EXIT_SCAN = 3
EXIT_PARSE = 4
EXIT_CHECK = 5
EXIT_EXEC = 6


def fail(message: str, code: int):
    print(f"error: {message}", file=sys.stderr)
    sys.exit(code)


def read_source(path: str) -> str:
    try:
        f = open(path, 'r', encoding='utf-8')
    except OSError as e:
        fail(f"failed to open {path}: {e}", EXIT_OPEN)
    with f:
        try:
            return f.read()
        except (OSError, UnicodeDecodeError) as e:
            fail(f"failed to read {path}: {e}", EXIT_READ)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='minitun', description="mini-tun language toolchain")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('command', choices=['tokens', 'ast', 'check', 'run'])
    parser.add_argument('program', help='mini-tun source file, or AST JSON file with --ast')
    parser.add_argument('--ast', action='store_true', help='treat the input as an AST JSON file (run only)')
    args = parser.parse_args(argv)

    if args.ast and args.command != 'run':
        parser.error('--ast is only valid with the run command')

    source = read_source(args.program)

    # Execute from AST JSON
    if args.ast:
        try:
            program = load_program(source)
        except AstDecodeError as e:
            fail(f"failed to parse program: {e}", EXIT_PARSE)
    else:
        try:
            tokens = scan(source)
        except ScanError as e:
            fail(f"failed to create parser: {e}", EXIT_SCAN)
        if args.command == 'tokens':
            for token in tokens:
                print(token)
            return
        try:
            program = parse(tokens)
        except ParseError as e:
            fail(f"failed to parse program: {e}", EXIT_PARSE)
        if args.command == 'ast':
            try:
                print(dump_program(program))
            except AstEncodeError as e:
                fail(f"failed to print AST: {e}", EXIT_PARSE)
            return

    try:
        check(program)
    except CheckError as e:
        fail(f"scope check error: {e}", EXIT_CHECK)
    if args.command == 'check':
        print('ok')
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        bindings = interpreter.run(program)
    except RuntimeFailure as e:
        fail(f"execute error: {e}", EXIT_EXEC)
    if bindings:
        print(format_bindings(bindings))


if __name__ == '__main__':
    main()
