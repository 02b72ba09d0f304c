"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv] [<program_file>]
    python -m monkey [-v...] --tokens [<program_file>]
    python -m monkey --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --tokens      Print the tokens of the input instead of evaluating it
  --emit-ast    Parse the given program file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive session is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from . import repl
from .ast_json import ast_to_obj, ast_from_obj
from .errors import ParseError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse_program
from .types import Error, NULL


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def report_parse_errors(err: ParseError):
    print('parser errors:', file=sys.stderr)
    for msg in err.errors:
        print(f"\t{msg}", file=sys.stderr)


def execute(ast_program, verbosity: int) -> int:
    with Interpreter(debug_level=verbosity, debug_file='debug.txt') as interpreter:
        result = interpreter.run(ast_program)
    if isinstance(result, Error):
        print(result.inspect(), file=sys.stderr)
        return 1
    if result is not NULL:
        print(result.inspect())
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', action='store_true', help='print tokens instead of evaluating')
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(args.emit_ast)
        try:
            ast_program = parse_program(source)
        except ParseError as e:
            report_parse_errors(e)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if execute(ast_from_obj(data), args.v):
            sys.exit(1)
        return

    # Interactive session
    if not args.program:
        if args.v:
            interpreter = Interpreter(debug_level=args.v, debug_file='debug.txt')
        else:
            interpreter = Interpreter()
        with interpreter:
            repl.start(sys.stdin, sys.stdout, interpreter, tokens_only=args.tokens)
        return

    source = read_source(args.program)
    if args.tokens:
        for tok in tokenize(source):
            print(repl.format_token(tok))
        return
    try:
        ast_program = parse_program(source)
    except ParseError as e:
        report_parse_errors(e)
        sys.exit(1)
    if execute(ast_program, args.v):
        sys.exit(1)


if __name__ == '__main__':
    main()
