"""Read-Eval-Print Loop for the Monkey language.

Each line read from `stdin` is parsed and evaluated in a single session
environment, so bindings from earlier lines stay visible. Syntax errors
and runtime errors are printed and the loop keeps going.
"""

from __future__ import annotations

from typing import Optional, TextIO

from .ast import LetStatement
from .interpreter import Interpreter
from .lexer import Lexer, tokenize
from .parser import Parser
from .token import TokenKind
from .types import Error


PROMPT = '>> '


def format_token(token) -> str:
    return f"{{Type:{token.kind} Literal:{token.literal}}}"


def print_parser_errors(out: TextIO, errors):
    out.write('parser errors:\n')
    for msg in errors:
        out.write(f"\t{msg}\n")


def eval_line(line: str, interpreter: Interpreter, out: TextIO):
    parser = Parser(Lexer(line))
    program = parser.parse_program()
    if parser.errors:
        print_parser_errors(out, parser.errors)
        return
    if not program.statements:
        return
    result = interpreter.run(program)
    if isinstance(program.statements[-1], LetStatement) and not isinstance(result, Error):
        return
    out.write(result.inspect() + '\n')


def start(stdin: TextIO, stdout: TextIO, interpreter: Optional[Interpreter] = None, tokens_only: bool = False):
    if interpreter is None:
        interpreter = Interpreter()
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            return
        if tokens_only:
            for tok in tokenize(line):
                if tok.kind is TokenKind.EOF:
                    break
                stdout.write(format_token(tok) + '\n')
            continue
        eval_line(line, interpreter, stdout)
